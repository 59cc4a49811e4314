from __future__ import annotations

import os

import coloredlogs  # type: ignore[import]

LOG_LEVEL_ENV_VARS = ("LIGHTSYNC_LOGLEVEL", "LOGLEVEL")

DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"


def resolve_level(level: str | None = None) -> str:
    if level:
        return level.upper()
    for name in LOG_LEVEL_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value.upper()
    return "INFO"


def setup_logging(level: str | None = None) -> None:
    coloredlogs.install(
        level=resolve_level(level),
        fmt=DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT,
    )
