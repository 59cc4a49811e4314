from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lightsync.config import ACCESSORIES_FILENAME, SNAPSHOT_FILENAME
from lightsync.models import Accessory


class _AccessoryFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    accessories: list[Accessory] = Field(default_factory=list)


def _read_json(path: Path) -> object:
    try:
        with path.open("r") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in accessories file: {path}\n{exc}") from exc


class Database:
    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._accessories_path = data_dir / ACCESSORIES_FILENAME
        self._snapshot_path = data_dir / SNAPSHOT_FILENAME

    @property
    def path(self) -> Path:
        return self._data_dir

    @property
    def accessories_path(self) -> Path:
        return self._accessories_path

    @property
    def snapshot_path(self) -> Path:
        return self._snapshot_path

    def ensure_dirs(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)

    def load_accessories(self) -> list[Accessory]:
        if not self._accessories_path.exists():
            return []

        data = _read_json(self._accessories_path)
        try:
            return _AccessoryFile.model_validate(data).accessories
        except ValidationError as exc:
            raise ValueError(
                f"Invalid accessories file: {self._accessories_path}\n{exc}"
            ) from exc

    def save_accessories(self, accessories: Iterable[Accessory]) -> None:
        self.ensure_dirs()
        payload = _AccessoryFile(accessories=list(accessories))
        with self._accessories_path.open("w") as handle:
            json.dump(payload.model_dump(mode="json", by_alias=True), handle, indent=2)

    def init(self, force: bool = False) -> bool:
        """Create the data directory; returns False if it was already set up."""
        existed = self._accessories_path.exists()
        self.ensure_dirs()
        if existed and not force:
            return False
        self.save_accessories([])
        return True
