from __future__ import annotations

from .database import Database
from .registry import FileAccessoryRegistry

__all__ = ["Database", "FileAccessoryRegistry"]
