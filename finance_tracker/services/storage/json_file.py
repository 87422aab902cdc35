"""
JSON File Key-Value Store

All keys live in one JSON object on disk. Every write rewrites the file
through a temporary sibling and an atomic rename, so a crash mid-write leaves
the previous contents intact.
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

import structlog

from finance_tracker.services.storage.interface import KeyValueStore, StorageError


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store persisted as a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}

        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read store file {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Store file {self._path} does not hold a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            logger.error("store_write_failed", path=str(self._path), error=str(e))
            raise StorageError(f"Could not write store file {self._path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> bool:
        data = self._read_all()
        if key not in data:
            return False
        del data[key]
        self._write_all(data)
        return True
