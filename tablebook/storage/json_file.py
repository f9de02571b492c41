"""JSON file key-value storage."""

import json
import logging
import os
import tempfile
from pathlib import Path

from tablebook.errors import StorageCorruptedError, StorageError
from tablebook.storage.base import DEFAULT_STORAGE_KEY, KeyValueStorage

logger = logging.getLogger(__name__)


class JsonFileStorage(KeyValueStorage):
    """Stores string values in a JSON object file, one entry per key.

    The file mirrors browser local storage: every value is itself a string,
    so the reservation array is JSON encoded inside the outer object.
    """

    def __init__(self, path: str | Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        super().__init__(key)
        self.path = Path(path)

    def _read_items(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StorageCorruptedError(f"{self.path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        if not text.strip():
            return {}

        try:
            items = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageCorruptedError(f"{self.path} is not valid JSON: {e}") from e

        if not isinstance(items, dict):
            raise StorageCorruptedError(f"{self.path} does not contain a JSON object")
        return items

    def get_item(self, key: str) -> str | None:
        value = self._read_items().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageCorruptedError(f"Value for '{key}' in {self.path} is not a string")
        return value

    def set_item(self, key: str, value: str) -> None:
        try:
            items = self._read_items()
        except StorageCorruptedError:
            logger.warning(f"Overwriting unreadable storage file {self.path}")
            items = {}
        items[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Cannot write {self.path}: {e}") from e
