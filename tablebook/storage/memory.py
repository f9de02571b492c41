"""In-memory key-value storage."""

from tablebook.storage.base import DEFAULT_STORAGE_KEY, KeyValueStorage


class MemoryStorage(KeyValueStorage):
    """Keeps serialized data in a dict. Nothing survives the process."""

    def __init__(
        self, key: str = DEFAULT_STORAGE_KEY, items: dict[str, str] | None = None
    ) -> None:
        super().__init__(key)
        self.items: dict[str, str] = items if items is not None else {}

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
