"""Persistence adapters for the reservation collection."""

from tablebook.config import Config, get_config
from tablebook.storage.base import (
    DEFAULT_STORAGE_KEY,
    KeyValueStorage,
    ReservationStorage,
    decode_reservations,
    encode_reservations,
)
from tablebook.storage.json_file import JsonFileStorage
from tablebook.storage.memory import MemoryStorage
from tablebook.storage.sqlite import SQLiteStorage


def create_storage(cfg: Config | None = None) -> ReservationStorage:
    """Build the storage adapter selected by configuration."""
    if cfg is None:
        cfg = get_config()

    if cfg.storage_backend == "sqlite":
        return SQLiteStorage(cfg.storage_path, key=cfg.storage_key)
    if cfg.storage_backend == "memory":
        return MemoryStorage(key=cfg.storage_key)
    return JsonFileStorage(cfg.storage_path, key=cfg.storage_key)


__all__ = [
    "DEFAULT_STORAGE_KEY",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "ReservationStorage",
    "SQLiteStorage",
    "create_storage",
    "decode_reservations",
    "encode_reservations",
]
