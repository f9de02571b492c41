"""Persistence interface for the reservation collection."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from pydantic import ValidationError

from tablebook.errors import StorageCorruptedError
from tablebook.models import Reservation, ReservationList

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "restaurant-reservations"


class ReservationStorage(ABC):
    """Loads and saves the whole reservation collection."""

    @abstractmethod
    def load(self) -> list[Reservation]:
        """Return the stored collection, or an empty list if nothing is stored.

        Raises:
            StorageCorruptedError: If stored data exists but cannot be parsed
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, reservations: list[Reservation]) -> None:
        raise NotImplementedError


class KeyValueStorage(ReservationStorage):
    """Stores the collection as a JSON array under a single string key.

    Subclasses only provide raw string access to the slot.
    """

    def __init__(self, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.key = key

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def load(self) -> list[Reservation]:
        raw = self.get_item(self.key)
        if raw is None:
            logger.debug(f"No stored reservations under '{self.key}'")
            return []
        return decode_reservations(raw)

    def save(self, reservations: list[Reservation]) -> None:
        self.set_item(self.key, encode_reservations(reservations))
        logger.debug(f"Saved {len(reservations)} reservations under '{self.key}'")


def encode_reservations(reservations: list[Reservation]) -> str:
    """Serialize reservations to the persisted JSON array layout."""
    return ReservationList.dump_json(reservations, by_alias=True).decode("utf-8")


def decode_reservations(raw: str) -> list[Reservation]:
    """Parse a persisted JSON array back into reservations.

    Raises:
        StorageCorruptedError: If the text is not a valid reservation array
            or two records share an id
    """
    try:
        reservations = ReservationList.validate_json(raw)
    except ValidationError as e:
        raise StorageCorruptedError(
            f"Stored reservations could not be parsed: {e.error_count()} error(s)"
        ) from e

    seen: set[str] = set()
    for reservation in reservations:
        if reservation.id in seen:
            raise StorageCorruptedError(
                f"Stored reservations contain duplicate id {reservation.id}"
            )
        seen.add(reservation.id)
    return reservations
