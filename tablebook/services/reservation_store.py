"""Reservation store: owner of the reservation collection and its persisted mirror."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from threading import RLock

from tablebook.errors import (
    InvalidStatusTransitionError,
    ReservationNotFoundError,
    StorageCorruptedError,
)
from tablebook.models import Reservation, ReservationPayload, ReservationStatus
from tablebook.storage import ReservationStorage

logger = logging.getLogger(__name__)

Listener = Callable[["ReservationStore"], None]


class ReservationStore:
    """Ordered collection of reservations, mirrored to storage on every change.

    All reads and writes go through this object. Mutations are serialized
    with a lock and each successful one saves the whole collection, then
    notifies subscribers.
    """

    def __init__(self, storage: ReservationStorage) -> None:
        """Initialize the store.

        Args:
            storage: Persistence adapter that owns the stored slot
        """
        self.storage = storage
        self._reservations: list[Reservation] = []
        self._listeners: list[Listener] = []
        self._lock = RLock()

    @staticmethod
    def generate_reservation_id() -> str:
        """Generate a reservation identifier.

        Returns:
            ID of the form res_<epoch millis>_<9 random chars>
        """
        return f"res_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"

    def load(self) -> None:
        """Replace the in-memory collection with what storage holds.

        A missing slot yields an empty collection. Corrupted data is logged
        and also yields an empty collection.
        """
        with self._lock:
            try:
                reservations = self.storage.load()
            except StorageCorruptedError:
                logger.warning(
                    "Stored reservations are unreadable - starting empty",
                    exc_info=True,
                )
                reservations = []

            self._reservations = list(reservations)
            logger.info(f"Loaded {len(self._reservations)} reservations")

    def add(self, payload: ReservationPayload) -> Reservation:
        """Create a confirmed reservation from a validated payload.

        Args:
            payload: Booking details that already passed validation

        Returns:
            The stored reservation with id, created_at and status assigned
        """
        with self._lock:
            existing_ids = {r.id for r in self._reservations}
            reservation_id = self.generate_reservation_id()
            while reservation_id in existing_ids:
                reservation_id = self.generate_reservation_id()

            reservation = Reservation(
                **payload.model_dump(),
                id=reservation_id,
                created_at=datetime.now(timezone.utc),
                status=ReservationStatus.CONFIRMED,
            )
            self._commit([*self._reservations, reservation])

        logger.info(
            f"Created reservation {reservation.id} for party of {reservation.party_size} "
            f"on {reservation.date.isoformat()} at {reservation.time}"
        )
        self._notify()
        return reservation

    def update(self, reservation: Reservation) -> Reservation:
        """Replace the stored record that has the same id.

        The stored created_at is kept. A cancelled reservation cannot be
        confirmed again.

        Args:
            reservation: Full replacement record

        Returns:
            The record as stored

        Raises:
            ReservationNotFoundError: If no record has this id
            InvalidStatusTransitionError: If the update would revive a cancelled record
        """
        with self._lock:
            index = self._index_of(reservation.id)
            current = self._reservations[index]

            if (
                current.status == ReservationStatus.CANCELLED
                and reservation.status != ReservationStatus.CANCELLED
            ):
                raise InvalidStatusTransitionError(
                    reservation.id, current.status.value, reservation.status.value
                )

            if reservation.created_at != current.created_at:
                reservation = reservation.model_copy(
                    update={"created_at": current.created_at}
                )

            updated = list(self._reservations)
            updated[index] = reservation
            self._commit(updated)

        logger.info(f"Updated reservation {reservation.id}")
        self._notify()
        return reservation

    def cancel(self, reservation_id: str) -> Reservation:
        """Mark a reservation as cancelled.

        Cancelling an already cancelled reservation changes nothing.

        Raises:
            ReservationNotFoundError: If no record has this id
        """
        with self._lock:
            index = self._index_of(reservation_id)
            current = self._reservations[index]
            if current.status == ReservationStatus.CANCELLED:
                logger.debug(f"Reservation {reservation_id} already cancelled")
                return current

            cancelled = current.model_copy(
                update={"status": ReservationStatus.CANCELLED}
            )
            updated = list(self._reservations)
            updated[index] = cancelled
            self._commit(updated)

        logger.info(f"Cancelled reservation {reservation_id}")
        self._notify()
        return cancelled

    def get(self, reservation_id: str) -> Reservation:
        """Get a reservation by id.

        Raises:
            ReservationNotFoundError: If no record has this id
        """
        with self._lock:
            return self._reservations[self._index_of(reservation_id)]

    def list(self) -> list[Reservation]:
        """All reservations in insertion order."""
        with self._lock:
            return list(self._reservations)

    def list_active(self) -> list[Reservation]:
        """Confirmed reservations in insertion order."""
        with self._lock:
            return [r for r in self._reservations if r.is_active]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with the store after every change.

        Returns:
            Function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._reservations)

    def _index_of(self, reservation_id: str) -> int:
        for index, reservation in enumerate(self._reservations):
            if reservation.id == reservation_id:
                return index
        raise ReservationNotFoundError(reservation_id)

    def _commit(self, reservations: list[Reservation]) -> None:
        self.storage.save(reservations)
        self._reservations = reservations

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(self)
            except Exception:
                logger.exception(f"Reservation listener {listener!r} failed")
