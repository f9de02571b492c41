"""Exception hierarchy for Tablebook."""


class TablebookError(Exception):
    """Base class for all Tablebook errors."""


class ReservationNotFoundError(TablebookError, LookupError):
    """Raised when an operation targets a reservation id the store does not hold."""

    def __init__(self, reservation_id: str) -> None:
        super().__init__(f"Reservation {reservation_id} not found")
        self.reservation_id = reservation_id


class InvalidStatusTransitionError(TablebookError):
    """Raised when an update would move a reservation out of the cancelled state."""

    def __init__(self, reservation_id: str, current: str, requested: str) -> None:
        super().__init__(
            f"Reservation {reservation_id} cannot move from {current} to {requested}"
        )
        self.reservation_id = reservation_id
        self.current = current
        self.requested = requested


class StorageError(TablebookError):
    """Raised when a persistence adapter cannot read or write its slot."""


class StorageCorruptedError(StorageError):
    """Raised when stored reservation data exists but cannot be parsed."""


class ReservationCancelledError(TablebookError):
    """Raised when booking details of a cancelled reservation are edited."""

    def __init__(self, reservation_id: str) -> None:
        super().__init__(f"Reservation {reservation_id} is cancelled and cannot be changed")
        self.reservation_id = reservation_id
