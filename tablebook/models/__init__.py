"""Data models for the Tablebook system."""

from tablebook.models.reservation import (
    Reservation,
    ReservationList,
    ReservationPayload,
    ReservationStatus,
    TablePreference,
)
from tablebook.models.slots import SLOT_VALUES, TIME_SLOTS, TimeSlot

__all__ = [
    "SLOT_VALUES",
    "TIME_SLOTS",
    "Reservation",
    "ReservationList",
    "ReservationPayload",
    "ReservationStatus",
    "TablePreference",
    "TimeSlot",
]
