"""Services for the Tablebook system."""

from tablebook.services.booking_service import (
    BookingIntake,
    BookingOutcome,
    booking_window,
)
from tablebook.services.reservation_store import ReservationStore

__all__ = ["BookingIntake", "BookingOutcome", "ReservationStore", "booking_window"]
