"""Booking intake: validates raw input and hands it to the reservation store."""

import logging
from collections.abc import Mapping
from datetime import date, timedelta
from typing import Any

from pydantic import BaseModel, Field

from tablebook.errors import ReservationCancelledError
from tablebook.models import Reservation
from tablebook.services.reservation_store import ReservationStore
from tablebook.services.reservation_view import confirmation_message
from tablebook.validation import BookingValidator

logger = logging.getLogger(__name__)


class BookingOutcome(BaseModel):
    """Result of submitting or amending a booking form."""

    success: bool = Field(..., description="Whether the store was changed")
    reservation: Reservation | None = Field(
        None, description="Stored reservation on success"
    )
    errors: dict[str, str] = Field(
        default_factory=dict, description="Form field name -> error message"
    )
    message: str = Field(..., description="Message for the guest")


class BookingIntake:
    """Gatekeeper between raw user input and the reservation store."""

    def __init__(
        self,
        store: ReservationStore,
        validator: type[BookingValidator] = BookingValidator,
    ) -> None:
        self.store = store
        self.validator = validator

    def submit(self, raw: Mapping[str, Any]) -> BookingOutcome:
        """Validate a booking form and create the reservation.

        Nothing is written to the store when validation fails.

        Args:
            raw: Form values keyed by field name

        Returns:
            BookingOutcome with the new reservation or field errors
        """
        result = self.validator.validate(raw)
        if not result.is_valid:
            return BookingOutcome(
                success=False,
                errors=result.errors,
                message="Please correct the highlighted fields.",
            )

        reservation = self.store.add(result.payload)
        return BookingOutcome(
            success=True,
            reservation=reservation,
            message=confirmation_message(reservation),
        )

    def amend(self, reservation_id: str, raw: Mapping[str, Any]) -> BookingOutcome:
        """Validate an edited form and replace the stored booking details.

        The id, creation time and status of the stored reservation are kept.

        Raises:
            ReservationNotFoundError: If the reservation does not exist
            ReservationCancelledError: If the reservation was cancelled
        """
        current = self.store.get(reservation_id)
        if not current.is_active:
            raise ReservationCancelledError(reservation_id)

        result = self.validator.validate(raw)
        if not result.is_valid:
            return BookingOutcome(
                success=False,
                errors=result.errors,
                message="Please correct the highlighted fields.",
            )

        updated = Reservation(
            **result.payload.model_dump(),
            id=current.id,
            created_at=current.created_at,
            status=current.status,
        )
        reservation = self.store.update(updated)
        return BookingOutcome(
            success=True,
            reservation=reservation,
            message=f"Reservation for {reservation.customer_name} has been updated.",
        )

    def cancel(self, reservation_id: str) -> BookingOutcome:
        """Cancel a reservation.

        Raises:
            ReservationNotFoundError: If the reservation does not exist
        """
        reservation = self.store.cancel(reservation_id)
        return BookingOutcome(
            success=True,
            reservation=reservation,
            message=f"Reservation for {reservation.customer_name} has been cancelled.",
        )


def booking_window(days: int, today: date | None = None) -> tuple[date, date]:
    """First and last date guests may pick."""
    start = today or date.today()
    return start, start + timedelta(days=days)
