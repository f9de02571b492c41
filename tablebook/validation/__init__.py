"""Validation of raw booking input."""

from tablebook.validation.booking_validator import (
    BookingValidator,
    ValidationResult,
)

__all__ = ["BookingValidator", "ValidationResult"]
