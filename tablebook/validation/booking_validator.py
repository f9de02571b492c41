"""Field-level validation of raw booking form input."""

import datetime as dt
import logging
import re
from collections.abc import Mapping
from typing import Any

import email_validator
from pydantic import BaseModel, Field

from tablebook.models import SLOT_VALUES, ReservationPayload, TablePreference

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[a-zA-Z\s\-']+$")
PHONE_PATTERN = re.compile(r"^\(?([0-9]{3})\)?[-. ]?([0-9]{3})[-. ]?([0-9]{4})$")
PARTY_SIZE_PATTERN = re.compile(r"[0-9]+")

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
MAX_EMAIL_LENGTH = 100
MIN_PARTY_SIZE = 1
MAX_PARTY_SIZE = 12
MAX_SPECIAL_REQUESTS_LENGTH = 500

# Form field name -> payload attribute name
FORM_FIELDS = {
    "customerName": "customer_name",
    "phone": "phone",
    "email": "email",
    "date": "date",
    "time": "time",
    "partySize": "party_size",
    "tablePreference": "table_preference",
    "specialRequests": "special_requests",
}


class ValidationResult(BaseModel):
    """Outcome of validating a booking form."""

    errors: dict[str, str] = Field(
        default_factory=dict, description="Form field name -> first error message"
    )
    payload: ReservationPayload | None = Field(
        None, description="Normalized payload when validation passed"
    )

    @property
    def is_valid(self) -> bool:
        return not self.errors and self.payload is not None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class BookingValidator:
    """Validates raw booking input before anything reaches the store.

    Each ``validate_*`` check returns ``(is_valid, error_message)``; the
    normalized value is produced separately by :meth:`validate`.
    """

    @staticmethod
    def validate_customer_name(value: Any) -> tuple[bool, str | None]:
        if not isinstance(value, str) or len(value) < MIN_NAME_LENGTH:
            return False, "Name must be at least 2 characters"
        if len(value) > MAX_NAME_LENGTH:
            return False, "Name must be less than 50 characters"
        if not NAME_PATTERN.fullmatch(value):
            return (
                False,
                "Name can only contain letters, spaces, hyphens, and apostrophes",
            )
        return True, None

    @staticmethod
    def validate_phone_number(value: Any) -> tuple[bool, str | None]:
        """Accept 10-digit North American numbers.

        Parentheses around the area code and a dash, dot or space between
        groups are optional, e.g. ``(555) 123-4567`` or ``555.123.4567``.
        """
        if not isinstance(value, str) or not PHONE_PATTERN.fullmatch(value):
            return False, "Please enter a valid 10-digit phone number"
        return True, None

    @staticmethod
    def validate_email(value: Any) -> tuple[bool, str | None]:
        if not isinstance(value, str) or not value:
            return False, "Please enter a valid email address"
        try:
            email_validator.validate_email(value, check_deliverability=False)
        except email_validator.EmailNotValidError:
            return False, "Please enter a valid email address"
        if len(value) > MAX_EMAIL_LENGTH:
            return False, "Email must be less than 100 characters"
        return True, None

    @staticmethod
    def parse_date(value: Any) -> dt.date | None:
        """Parse a date object or an ISO date or datetime string."""
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, dt.date):
            return value
        if not isinstance(value, str):
            return None

        text = value.strip()
        try:
            return dt.date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return dt.datetime.fromisoformat(text).date()
        except ValueError:
            return None

    @classmethod
    def validate_date(cls, value: Any) -> tuple[bool, str | None]:
        if _is_blank(value):
            return False, "Please select a date"
        if cls.parse_date(value) is None:
            return False, "Please enter a valid date"
        return True, None

    @staticmethod
    def validate_time(value: Any) -> tuple[bool, str | None]:
        if _is_blank(value):
            return False, "Please select a time"
        if not isinstance(value, str) or value not in SLOT_VALUES:
            return False, "Please select a valid time slot"
        return True, None

    @staticmethod
    def parse_party_size(value: Any) -> int | None:
        """Coerce an int or a numeric string such as ``"4"`` to int."""
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and PARTY_SIZE_PATTERN.fullmatch(value.strip()):
            return int(value.strip())
        return None

    @classmethod
    def validate_party_size(cls, value: Any) -> tuple[bool, str | None]:
        if _is_blank(value):
            return False, "Please select party size"
        size = cls.parse_party_size(value)
        if size is None or not MIN_PARTY_SIZE <= size <= MAX_PARTY_SIZE:
            return (
                False,
                f"Party size must be between {MIN_PARTY_SIZE} and {MAX_PARTY_SIZE}",
            )
        return True, None

    @staticmethod
    def validate_table_preference(value: Any) -> tuple[bool, str | None]:
        if _is_blank(value):
            return False, "Please select table preference"
        try:
            TablePreference(value)
        except ValueError:
            return False, "Please select a valid table preference"
        return True, None

    @staticmethod
    def validate_special_requests(value: Any) -> tuple[bool, str | None]:
        if value is None:
            return True, None
        if not isinstance(value, str):
            return False, "Special requests must be text"
        if len(value) > MAX_SPECIAL_REQUESTS_LENGTH:
            return False, "Special requests must be less than 500 characters"
        return True, None

    @classmethod
    def validate(cls, raw: Mapping[str, Any]) -> ValidationResult:
        """Validate every field of a booking form.

        Args:
            raw: Form values keyed by camelCase form names (snake_case also accepted)

        Returns:
            ValidationResult with either a normalized payload or field errors
        """
        values = {
            form_name: raw.get(form_name, raw.get(attr_name))
            for form_name, attr_name in FORM_FIELDS.items()
        }

        checks = {
            "customerName": cls.validate_customer_name,
            "phone": cls.validate_phone_number,
            "email": cls.validate_email,
            "date": cls.validate_date,
            "time": cls.validate_time,
            "partySize": cls.validate_party_size,
            "tablePreference": cls.validate_table_preference,
            "specialRequests": cls.validate_special_requests,
        }

        errors: dict[str, str] = {}
        for form_name, check in checks.items():
            is_valid, error = check(values[form_name])
            if not is_valid:
                errors[form_name] = error

        if errors:
            logger.info(f"Booking rejected: invalid {', '.join(errors)}")
            return ValidationResult(errors=errors)

        payload = ReservationPayload(
            customer_name=values["customerName"],
            phone=values["phone"],
            email=values["email"],
            date=cls.parse_date(values["date"]),
            time=values["time"],
            party_size=cls.parse_party_size(values["partySize"]),
            table_preference=TablePreference(values["tablePreference"]),
            special_requests=values["specialRequests"] or "",
        )
        return ValidationResult(payload=payload)
