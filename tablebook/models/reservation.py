"""Data models for restaurant reservations."""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class ReservationStatus(str, Enum):
    """Status of a reservation. Only confirmed -> cancelled is allowed."""

    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class TablePreference(str, Enum):
    """Seating area requested by the guest."""

    WINDOW = "window"
    PATIO = "patio"
    INDOOR = "indoor"
    NO_PREFERENCE = "no_preference"

    @property
    def label(self) -> str:
        """Human readable label, e.g. "No Preference"."""
        return self.value.replace("_", " ").title()


class ReservationPayload(BaseModel):
    """Validated booking details, before the store assigns identity."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    customer_name: str = Field(..., description="Guest full name")
    phone: str = Field(..., description="Contact phone number")
    email: str = Field(..., description="Contact email address")
    date: dt.date = Field(..., description="Reservation date")
    time: str = Field(
        ..., pattern=r"^\d{2}:\d{2}$", description="Slot start time (HH:MM)"
    )
    party_size: int = Field(..., ge=1, le=12, description="Number of people")
    table_preference: TablePreference = Field(..., description="Seating preference")
    special_requests: str = Field(
        default="", max_length=500, description="Special requests or notes"
    )


class Reservation(ReservationPayload):
    """A stored reservation."""

    id: str = Field(..., description="Unique reservation identifier")
    created_at: dt.datetime = Field(..., description="When the booking was made")
    status: ReservationStatus = Field(
        default=ReservationStatus.CONFIRMED, description="Reservation status"
    )

    @property
    def is_active(self) -> bool:
        return self.status == ReservationStatus.CONFIRMED

    def payload(self) -> ReservationPayload:
        """Return the booking details without identity fields."""
        return ReservationPayload(
            **self.model_dump(exclude={"id", "created_at", "status"})
        )

    def to_json_dict(self) -> dict:
        """Serialize using the persisted camelCase layout."""
        return self.model_dump(mode="json", by_alias=True)


ReservationList = TypeAdapter(list[Reservation])
