"""Bookable time slots."""

from pydantic import BaseModel, ConfigDict

FIRST_SLOT_HOUR = 11
LAST_SLOT_HOUR = 22
SLOT_MINUTES = 30


class TimeSlot(BaseModel):
    """A bookable time, stored as 24-hour HH:MM with a 12-hour label."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str


def format_time_label(value: str) -> str:
    """Convert "18:00" to "6:00 PM"."""
    hours, minutes = value.split(":")
    hour24 = int(hours)
    hour12 = hour24 - 12 if hour24 > 12 else 12 if hour24 == 0 else hour24
    ampm = "PM" if hour24 >= 12 else "AM"
    return f"{hour12}:{minutes} {ampm}"


def generate_time_slots() -> list[TimeSlot]:
    """Generate slots from 11:00 AM to 10:00 PM in 30-minute intervals."""
    slots = []
    for hour in range(FIRST_SLOT_HOUR, LAST_SLOT_HOUR + 1):
        for minute in range(0, 60, SLOT_MINUTES):
            if hour == LAST_SLOT_HOUR and minute > 0:
                break
            value = f"{hour:02d}:{minute:02d}"
            slots.append(TimeSlot(value=value, label=format_time_label(value)))
    return slots


TIME_SLOTS: list[TimeSlot] = generate_time_slots()
SLOT_VALUES: frozenset[str] = frozenset(slot.value for slot in TIME_SLOTS)
