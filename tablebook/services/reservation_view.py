"""Read-side helpers for presenting reservations: search, ordering and labels."""

import datetime as dt
from collections.abc import Iterable

from tablebook.models import Reservation, TablePreference
from tablebook.models.slots import format_time_label


def search_reservations(
    reservations: Iterable[Reservation], term: str | None
) -> list[Reservation]:
    """Filter reservations by name, phone, email or date.

    Name and email match case-insensitively; phone and date match the raw
    term as a substring. An empty term matches everything.
    """
    if not term:
        return list(reservations)

    term_lower = term.lower()
    return [
        r
        for r in reservations
        if term_lower in r.customer_name.lower()
        or term in r.phone
        or term_lower in r.email.lower()
        or term in r.date.isoformat()
    ]


def sort_chronologically(reservations: Iterable[Reservation]) -> list[Reservation]:
    """Order reservations by date, then time slot."""
    return sorted(reservations, key=lambda r: (r.date, r.time))


def summarize(reservations: Iterable[Reservation]) -> dict[str, int]:
    """Count total and active reservations."""
    items = list(reservations)
    return {"total": len(items), "active": sum(1 for r in items if r.is_active)}


def short_reference(reservation_id: str) -> str:
    """Last 8 characters of the id, shown as the booking reference."""
    return reservation_id[-8:]


def table_preference_label(preference: TablePreference | str) -> str:
    try:
        return TablePreference(preference).label
    except ValueError:
        return str(preference)


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_long_date(value: dt.date) -> str:
    """Format a date as e.g. "March 1st, 2025"."""
    return f"{value.strftime('%B')} {_ordinal(value.day)}, {value.year}"


def party_label(party_size: int) -> str:
    return f"{party_size} {'person' if party_size == 1 else 'people'}"


def confirmation_message(reservation: Reservation) -> str:
    """Message shown to the guest after a successful booking."""
    return (
        f"Your table for {reservation.party_size} has been reserved for "
        f"{format_long_date(reservation.date)} at {format_time_label(reservation.time)}."
    )


def format_reservation(reservation: Reservation) -> str:
    """Multi-line plain text summary of a reservation."""
    lines = [
        f"{reservation.customer_name} [{reservation.status.value}] "
        f"#{short_reference(reservation.id)}",
        f"  {format_long_date(reservation.date)} at {format_time_label(reservation.time)}"
        f" - {party_label(reservation.party_size)}, "
        f"{table_preference_label(reservation.table_preference)}",
        f"  {reservation.phone} | {reservation.email}",
    ]
    if reservation.special_requests:
        lines.append(f"  Special requests: {reservation.special_requests}")
    return "\n".join(lines)
