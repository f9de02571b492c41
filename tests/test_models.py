"""Tests for data models."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from tablebook.models import (
    SLOT_VALUES,
    TIME_SLOTS,
    Reservation,
    ReservationPayload,
    ReservationStatus,
    TablePreference,
)
from tablebook.models.slots import format_time_label


def make_payload(**overrides) -> ReservationPayload:
    fields = {
        "customer_name": "Jane Doe",
        "phone": "(555) 123-4567",
        "email": "jane@example.com",
        "date": date(2025, 3, 1),
        "time": "18:00",
        "party_size": 4,
        "table_preference": TablePreference.PATIO,
    }
    fields.update(overrides)
    return ReservationPayload(**fields)


class TestReservationPayload:
    """Tests for the ReservationPayload model."""

    def test_create_payload(self):
        """Test creating a payload with defaults."""
        payload = make_payload()

        assert payload.customer_name == "Jane Doe"
        assert payload.party_size == 4
        assert payload.table_preference == TablePreference.PATIO
        assert payload.special_requests == ""

    def test_payload_accepts_camel_case(self):
        """Test that the camelCase form layout populates the model."""
        payload = ReservationPayload.model_validate(
            {
                "customerName": "Jane Doe",
                "phone": "(555) 123-4567",
                "email": "jane@example.com",
                "date": "2025-03-01",
                "time": "18:00",
                "partySize": 4,
                "tablePreference": "patio",
                "specialRequests": "Window seat please",
            }
        )

        assert payload.date == date(2025, 3, 1)
        assert payload.special_requests == "Window seat please"

    def test_payload_immutable(self):
        """Test that payload is frozen/immutable."""
        payload = make_payload()

        with pytest.raises((ValidationError, AttributeError)):
            payload.customer_name = "New Name"

    def test_invalid_party_size(self):
        """Test that out-of-range party size raises validation error."""
        with pytest.raises(ValidationError):
            make_payload(party_size=0)

        with pytest.raises(ValidationError):
            make_payload(party_size=13)


class TestReservation:
    """Tests for the Reservation model."""

    @pytest.fixture
    def reservation(self):
        return Reservation(
            **make_payload().model_dump(),
            id="res_1740830400000_abc123def",
            created_at=datetime(2025, 2, 1, 12, 30, tzinfo=timezone.utc),
        )

    def test_defaults_to_confirmed(self, reservation):
        """Test that a new reservation is confirmed and active."""
        assert reservation.status == ReservationStatus.CONFIRMED
        assert reservation.is_active

    def test_json_layout_uses_camel_case(self, reservation):
        """Test the persisted field names."""
        data = reservation.to_json_dict()

        assert set(data) == {
            "id",
            "customerName",
            "phone",
            "email",
            "date",
            "time",
            "partySize",
            "tablePreference",
            "specialRequests",
            "createdAt",
            "status",
        }
        assert data["date"] == "2025-03-01"
        assert data["partySize"] == 4
        assert data["tablePreference"] == "patio"
        assert data["status"] == "confirmed"
        assert data["createdAt"].startswith("2025-02-01T12:30:00")

    def test_payload_strips_identity(self, reservation):
        """Test extracting the booking details."""
        assert reservation.payload() == make_payload()


class TestTablePreference:
    """Tests for the TablePreference enum."""

    def test_values(self):
        """Test that all expected preference values exist."""
        assert [p.value for p in TablePreference] == [
            "window",
            "patio",
            "indoor",
            "no_preference",
        ]

    def test_labels(self):
        assert TablePreference.WINDOW.label == "Window"
        assert TablePreference.NO_PREFERENCE.label == "No Preference"


class TestTimeSlots:
    """Tests for generated time slots."""

    def test_slot_range(self):
        """Test slots run from 11:00 to 22:00 every 30 minutes."""
        assert len(TIME_SLOTS) == 23
        assert TIME_SLOTS[0].value == "11:00"
        assert TIME_SLOTS[1].value == "11:30"
        assert TIME_SLOTS[-1].value == "22:00"
        assert "22:30" not in SLOT_VALUES
        assert "10:45" not in SLOT_VALUES

    def test_slot_labels(self):
        labels = {slot.value: slot.label for slot in TIME_SLOTS}

        assert labels["11:00"] == "11:00 AM"
        assert labels["12:00"] == "12:00 PM"
        assert labels["12:30"] == "12:30 PM"
        assert labels["18:00"] == "6:00 PM"
        assert labels["22:00"] == "10:00 PM"

    def test_format_midnight(self):
        assert format_time_label("00:30") == "12:30 AM"
