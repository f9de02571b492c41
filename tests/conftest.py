"""Shared fixtures for Tablebook tests."""

import pytest

from tablebook.services import BookingIntake, ReservationStore
from tablebook.storage import MemoryStorage


@pytest.fixture
def jane_form():
    """A valid booking form as submitted by a guest."""
    return {
        "customerName": "Jane Doe",
        "phone": "(555) 123-4567",
        "email": "jane@example.com",
        "date": "2025-03-01",
        "time": "18:00",
        "partySize": 4,
        "tablePreference": "patio",
    }


@pytest.fixture
def storage():
    """Fresh in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def store(storage):
    """Loaded store over in-memory storage."""
    reservation_store = ReservationStore(storage)
    reservation_store.load()
    return reservation_store


@pytest.fixture
def intake(store):
    return BookingIntake(store)
