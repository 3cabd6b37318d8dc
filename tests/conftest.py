"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest
import pytest_asyncio

from src.models import EventCreate
from src.services.participation import ParticipationService
from src.storage.memory import InMemoryStorage


def make_event_data(**overrides) -> EventCreate:
    """Build valid event input, overriding any field."""
    fields = {
        "name": "Hack Night",
        "description": "Late night hacking session",
        "date": datetime(2024, 5, 1, tzinfo=timezone.utc),
        "creator": "Wallet-A",
        "token_mint_address": "mint-hack-night",
        "qr_code_data": "pop-hacknite",
    }
    fields.update(overrides)
    return EventCreate(**fields)


@pytest.fixture
def event_data():
    """Factory for valid event input."""
    return make_event_data


@pytest.fixture
def storage():
    """Create in-memory storage for tests."""
    return InMemoryStorage()


@pytest.fixture
def service(storage):
    """Participation service on top of in-memory storage."""
    return ParticipationService(storage=storage, claim_base_url="https://pop.test/")


@pytest_asyncio.fixture
async def hack_night(storage):
    """Create the Hack Night event for tests."""
    return await storage.create_event(make_event_data())
