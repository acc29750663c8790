"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from studiomate.matching.models import Opportunity
from studiomate.profile.models import ArtistProfile
from studiomate.storage.database import init_db, reset_engine


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for deadline calculations."""
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sydney_artist() -> ArtistProfile:
    """Emerging Sydney painter interested in Australia."""
    return ArtistProfile(
        name="Alex Painter",
        email="alex@example.com",
        location="Sydney",
        interestedRegions="australia",
        careerStage="emerging",
        artisticFocus="painting",
    )


@pytest.fixture
def make_opportunity(now) -> Callable[..., Opportunity]:
    """Factory for opportunities that score zero unless fields are overridden."""
    counter = {"n": 0}

    def _make(days: float = 200, **fields: Any) -> Opportunity:
        counter["n"] += 1
        data = {
            "id": f"opp-{counter['n']}",
            "title": f"Opportunity {counter['n']}",
            "deadline": now + timedelta(days=days),
        }
        data.update(fields)
        return Opportunity(**data)

    return _make


@pytest.fixture
def db(tmp_path):
    """Fresh SQLite database for each test."""
    reset_engine()
    init_db(tmp_path / "test.db")
    yield tmp_path / "test.db"
    reset_engine()
