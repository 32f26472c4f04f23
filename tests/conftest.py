from datetime import UTC, datetime
from pathlib import Path

import pytest

from src.adapters.clock import FixedClock
from src.adapters.memory import InMemoryFacetofaceRepo, seed_repo
from src.adapters.time_display import DisplayTimeAdapter
from src.components.html import HtmlWriter
from src.components.strings import StringManager

PROJECT_ROOT = Path(__file__).parent.parent

# Europe/London is on GMT on this date, so local time equals UTC.
NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def strings() -> StringManager:
    return StringManager.for_lang("en")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def formatter() -> DisplayTimeAdapter:
    return DisplayTimeAdapter("Europe/London")


@pytest.fixture
def writer() -> HtmlWriter:
    return HtmlWriter("/pix")


@pytest.fixture
def seed_data() -> dict:
    """
    Activity 7 with an open, a full, a finished and a wait-listed session.
    User 42 is booked on session 1.
    """
    return {
        "customfields": [
            {"id": 1, "name": "Location", "shortname": "location", "type": "text"},
            {"id": 2, "name": "Trainers", "shortname": "trainers", "type": "multiselect"},
        ],
        "sessions": [
            {
                "id": 1,
                "facetoface": 7,
                "capacity": 10,
                "sessiondates": [
                    {"timestart": "2026-03-20T09:00:00Z", "timefinish": "2026-03-20T17:00:00Z"}
                ],
                "customfielddata": {1: {"fieldid": 1, "data": "Room 4"}},
            },
            {
                "id": 2,
                "facetoface": 7,
                "capacity": 1,
                "sessiondates": [
                    {"timestart": "2026-03-25T09:00:00Z", "timefinish": "2026-03-25T12:00:00Z"}
                ],
            },
            {
                "id": 3,
                "facetoface": 7,
                "capacity": 5,
                "sessiondates": [
                    {"timestart": "2026-03-01T09:00:00Z", "timefinish": "2026-03-01T17:00:00Z"}
                ],
            },
            {"id": 4, "facetoface": 7, "capacity": 5, "datetimeknown": False},
        ],
        "signups": [
            {"sessionid": 1, "userid": 42, "statuscode": 70},
            {"sessionid": 1, "userid": 43, "statuscode": 50},
            {"sessionid": 1, "userid": 44, "statuscode": 10},
            {"sessionid": 2, "userid": 45, "statuscode": 70},
        ],
        "roles": [
            {"id": 1, "shortname": "manager", "name": "Manager"},
            {"id": 3, "shortname": "editingteacher", "name": "Teacher", "localname": "Trainer"},
        ],
        "profile_fields": [{"shortname": "dietary", "name": "Dietary needs"}],
        "sitenotices": [{"id": 5, "name": "Parking"}],
    }


@pytest.fixture
def repo(seed_data: dict) -> InMemoryFacetofaceRepo:
    return seed_repo(seed_data)
