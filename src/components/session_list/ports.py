"""
Session list component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from src.components.strings import StringsPort
from src.domain.entities import SessionDate


class AttendeeCountPort(Protocol):
    """Signup counts from the data layer."""

    def count_attendees(self, session_id: int, minimum_status: int) -> int:
        """Count live signups whose status code is at least minimum_status."""
        ...


class ClockPort(Protocol):
    """Port for time operations."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...


class SessionDateFormatterPort(Protocol):
    """Human readable session dates and times."""

    def readable_session_date(self, date: SessionDate) -> str:
        ...

    def readable_session_time(self, date: SessionDate) -> str:
        ...


__all__ = [
    "AttendeeCountPort",
    "ClockPort",
    "SessionDateFormatterPort",
    "StringsPort",
]
