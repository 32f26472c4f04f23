"""
Session state and signup status tests.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from src.domain.entities import (
    STATUS_BOOKED,
    STATUS_USER_CANCELLED,
    FacetofaceSession,
    SessionDate,
    UnknownStatusError,
    get_status_name,
)
from src.domain.state import (
    has_session_started,
    is_session_full,
    is_session_in_progress,
    seats_available,
)

NOW = datetime(2026, 3, 10, 12, tzinfo=UTC)


def session_on(*ranges: tuple[int, int, int, int], known: bool = True) -> FacetofaceSession:
    """Session with dates in March 2026 given as (day, start_hour, day, end_hour)."""
    return FacetofaceSession(
        id=1,
        facetoface=1,
        datetimeknown=known,
        sessiondates=[
            SessionDate(
                timestart=datetime(2026, 3, d1, h1, tzinfo=UTC),
                timefinish=datetime(2026, 3, d2, h2, tzinfo=UTC),
            )
            for d1, h1, d2, h2 in ranges
        ],
    )


class TestSessionStarted:
    def test_future_session_not_started(self) -> None:
        assert has_session_started(session_on((20, 9, 20, 17)), NOW) is False

    def test_past_session_started(self) -> None:
        assert has_session_started(session_on((1, 9, 1, 17)), NOW) is True

    def test_any_started_date_counts(self) -> None:
        session = session_on((1, 9, 1, 17), (20, 9, 20, 17))

        assert has_session_started(session, NOW) is True
        assert is_session_in_progress(session, NOW) is False

    def test_unknown_dates_never_start(self) -> None:
        session = session_on((1, 9, 1, 17), known=False)

        assert has_session_started(session, NOW) is False
        assert is_session_in_progress(session, NOW) is False

    def test_naive_now_is_utc(self) -> None:
        assert has_session_started(session_on((10, 9, 10, 17)), datetime(2026, 3, 10, 12)) is True


class TestSessionInProgress:
    def test_in_progress(self) -> None:
        assert is_session_in_progress(session_on((10, 9, 10, 17)), NOW) is True

    def test_finished(self) -> None:
        assert is_session_in_progress(session_on((10, 6, 10, 11)), NOW) is False

    def test_boundaries_are_exclusive(self) -> None:
        assert is_session_in_progress(session_on((10, 12, 10, 17)), NOW) is False
        assert is_session_in_progress(session_on((10, 9, 10, 12)), NOW) is False


class TestCapacity:
    def test_full_at_capacity(self) -> None:
        assert is_session_full(5, 5) is True
        assert is_session_full(4, 5) is False

    def test_seats_available(self) -> None:
        assert seats_available(3, 10) == 7
        assert seats_available(12, 10) == 0


class TestStatusNames:
    def test_known_codes(self) -> None:
        assert get_status_name(STATUS_BOOKED) == "booked"
        assert get_status_name(STATUS_USER_CANCELLED) == "user_cancelled"

    def test_unknown_code(self) -> None:
        with pytest.raises(UnknownStatusError):
            get_status_name(55)

    def test_epoch_seconds_accepted(self) -> None:
        date = SessionDate(timestart=1773997200, timefinish=1774026000)

        assert date.timestart == datetime(2026, 3, 20, 9, tzinfo=UTC)
        assert date.timefinish == datetime(2026, 3, 20, 17, tzinfo=UTC)
