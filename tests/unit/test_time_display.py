"""
Display time adapter tests.

Readable session dates and times across timezones and DST.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from src.adapters.clock import FixedClock, SystemClock
from src.adapters.time_display import DisplayTimeAdapter
from src.domain.entities import SessionDate
from src.rules.models import DisplayRules


@pytest.fixture
def adapter() -> DisplayTimeAdapter:
    return DisplayTimeAdapter("Europe/London")


def make_date(start: datetime, finish: datetime, tz: str | None = None) -> SessionDate:
    return SessionDate(timestart=start, timefinish=finish, sessiontimezone=tz)


class TestReadableDate:
    def test_single_day(self, adapter: DisplayTimeAdapter) -> None:
        date = make_date(datetime(2026, 3, 5, 9, tzinfo=UTC), datetime(2026, 3, 5, 17, tzinfo=UTC))

        assert adapter.readable_session_date(date) == "5 March 2026"

    def test_escaped_percent_is_not_a_day(self) -> None:
        adapter = DisplayTimeAdapter("Europe/London", date_format="%d %%d %%%d %B")
        date = make_date(datetime(2026, 3, 5, 9, tzinfo=UTC), datetime(2026, 3, 5, 17, tzinfo=UTC))

        assert adapter.readable_session_date(date) == "5 %d %5 March"

    def test_spanning_days(self, adapter: DisplayTimeAdapter) -> None:
        date = make_date(
            datetime(2026, 3, 20, 9, tzinfo=UTC), datetime(2026, 3, 21, 17, tzinfo=UTC)
        )

        assert adapter.readable_session_date(date) == "20 March 2026 - 21 March 2026"

    def test_session_timezone_moves_the_day(self, adapter: DisplayTimeAdapter) -> None:
        # 22:00 UTC is 09:00 the next morning in Sydney (AEDT, +11)
        date = make_date(
            datetime(2026, 3, 20, 22, tzinfo=UTC),
            datetime(2026, 3, 21, 2, tzinfo=UTC),
            tz="Australia/Sydney",
        )

        assert adapter.readable_session_date(date) == "21 March 2026"
        assert adapter.readable_session_time(date) == "09:00 AM - 01:00 PM"


class TestReadableTime:
    def test_gmt(self, adapter: DisplayTimeAdapter) -> None:
        date = make_date(datetime(2026, 3, 5, 9, tzinfo=UTC), datetime(2026, 3, 5, 17, tzinfo=UTC))

        assert adapter.readable_session_time(date) == "09:00 AM - 05:00 PM"

    def test_british_summer_time(self, adapter: DisplayTimeAdapter) -> None:
        date = make_date(datetime(2026, 7, 1, 8, tzinfo=UTC), datetime(2026, 7, 1, 16, tzinfo=UTC))

        assert adapter.readable_session_time(date) == "09:00 AM - 05:00 PM"

    @pytest.mark.parametrize("tz", [None, "99", "Not/AZone"])
    def test_fallback_to_display_timezone(
        self, adapter: DisplayTimeAdapter, tz: str | None
    ) -> None:
        date = make_date(
            datetime(2026, 7, 1, 8, tzinfo=UTC), datetime(2026, 7, 1, 9, tzinfo=UTC), tz=tz
        )

        assert adapter.readable_session_time(date) == "09:00 AM - 10:00 AM"


class TestConfiguration:
    def test_from_rules(self) -> None:
        adapter = DisplayTimeAdapter.from_rules(
            DisplayRules(timezone="UTC", date_format="%Y-%m-%d", time_format="%H:%M")
        )
        date = make_date(datetime(2026, 7, 1, 8, tzinfo=UTC), datetime(2026, 7, 1, 16, tzinfo=UTC))

        assert adapter.readable_session_date(date) == "2026-07-01"
        assert adapter.readable_session_time(date) == "08:00 - 16:00"

    def test_naive_datetimes_are_utc(self, adapter: DisplayTimeAdapter) -> None:
        local = adapter.to_local(datetime(2026, 7, 1, 8))

        assert local.hour == 9


class TestClocks:
    def test_system_clock_is_utc(self) -> None:
        now = SystemClock().now_utc()

        assert now.tzinfo is not None
        assert abs((datetime.now(UTC) - now).total_seconds()) < 1.0

    def test_fixed_clock_normalises_naive(self) -> None:
        clock = FixedClock(datetime(2026, 3, 10, 12))

        assert clock.now_utc() == datetime(2026, 3, 10, 12, tzinfo=UTC)
