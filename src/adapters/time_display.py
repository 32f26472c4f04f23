"""
Display time adapter.

Converts stored UTC session dates into human readable dates and times
for the configured display timezone.

Key behaviors:
- Each session date may carry its own timezone; "99" or None falls back
  to the display timezone
- Day numbers are printed without a leading zero ("5 March 2026")
- A date spanning several local days renders as "<start> - <finish>"
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.domain.entities import SessionDate
from src.rules.models import DisplayRules

DEFAULT_TIMEZONE_MARKER = "99"

_DIRECTIVE = re.compile(r"%.")


class DisplayTimeAdapter:
    """
    Time adapter for rendering session dates.

    Implements the SessionDateFormatterPort used by the session list.
    """

    def __init__(
        self,
        tz_name: str = "Europe/London",
        date_format: str = "%d %B %Y",
        time_format: str = "%I:%M %p",
    ) -> None:
        """
        Initialize with display settings.

        Args:
            tz_name: IANA timezone name used when a date has no timezone
            date_format: strftime format for dates (%d printed without zero padding)
            time_format: strftime format for times
        """
        self._tz = ZoneInfo(tz_name)
        self._date_format = date_format
        self._time_format = time_format

    @classmethod
    def from_rules(cls, display: DisplayRules) -> DisplayTimeAdapter:
        return cls(display.timezone, display.date_format, display.time_format)

    def _zone_for(self, date: SessionDate) -> ZoneInfo:
        tz_name = date.sessiontimezone
        if not tz_name or tz_name == DEFAULT_TIMEZONE_MARKER:
            return self._tz
        try:
            return ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            return self._tz

    def to_local(self, utc_dt: datetime, tz: ZoneInfo | None = None) -> datetime:
        """
        Convert UTC to local time.

        If utc_dt is naive, it's assumed to be UTC.
        """
        if utc_dt.tzinfo is None:
            utc_dt = utc_dt.replace(tzinfo=UTC)
        return utc_dt.astimezone(tz or self._tz)

    def format_date(self, local_dt: datetime) -> str:
        # strftime has no portable unpadded day directive; "%%" stays literal
        day = str(local_dt.day)
        fmt = _DIRECTIVE.sub(
            lambda m: day if m.group(0) == "%d" else m.group(0), self._date_format
        )
        return local_dt.strftime(fmt)

    def format_time(self, local_dt: datetime) -> str:
        return local_dt.strftime(self._time_format)

    def readable_session_date(self, date: SessionDate) -> str:
        tz = self._zone_for(date)
        start = self.format_date(self.to_local(date.timestart, tz))
        finish = self.format_date(self.to_local(date.timefinish, tz))
        if start == finish:
            return start
        return f"{start} - {finish}"

    def readable_session_time(self, date: SessionDate) -> str:
        tz = self._zone_for(date)
        start = self.format_time(self.to_local(date.timestart, tz))
        finish = self.format_time(self.to_local(date.timefinish, tz))
        return f"{start} - {finish}"
