from datetime import UTC, datetime

from src.domain.entities import FacetofaceSession


def _utc(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now


def has_session_started(session: FacetofaceSession, now: datetime) -> bool:
    """
    True once any date of the session has begun.
    Sessions without known dates (wait-listed) never start.
    """
    if not session.datetimeknown:
        return False

    now = _utc(now)
    return any(date.timestart < now for date in session.sessiondates)


def is_session_in_progress(session: FacetofaceSession, now: datetime) -> bool:
    """True while `now` falls strictly inside one of the session's dates."""
    if not session.datetimeknown:
        return False

    now = _utc(now)
    return any(
        date.timestart < now < date.timefinish for date in session.sessiondates
    )


def is_session_full(signup_count: int, capacity: int) -> bool:
    return signup_count >= capacity


def seats_available(signup_count: int, capacity: int) -> int:
    return max(0, capacity - signup_count)
