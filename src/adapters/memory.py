"""
In-memory data layer adapters.

Stand-ins for the host's session, signup, role and configuration storage,
used by the HTTP shell, the CLI and tests. Optionally seeded from YAML.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from src.domain.entities import (
    STATUS_REQUESTED,
    BookedSession,
    CustomField,
    FacetofaceSession,
    ProfileField,
    Role,
    Signup,
    SiteNotice,
)

logger = logging.getLogger(__name__)

_FAR_FUTURE = datetime.max.replace(tzinfo=UTC)


def _session_sort_key(session: FacetofaceSession) -> tuple[datetime, int]:
    # Sessions with unknown dates sort last
    if session.datetimeknown and session.sessiondates:
        return min(date.timestart for date in session.sessiondates), session.id
    return _FAR_FUTURE, session.id


class InMemoryFacetofaceRepo:
    """
    Sessions, signups and settings-panel sources held in memory.

    Implements AttendeeCountPort, RoleProviderPort, ProfileFieldProviderPort,
    CustomFieldProviderPort and SiteNoticeProviderPort.
    """

    def __init__(self) -> None:
        self._sessions: dict[int, FacetofaceSession] = {}
        self._signups: list[Signup] = []
        self._customfields: dict[int, CustomField] = {}
        self._roles: list[Role] = []
        self._profile_fields: list[ProfileField] = []
        self._sitenotices: list[SiteNotice] = []

    # --- Writes ---

    def add_session(self, session: FacetofaceSession) -> FacetofaceSession:
        self._sessions[session.id] = session
        return session

    def add_signup(self, signup: Signup) -> Signup:
        self._signups.append(signup)
        return signup

    def add_customfield(self, field: CustomField) -> CustomField:
        self._customfields[field.id] = field
        return field

    def add_role(self, role: Role) -> Role:
        self._roles.append(role)
        return role

    def add_profile_field(self, field: ProfileField) -> ProfileField:
        self._profile_fields.append(field)
        return field

    def add_sitenotice(self, notice: SiteNotice) -> SiteNotice:
        self._sitenotices.append(notice)
        return notice

    # --- Sessions ---

    def session_count(self) -> int:
        return len(self._sessions)

    def facetoface_exists(self, facetoface_id: int) -> bool:
        return any(s.facetoface == facetoface_id for s in self._sessions.values())

    def get_sessions(self, facetoface_id: int) -> list[FacetofaceSession]:
        sessions = [s for s in self._sessions.values() if s.facetoface == facetoface_id]
        return sorted(sessions, key=_session_sort_key)

    def count_attendees(self, session_id: int, minimum_status: int) -> int:
        return sum(
            1
            for signup in self._signups
            if signup.sessionid == session_id and signup.statuscode >= minimum_status
        )

    def get_booked_session(self, facetoface_id: int, user_id: int) -> BookedSession | None:
        """The user's live booking in an activity, if any."""
        session_ids = {s.id for s in self._sessions.values() if s.facetoface == facetoface_id}
        for signup in self._signups:
            if (
                signup.userid == user_id
                and signup.sessionid in session_ids
                and signup.statuscode >= STATUS_REQUESTED
            ):
                return BookedSession(sessionid=signup.sessionid, statuscode=signup.statuscode)
        return None

    def get_sessions_for_viewer(
        self,
        facetoface_id: int,
        user_id: int | None,
    ) -> list[FacetofaceSession]:
        """Sessions of an activity with the viewer's booking attached."""
        booked = None
        if user_id is not None:
            booked = self.get_booked_session(facetoface_id, user_id)
        return [
            session.model_copy(update={"bookedsession": booked})
            for session in self.get_sessions(facetoface_id)
        ]

    # --- Settings Panel Sources ---

    def get_customfields(self) -> list[CustomField]:
        return sorted(self._customfields.values(), key=lambda field: field.id)

    def get_all_roles(self) -> list[Role]:
        return list(self._roles)

    def get_custom_profile_fields(self) -> list[ProfileField]:
        return list(self._profile_fields)

    def get_sitenotices(self) -> list[SiteNotice]:
        return list(self._sitenotices)


class InMemoryConfigRepo:
    """Stored plugin configuration. Implements ConfigRepoPort."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get_all(self) -> dict[str, str]:
        return dict(self._values)

    def save(self, values: dict[str, str]) -> dict[str, str]:
        self._values.update(values)
        return self.get_all()

    def clear(self) -> None:
        self._values.clear()


# --- Seeding ---


def seed_repo(data: dict[str, Any]) -> InMemoryFacetofaceRepo:
    """
    Build a repository from plain data.

    Raises ValueError if any record fails validation.
    """
    repo = InMemoryFacetofaceRepo()
    try:
        for item in data.get("customfields", []):
            repo.add_customfield(CustomField.model_validate(item))
        for item in data.get("sessions", []):
            repo.add_session(FacetofaceSession.model_validate(item))
        for item in data.get("signups", []):
            repo.add_signup(Signup.model_validate(item))
        for item in data.get("roles", []):
            repo.add_role(Role.model_validate(item))
        for item in data.get("profile_fields", []):
            repo.add_profile_field(ProfileField.model_validate(item))
        for item in data.get("sitenotices", []):
            repo.add_sitenotice(SiteNotice.model_validate(item))
    except ValidationError as e:
        raise ValueError(f"Seed data validation failed:\n{e}") from e
    return repo


def load_seed(path: Path) -> InMemoryFacetofaceRepo:
    """
    Load seed data from a YAML file.

    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or records invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Seed file not found at: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in seed file: {e}") from e

    repo = seed_repo(data)
    logger.info("Seeded %d sessions from %s", repo.session_count(), path)
    return repo
