"""
Session list component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from src.domain.entities import CUSTOMFIELD_DELIMITER, CustomField, FacetofaceSession

RowClass = Literal["dimmed_text", "highlight"]


@dataclass(frozen=True)
class RenderSessionListInput:
    """Input for rendering the session list table."""

    customfields: list[CustomField]
    sessions: list[FacetofaceSession]
    viewattendees: bool
    editsessions: bool
    signuplinks: bool = True
    uploadbookings: bool = False
    table_class: str = "f2fsessionlist"
    customfield_delimiter: str = CUSTOMFIELD_DELIMITER


@dataclass(frozen=True)
class SessionStatus:
    """Status label for one session, plus the flags that shape its row."""

    label: str
    started: bool = False
    booked: bool = False
    full: bool = False

    @property
    def row_class(self) -> RowClass | None:
        if self.started:
            return "dimmed_text"
        if self.booked:
            return "highlight"
        if self.full:
            return "dimmed_text"
        return None


@dataclass(frozen=True)
class SessionRowSummary:
    """Per-row facts behind the rendered markup."""

    session_id: int
    status: str
    css_class: RowClass | None
    signup_count: int


@dataclass(frozen=True)
class SessionListOutput:
    """Output from rendering the session list."""

    html: str
    header: list[str] = field(default_factory=list)
    rows: list[SessionRowSummary] = field(default_factory=list)
