"""
Session list component - HTML table of sessions for an activity.
"""

from .component import (
    build_options,
    build_table_header,
    print_session_list_table,
    resolve_status,
    run,
)
from .models import (
    RenderSessionListInput,
    SessionListOutput,
    SessionRowSummary,
    SessionStatus,
)
from .ports import AttendeeCountPort, ClockPort, SessionDateFormatterPort

__all__ = [
    # Entry points
    "run",
    "print_session_list_table",
    # Building blocks
    "build_table_header",
    "build_options",
    "resolve_status",
    # Models
    "RenderSessionListInput",
    "SessionListOutput",
    "SessionRowSummary",
    "SessionStatus",
    # Ports
    "AttendeeCountPort",
    "ClockPort",
    "SessionDateFormatterPort",
]
