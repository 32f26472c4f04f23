"""
Session list component - Renders the table of sessions for an activity.

Builds one row per session with custom field values, dates, capacity,
booking status and the action links available to the viewer.
"""

from __future__ import annotations

import logging
from datetime import datetime

from src.components.html import (
    HtmlTable,
    HtmlTableRow,
    HtmlWriter,
    PixIcon,
    Url,
    empty_tag,
    format_string,
    link,
    render_table,
    tag,
)
from src.domain.entities import (
    STATUS_APPROVED,
    CustomField,
    FacetofaceSession,
    get_status_name,
)
from src.domain.state import (
    has_session_started,
    is_session_full,
    is_session_in_progress,
    seats_available,
)

from .models import (
    RenderSessionListInput,
    SessionListOutput,
    SessionRowSummary,
    SessionStatus,
)
from .ports import AttendeeCountPort, ClockPort, SessionDateFormatterPort, StringsPort

logger = logging.getLogger(__name__)

BR = empty_tag("br")
EMPTY_CELL = "&nbsp;"


# --- Header ---


def build_table_header(
    inp: RenderSessionListInput,
    strings: StringsPort,
) -> list[str]:
    """Column headings, in display order."""
    header = [format_string(field.name) for field in inp.customfields if field.showinsummary]

    if inp.uploadbookings:
        header.append(strings.get_string("sessionnumber"))

    header.append(strings.get_string("date"))
    header.append(strings.get_string("time"))
    if inp.viewattendees:
        header.append(strings.get_string("capacity"))
    else:
        header.append(strings.get_string("seatsavailable"))
    header.append(strings.get_string("status"))
    header.append(strings.get_string("options"))
    return header


# --- Cells ---


def _customfield_cells(
    session: FacetofaceSession,
    customfields: list[CustomField],
    delimiter: str,
) -> list[str]:
    cells: list[str] = []
    for field in customfields:
        if not field.showinsummary:
            continue

        data = session.customfielddata.get(field.id)
        if data is None:
            cells.append(EMPTY_CELL)
        elif field.type == "multiselect":
            cells.append(format_string(data.data).replace(delimiter, BR))
        else:
            cells.append(format_string(data.data))
    return cells


def _date_cells(
    session: FacetofaceSession,
    strings: StringsPort,
    formatter: SessionDateFormatterPort,
) -> tuple[str, str]:
    if not session.datetimeknown:
        waitlisted = strings.get_string("wait-listed")
        return waitlisted, waitlisted

    dates = BR.join(formatter.readable_session_date(date) for date in session.sessiondates)
    times = BR.join(formatter.readable_session_time(date) for date in session.sessiondates)
    return dates, times


def _capacity_cell(session: FacetofaceSession, signup_count: int, viewattendees: bool) -> str:
    if viewattendees:
        return f"{signup_count} / {session.capacity}"
    return str(seats_available(signup_count, session.capacity))


def resolve_status(
    session: FacetofaceSession,
    signup_count: int,
    now: datetime,
    strings: StringsPort,
) -> SessionStatus:
    """
    Pick the status label for a session.

    First match wins: in progress, over, booked by the viewer, full, open.
    """
    started = session.datetimeknown and has_session_started(session, now)

    if started and is_session_in_progress(session, now):
        return SessionStatus(strings.get_string("sessioninprogress"), started=True)
    if started:
        return SessionStatus(strings.get_string("sessionover"), started=True)

    booking = session.bookedsession
    if booking is not None and booking.sessionid == session.id:
        name = get_status_name(booking.statuscode)
        return SessionStatus(strings.get_string(f"status_{name}"), booked=True)

    if is_session_full(signup_count, session.capacity):
        return SessionStatus(strings.get_string("bookingfull"), full=True)

    return SessionStatus(strings.get_string("bookingopen"))


def build_options(
    session: FacetofaceSession,
    status: SessionStatus,
    inp: RenderSessionListInput,
    strings: StringsPort,
    writer: HtmlWriter,
) -> str:
    """Action links for one session, or the "none" label."""
    options = ""
    back = {"s": session.id, "backtoallsessions": session.facetoface}

    if inp.editsessions:
        options += writer.action_icon(
            Url("sessions.php", {"s": session.id}),
            PixIcon("t/edit", strings.get_string("edit")),
            {"title": strings.get_string("editsession")},
        ) + " "
        options += writer.action_icon(
            Url("sessions.php", {"s": session.id, "c": 1}),
            PixIcon("t/copy", strings.get_string("copy")),
            {"title": strings.get_string("copysession")},
        ) + " "
        options += writer.action_icon(
            Url("sessions.php", {"s": session.id, "d": 1}),
            PixIcon("t/delete", strings.get_string("delete")),
            {"title": strings.get_string("deletesession")},
        ) + " "

    if inp.viewattendees:
        options += link(
            Url("attendees.php", back),
            strings.get_string("attendees"),
            {"title": strings.get_string("seeattendees")},
        ) + " &nbsp; "
        excel = strings.get_string("downloadexcel", "core")
        options += writer.action_icon(
            Url("attendees.php", {"s": session.id, "download": "xlsx"}),
            PixIcon("f/spreadsheet", excel),
            {"title": excel},
        ) + " "
        ods = strings.get_string("downloadods", "core")
        options += writer.action_icon(
            Url("attendees.php", {"s": session.id, "download": "ods"}),
            PixIcon("f/calc", ods),
            {"title": ods},
        ) + " " + BR

    if status.booked:
        moreinfo = strings.get_string("moreinfo")
        options += link(Url("signup.php", back), moreinfo, {"title": moreinfo}) + BR
        if session.allowcancellations:
            cancel = strings.get_string("cancelbooking")
            options += link(Url("cancelsignup.php", back), cancel, {"title": cancel})
    elif not status.started and session.bookedsession is None and inp.signuplinks:
        options += link(Url("signup.php", back), strings.get_string("signup"))

    if not options:
        options = strings.get_string("none")
    return options


# --- Component Entry Points ---


def run(
    inp: RenderSessionListInput,
    *,
    strings: StringsPort,
    attendees: AttendeeCountPort,
    clock: ClockPort,
    formatter: SessionDateFormatterPort,
    writer: HtmlWriter | None = None,
) -> SessionListOutput:
    """
    Render the session list table.

    Args:
        inp: Custom fields, sessions and viewer flags.
        strings: String lookup port.
        attendees: Signup count port.
        clock: Clock port, read once per render.
        formatter: Session date formatter port.
        writer: Optional HTML writer (icon base URL).

    Returns:
        SessionListOutput with the table markup and per-row summaries.
    """
    writer = writer or HtmlWriter()
    now = clock.now_utc()

    header = build_table_header(inp, strings)
    table = HtmlTable(head=header, attributes={"class": inp.table_class})
    summaries: list[SessionRowSummary] = []

    for session in inp.sessions:
        cells = _customfield_cells(session, inp.customfields, inp.customfield_delimiter)

        if inp.uploadbookings:
            cells.append(tag("span", session.id, {"class": "mr-3"}))

        dates, times = _date_cells(session, strings, formatter)
        cells.extend([dates, times])

        signup_count = attendees.count_attendees(session.id, minimum_status=STATUS_APPROVED)
        cells.append(_capacity_cell(session, signup_count, inp.viewattendees))

        status = resolve_status(session, signup_count, now, strings)
        cells.append(status.label)
        cells.append(build_options(session, status, inp, strings, writer))

        row = HtmlTableRow(cells=cells)
        if status.row_class:
            row.attributes = {"class": status.row_class}
        table.data.append(row)

        summaries.append(
            SessionRowSummary(
                session_id=session.id,
                status=status.label,
                css_class=status.row_class,
                signup_count=signup_count,
            )
        )

    logger.debug("Rendered session list with %d rows", len(summaries))
    return SessionListOutput(html=render_table(table), header=header, rows=summaries)


def print_session_list_table(
    customfields: list[CustomField],
    sessions: list[FacetofaceSession],
    viewattendees: bool,
    editsessions: bool,
    signuplinks: bool = True,
    uploadbookings: bool = False,
    *,
    strings: StringsPort,
    attendees: AttendeeCountPort,
    clock: ClockPort,
    formatter: SessionDateFormatterPort,
    writer: HtmlWriter | None = None,
) -> str:
    """Render the session list and return only the markup."""
    inp = RenderSessionListInput(
        customfields=customfields,
        sessions=sessions,
        viewattendees=viewattendees,
        editsessions=editsessions,
        signuplinks=signuplinks,
        uploadbookings=uploadbookings,
    )
    return run(
        inp,
        strings=strings,
        attendees=attendees,
        clock=clock,
        formatter=formatter,
        writer=writer,
    ).html
