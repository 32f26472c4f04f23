"""
Session list routes.

Serves the session table of a face-to-face activity as HTML, shaped by the
viewer's capabilities and booking.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse

from src.adapters.clock import SystemClock
from src.adapters.memory import InMemoryFacetofaceRepo
from src.adapters.time_display import DisplayTimeAdapter
from src.api.deps import (
    Viewer,
    get_clock,
    get_facetoface_repo,
    get_formatter,
    get_rules,
    get_strings,
    get_viewer,
    get_writer,
)
from src.components import session_list
from src.components.html import HtmlWriter
from src.components.session_list import RenderSessionListInput
from src.components.strings import StringManager
from src.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/{facetoface_id}/sessions",
    response_class=HTMLResponse,
    summary="Session list table",
    description="Render the sessions of an activity as an HTML table.",
)
def get_session_list(
    facetoface_id: int,
    signuplinks: bool = Query(default=True),
    uploadbookings: bool = Query(default=False),
    viewer: Viewer = Depends(get_viewer),
    repo: InMemoryFacetofaceRepo = Depends(get_facetoface_repo),
    rules: Rules = Depends(get_rules),
    strings: StringManager = Depends(get_strings),
    clock: SystemClock = Depends(get_clock),
    formatter: DisplayTimeAdapter = Depends(get_formatter),
    writer: HtmlWriter = Depends(get_writer),
) -> HTMLResponse:
    """
    Render the session list.

    Returns 404 when the activity has no sessions on record.
    """
    if not repo.facetoface_exists(facetoface_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Face-to-face activity not found",
        )

    inp = RenderSessionListInput(
        customfields=repo.get_customfields(),
        sessions=repo.get_sessions_for_viewer(facetoface_id, viewer.user_id),
        viewattendees=viewer.flags.viewattendees,
        editsessions=viewer.flags.editsessions,
        signuplinks=signuplinks,
        uploadbookings=uploadbookings,
        table_class=rules.session_list.table_class,
        customfield_delimiter=rules.session_list.customfield_delimiter,
    )
    output = session_list.run(
        inp,
        strings=strings,
        attendees=repo,
        clock=clock,
        formatter=formatter,
        writer=writer,
    )
    logger.info("Served %d sessions for activity %d", len(output.rows), facetoface_id)
    return HTMLResponse(content=output.html)
