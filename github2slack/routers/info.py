"""Ruter Ingfo"""

from __future__ import annotations

from textwrap import dedent

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from github2slack import __version__

router = APIRouter()

HTTP_HELP_TEXT = dedent(
    f"""
GitHub → Slack Notifier {__version__}

Endpoints
---------
- GET  /         : Health check & this help
- POST /webhook  : GitHub webhook (set content type to application/json)

Notified events
---------------
pull_request (opened, closed, review_requested), issues (opened, closed),
issue_comment (created), pull_request_review (submitted: approved,
changes_requested), pull_request_review_comment (created),
discussion (created), discussion_comment (created)
"""
).strip()


@router.get("/", response_class=PlainTextResponse)
def root():
    """Health check. Returns a plaintext cheat sheet of endpoints."""
    return HTTP_HELP_TEXT
