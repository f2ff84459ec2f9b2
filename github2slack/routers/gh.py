"""Ruter GH"""

from __future__ import annotations

import json

import structlog
from fastapi import APIRouter, Header, HTTPException, Request
from fastapi.responses import PlainTextResponse

from github2slack.errors import MalformedPayloadError
from github2slack.services.notifier import Notifier
from github2slack.utils import gh_verify

logger = structlog.get_logger()

router = APIRouter(tags=["github"])

NO_MESSAGE_TEXT = "No message"
FINISH_TEXT = "Finish"


@router.post("/webhook", response_class=PlainTextResponse)
async def github_webhook(
    request: Request,
    x_hub_signature_256: str | None = Header(None),
    x_github_event: str | None = Header(None),
):
    """
    GitHub webhook endpoint.

    When ``GITHUB_WEBHOOK_SECRET`` is configured the payload signature is
    validated against `X-Hub-Signature-256`. A notable event is posted to
    Slack once; the response does not depend on whether that post succeeded.
    """
    body = await request.body()
    settings = request.app.state.settings
    if settings.webhook_secret and not gh_verify(
        settings.webhook_secret, body, x_hub_signature_256
    ):
        raise HTTPException(401, "Invalid signature")

    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise HTTPException(400, "Body is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise HTTPException(400, "Body must be a JSON object")

    notifier: Notifier = request.app.state.notifier
    try:
        outcome = await notifier.notify(x_github_event, payload)
    except MalformedPayloadError as exc:
        logger.warning(
            "malformed_payload", github_event=x_github_event, path=exc.path
        )
        raise HTTPException(400, str(exc)) from exc

    if not outcome.sent:
        return NO_MESSAGE_TEXT
    return FINISH_TEXT
