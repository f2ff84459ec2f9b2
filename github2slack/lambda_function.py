"""AWS Lambda (API Gateway proxy) entry point."""

from __future__ import annotations

import asyncio
import base64
import json
from typing import Any

import structlog

from github2slack.config import settings
from github2slack.errors import MalformedPayloadError
from github2slack.logging import configure_logging
from github2slack.routers.gh import FINISH_TEXT, NO_MESSAGE_TEXT
from github2slack.services.notifier import Notifier
from github2slack.utils import gh_verify, header_lookup

logger = structlog.get_logger()

_notifier: Notifier | None = None


def _get_notifier() -> Notifier:
    # Built on first invocation and reused while the container stays warm.
    global _notifier
    if _notifier is None:
        configure_logging(settings)
        _notifier = Notifier.from_settings(settings)
    return _notifier


def _raw_body(event: dict[str, Any]) -> bytes:
    body = event.get("body") or ""
    if isinstance(body, (dict, list)):
        return json.dumps(body).encode("utf-8")
    is_b64 = event.get("isBase64Encoded", False)
    if isinstance(is_b64, str):
        is_b64 = is_b64.lower() == "true"
    if is_b64:
        return base64.b64decode(body)
    return body.encode("utf-8")


def _response(status: int, body: str) -> dict[str, Any]:
    return {"statusCode": status, "body": body}


def handler(
    event: dict[str, Any],
    context: Any = None,
    *,
    notifier: Notifier | None = None,
) -> dict[str, Any]:
    """Process a proxied GitHub delivery; returns an API Gateway response."""
    notifier = notifier or _get_notifier()
    headers = event.get("headers")

    try:
        raw = _raw_body(event)
    except ValueError:
        return _response(400, "Body is not valid base64")

    if settings.webhook_secret and not gh_verify(
        settings.webhook_secret, raw, header_lookup(headers, "X-Hub-Signature-256")
    ):
        return _response(401, "Invalid signature")

    try:
        payload = json.loads(raw)
    except ValueError:
        return _response(400, "Body is not valid JSON")
    if not isinstance(payload, dict):
        return _response(400, "Body must be a JSON object")

    github_event = header_lookup(headers, "X-GitHub-Event")
    try:
        outcome = asyncio.run(notifier.notify(github_event, payload))
    except MalformedPayloadError as exc:
        logger.warning(
            "malformed_payload", github_event=github_event, path=exc.path
        )
        return _response(400, str(exc))

    if not outcome.sent:
        return _response(200, NO_MESSAGE_TEXT)
    return _response(200, json.dumps(FINISH_TEXT))
