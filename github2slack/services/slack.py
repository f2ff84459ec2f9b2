"""Yet another slack services"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

import httpx
import structlog

from github2slack.config import Settings
from github2slack.schemas import DeliveryResult, Message

logger = structlog.get_logger()

SLACK_POST_MESSAGE_URL = "https://slack.com/api/chat.postMessage"
HTTP_TIMEOUT_SECONDS = 10

JSONDict = dict[str, Any]

Deliver = Callable[[Message, str], Awaitable[DeliveryResult]]


def build_post_payload(
    message: Message, channel_id: str, token: str, username: str = "github2slack"
) -> JSONDict:
    """Body for ``chat.postMessage``. Only the title is posted."""
    return {
        "username": username,
        "channel": channel_id,
        "text": message.title,
        "token": token,
    }


def build_post_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


async def post_message(
    token: str,
    channel_id: str,
    message: Message,
    *,
    username: str = "github2slack",
    api_url: str = SLACK_POST_MESSAGE_URL,
    timeout: float = HTTP_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> DeliveryResult:
    """
    Post a message once. Failures are reported in the result, never raised.

    Slack answers ``200`` with ``{"ok": false, "error": ...}`` for most API
    errors, so the body decides success, not just the status code.
    """
    payload = build_post_payload(message, channel_id, token, username)
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.post(
                api_url, json=payload, headers=build_post_headers(token)
            )
    except httpx.HTTPError as exc:
        logger.warning("slack_request_failed", channel=channel_id, error=str(exc))
        return DeliveryResult(ok=False, error=f"{type(exc).__name__}: {exc}")

    try:
        data = resp.json()
    except ValueError:
        data = None
    if not isinstance(data, dict):
        error = f"Slack error: {resp.status_code} {resp.text[:200]}"
        logger.warning("slack_bad_response", channel=channel_id, error=error)
        return DeliveryResult(ok=False, error=error)
    if resp.status_code >= 300 or not data.get("ok"):
        error = data.get("error") or f"Slack error: {resp.status_code}"
        logger.warning("slack_api_error", channel=channel_id, error=error)
        return DeliveryResult(ok=False, error=error, response=data)
    return DeliveryResult(ok=True, response=data)


class SlackDelivery:
    """``Deliver`` implementation bound to a token and endpoint."""

    def __init__(
        self,
        token: str,
        *,
        username: str = "github2slack",
        api_url: str = SLACK_POST_MESSAGE_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.token = token
        self.username = username
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "SlackDelivery":
        return cls(
            settings.api_token,
            username=settings.slack_username,
            api_url=settings.slack_api_url,
            timeout=settings.slack_timeout_seconds,
        )

    async def __call__(self, message: Message, channel_id: str) -> DeliveryResult:
        return await post_message(
            self.token,
            channel_id,
            message,
            username=self.username,
            api_url=self.api_url,
            timeout=self.timeout,
            transport=self.transport,
        )
