"""Message and delivery schemas"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class Message(BaseModel):
    """
    A composed notification.

    ``title`` is the text posted to Slack; ``body`` is only scanned for
    mentions. Both ``None`` means no notification.
    """

    title: Optional[str] = None
    body: Optional[str] = None

    class Config:
        frozen = True

    @property
    def is_empty(self) -> bool:
        return self.title is None and self.body is None


NO_MESSAGE = Message()


class DeliveryResult(BaseModel):
    """Outcome of a single delivery attempt."""

    ok: bool
    error: Optional[str] = None
    response: Optional[dict[str, Any]] = None


class NotifyOutcome(BaseModel):
    """What the handler did with one event."""

    message: Message
    channel: str = ""
    delivery: Optional[DeliveryResult] = None

    @property
    def sent(self) -> bool:
        return self.delivery is not None
