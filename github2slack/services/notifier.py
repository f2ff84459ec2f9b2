"""Compose → route → deliver, once per event."""

from __future__ import annotations

from typing import Any, Mapping

import structlog

from github2slack.config import Settings
from github2slack.schemas import NotifyOutcome
from github2slack.services.channels import ChannelResolver
from github2slack.services.github import MessageComposer
from github2slack.services.mentions import MentionResolver
from github2slack.services.slack import Deliver, SlackDelivery
from github2slack.tables import load_table

logger = structlog.get_logger()


class Notifier:
    """
    Turn one GitHub event into at most one Slack post.

    The delivery result is logged and returned but never inspected for
    control flow: a failed post still counts as a handled event.
    """

    def __init__(
        self,
        composer: MessageComposer,
        channels: ChannelResolver,
        deliver: Deliver,
    ) -> None:
        self.composer = composer
        self.channels = channels
        self.deliver = deliver

    @classmethod
    def from_tables(
        cls,
        users: Mapping[str, str],
        repositories: Mapping[str, str],
        deliver: Deliver,
    ) -> "Notifier":
        return cls(
            MessageComposer(MentionResolver(users)),
            ChannelResolver(repositories),
            deliver,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Notifier":
        return cls.from_tables(
            load_table(settings.users_file),
            load_table(settings.repositories_file),
            SlackDelivery.from_settings(settings),
        )

    async def notify(self, event: str | None, payload: Any) -> NotifyOutcome:
        kind, message = self.composer.compose_kind(event, payload)
        action = payload.get("action") if isinstance(payload, Mapping) else None
        if kind is None:
            logger.info("event_ignored", github_event=event, action=action)
            return NotifyOutcome(message=message)

        channel = self.channels.resolve_for_payload(payload)
        # "event" is structlog's message key; the GitHub event goes elsewhere.
        log = logger.bind(
            github_event=event, action=action, kind=kind.value, channel=channel
        )
        if not channel:
            log.info("channel_unresolved")
        result = await self.deliver(message, channel)
        if result.ok:
            log.info("notification_delivered")
        else:
            log.warning("notification_failed", error=result.error)
        return NotifyOutcome(message=message, channel=channel, delivery=result)
