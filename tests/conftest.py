from __future__ import annotations

from types import MappingProxyType

import pytest

from github2slack.schemas import DeliveryResult
from github2slack.services.channels import ChannelResolver
from github2slack.services.github import MessageComposer
from github2slack.services.mentions import MentionResolver


class RecordingDelivery:
    """Stand-in for Slack: records every call and returns a fixed result."""

    def __init__(self, result: DeliveryResult | None = None) -> None:
        self.calls = []
        self.result = result or DeliveryResult(ok=True, response={"ok": True})

    async def __call__(self, message, channel_id):
        self.calls.append((message, channel_id))
        return self.result


@pytest.fixture
def users():
    # Order matters: mentions come out in this order.
    return MappingProxyType({"kxmxyx": "U02JR88JRQU", "ma3tk": "U1KTF129J"})


@pytest.fixture
def repositories():
    return MappingProxyType(
        {
            "REPOSITORY_NAME_1": "SLACK_CHANNEL_ID_1",
            "REPOSITORY_NAME_2": "SLACK_CHANNEL_ID_2",
        }
    )


@pytest.fixture
def mentions(users):
    return MentionResolver(users)


@pytest.fixture
def composer(mentions):
    return MessageComposer(mentions)


@pytest.fixture
def channels(repositories):
    return ChannelResolver(repositories)


@pytest.fixture
def delivery():
    return RecordingDelivery()


@pytest.fixture
def payload():
    """A payload carrying every record any notable event reads."""
    return {
        "action": "",
        "pull_request": {
            "title": "test pull_request title",
            "html_url": "https://github.com/hoge/fuga/pull/1",
            "body": "pull_request body",
            "user": {"login": "author"},
        },
        "requested_reviewer": {"login": "reviewer user"},
        "review": {"state": "", "user": {"login": "reviewer"}},
        "issue": {
            "title": "test issue title",
            "html_url": "https://github.com/hoge/fuga/issues/1",
            "body": "issue body",
        },
        "comment": {
            "html_url": "https://github.com/hoge/fuga/issues/1#issuecomment-12345",
            "body": "issue comment body",
            "user": {"login": "author"},
        },
        "discussion": {
            "html_url": "https://github.com/hoge/fuga/discussions/1",
            "title": "discussion title",
            "body": "discussion body",
            "user": {"login": "author"},
        },
        "repository": {
            "id": 830276446,
            "name": "REPOSITORY_NAME_1",
            "full_name": "REPOSITORY_NAME_1",
            "private": True,
        },
    }
