from __future__ import annotations

import base64
import hashlib
import hmac
import json

import pytest

from github2slack import lambda_function
from github2slack.config import Settings
from github2slack.logging import configure_logging
from github2slack.services.notifier import Notifier


@pytest.fixture
def notifier(users, repositories, delivery):
    return Notifier.from_tables(users, repositories, delivery)


@pytest.fixture(autouse=True)
def no_secret(monkeypatch):
    configure_logging(Settings())
    monkeypatch.setattr(lambda_function, "settings", Settings(webhook_secret=""))


def _event(event_type, payload, **extra):
    return {
        "headers": {"X-GitHub-Event": event_type},
        "body": json.dumps(payload),
        **extra,
    }


def test_notable_event(notifier, delivery, payload):
    payload["action"] = "opened"
    resp = lambda_function.handler(_event("pull_request", payload), None, notifier=notifier)

    assert resp == {"statusCode": 200, "body": '"Finish"'}
    assert delivery.calls[0][1] == "SLACK_CHANNEL_ID_1"


def test_other_event(notifier, delivery, payload):
    resp = lambda_function.handler(_event("hoge", payload), None, notifier=notifier)

    assert resp == {"statusCode": 200, "body": "No message"}
    assert delivery.calls == []


def test_lowercase_headers_and_base64_body(notifier, delivery, payload):
    payload["action"] = "created"
    event = {
        "headers": {"x-github-event": "discussion"},
        "body": base64.b64encode(json.dumps(payload).encode()).decode(),
        "isBase64Encoded": "true",
    }
    resp = lambda_function.handler(event, None, notifier=notifier)

    assert resp["statusCode"] == 200
    assert delivery.calls[0][0].title.startswith("Discussion Created ")


def test_already_decoded_body(notifier, delivery, payload):
    payload["action"] = "closed"
    event = {"headers": {"X-GitHub-Event": "issues"}, "body": payload}
    resp = lambda_function.handler(event, None, notifier=notifier)

    assert resp["statusCode"] == 200
    assert len(delivery.calls) == 1


def test_malformed_payload(notifier, delivery, payload):
    payload["action"] = "opened"
    del payload["pull_request"]["user"]
    resp = lambda_function.handler(_event("pull_request", payload), None, notifier=notifier)

    assert resp["statusCode"] == 400
    assert delivery.calls == []


def test_invalid_json(notifier):
    event = {"headers": {"X-GitHub-Event": "issues"}, "body": "{nope"}
    assert lambda_function.handler(event, None, notifier=notifier)["statusCode"] == 400


def test_signature(monkeypatch, notifier, delivery, payload):
    monkeypatch.setattr(lambda_function, "settings", Settings(webhook_secret="s3cret"))
    payload["action"] = "opened"
    body = json.dumps(payload)

    resp = lambda_function.handler(_event("issues", payload), None, notifier=notifier)
    assert resp["statusCode"] == 401

    signature = hmac.new(b"s3cret", body.encode(), hashlib.sha256).hexdigest()
    event = {
        "headers": {"X-GitHub-Event": "issues", "X-Hub-Signature-256": f"sha256={signature}"},
        "body": body,
    }
    resp = lambda_function.handler(event, None, notifier=notifier)
    assert resp["statusCode"] == 200
    assert len(delivery.calls) == 1
