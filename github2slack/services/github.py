"""Slack messages for GitHub webhook events."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence

from github2slack.errors import MalformedPayloadError
from github2slack.schemas import NO_MESSAGE, Message
from github2slack.services.mentions import MentionResolver


class NotificationKind(str, Enum):
    """Every (event, action[, sub-state]) combination that produces a message."""

    PULL_REQUEST_OPENED = "pull_request.opened"
    PULL_REQUEST_CLOSED = "pull_request.closed"
    REVIEW_REQUESTED = "pull_request.review_requested"
    ISSUE_OPENED = "issues.opened"
    ISSUE_CLOSED = "issues.closed"
    ISSUE_COMMENT_CREATED = "issue_comment.created"
    REVIEW_APPROVED = "pull_request_review.submitted.approved"
    REVIEW_CHANGES_REQUESTED = "pull_request_review.submitted.changes_requested"
    REVIEW_COMMENT_CREATED = "pull_request_review_comment.created"
    DISCUSSION_CREATED = "discussion.created"
    DISCUSSION_COMMENT_CREATED = "discussion_comment.created"


Builder = Callable[[Mapping[str, Any]], tuple[str, Optional[str]]]

# (event, action) pairs whose route also depends on a nested field.
SUBSTATE_FIELDS: dict[tuple[str, str], Sequence[str]] = {
    ("pull_request_review", "submitted"): ("review", "state"),
}

ROUTES: dict[tuple[str, ...], NotificationKind] = {
    tuple(kind.value.split(".")): kind for kind in NotificationKind
}


def _walk(data: Any, path: Sequence[str]) -> Any:
    current = data
    for depth, key in enumerate(path[:-1], start=1):
        current = current.get(key) if isinstance(current, Mapping) else None
        if not isinstance(current, Mapping):
            raise MalformedPayloadError(".".join(path[:depth]))
    return current.get(path[-1])


def _require(data: Mapping[str, Any], path: Sequence[str]) -> Any:
    value = _walk(data, path)
    if value is None:
        raise MalformedPayloadError(".".join(path))
    return value


def _optional(data: Mapping[str, Any], path: Sequence[str]) -> str | None:
    # GitHub sends ``null`` for empty bodies; the parent record must still exist.
    value = _walk(data, path)
    return None if value is None else str(value)


def _link(url: Any, text: Any) -> str:
    return f"[<{url}|{text}>]"


def _subject_link(payload: Mapping[str, Any], subject: str) -> str:
    return _link(
        _require(payload, (subject, "html_url")),
        _require(payload, (subject, "title")),
    )


def _comment_link(payload: Mapping[str, Any], subject: str) -> str:
    return _link(
        _require(payload, ("comment", "html_url")),
        _require(payload, (subject, "title")),
    )


def _pull_request_opened(payload: Mapping[str, Any]) -> tuple[str, str | None]:
    author = _require(payload, ("pull_request", "user", "login"))
    title = f"{author} Pullrequest Opened {_subject_link(payload, 'pull_request')}"
    return title, _optional(payload, ("pull_request", "body"))


def _pull_request_closed(payload: Mapping[str, Any]) -> tuple[str, str | None]:
    return f"Pullrequest Closed {_subject_link(payload, 'pull_request')}", ""


def _review_requested(payload: Mapping[str, Any]) -> tuple[str, str | None]:
    reviewer = _require(payload, ("requested_reviewer", "login"))
    title = f"Review requested {_subject_link(payload, 'pull_request')}"
    return title, f"@{reviewer}"


def _issue_opened(payload: Mapping[str, Any]) -> tuple[str, str | None]:
    title = f"Issue Opened {_subject_link(payload, 'issue')}"
    return title, _optional(payload, ("issue", "body"))


def _issue_closed(payload: Mapping[str, Any]) -> tuple[str, str | None]:
    return f"Issue Closed {_subject_link(payload, 'issue')}", ""


def _issue_comment_created(payload: Mapping[str, Any]) -> tuple[str, str | None]:
    author = _require(payload, ("comment", "user", "login"))
    title = f"{author} Comment on {_comment_link(payload, 'issue')}"
    return title, _optional(payload, ("comment", "body"))


def _review_approved(payload: Mapping[str, Any]) -> tuple[str, str | None]:
    reviewer = _require(payload, ("review", "user", "login"))
    author = _require(payload, ("pull_request", "user", "login"))
    title = f"{reviewer} Pullrequest approval {_subject_link(payload, 'pull_request')}"
    return title, f"@{author}"


def _review_changes_requested(payload: Mapping[str, Any]) -> tuple[str, str | None]:
    reviewer = _require(payload, ("review", "user", "login"))
    link = _subject_link(payload, "pull_request")
    return f"{reviewer} Pullrequest change request {link}", ""


def _review_comment_created(payload: Mapping[str, Any]) -> tuple[str, str | None]:
    author = _require(payload, ("comment", "user", "login"))
    title = f"{author} Review on {_comment_link(payload, 'pull_request')}"
    return title, _optional(payload, ("comment", "body"))


def _discussion_created(payload: Mapping[str, Any]) -> tuple[str, str | None]:
    title = f"Discussion Created {_subject_link(payload, 'discussion')}"
    return title, _optional(payload, ("discussion", "body"))


def _discussion_comment_created(payload: Mapping[str, Any]) -> tuple[str, str | None]:
    author = _require(payload, ("comment", "user", "login"))
    title = f"{author} Comment on {_comment_link(payload, 'discussion')}"
    return title, _optional(payload, ("comment", "body"))


BUILDERS: dict[NotificationKind, Builder] = {
    NotificationKind.PULL_REQUEST_OPENED: _pull_request_opened,
    NotificationKind.PULL_REQUEST_CLOSED: _pull_request_closed,
    NotificationKind.REVIEW_REQUESTED: _review_requested,
    NotificationKind.ISSUE_OPENED: _issue_opened,
    NotificationKind.ISSUE_CLOSED: _issue_closed,
    NotificationKind.ISSUE_COMMENT_CREATED: _issue_comment_created,
    NotificationKind.REVIEW_APPROVED: _review_approved,
    NotificationKind.REVIEW_CHANGES_REQUESTED: _review_changes_requested,
    NotificationKind.REVIEW_COMMENT_CREATED: _review_comment_created,
    NotificationKind.DISCUSSION_CREATED: _discussion_created,
    NotificationKind.DISCUSSION_COMMENT_CREATED: _discussion_comment_created,
}

_unbuilt = [kind.value for kind in NotificationKind if kind not in BUILDERS]
if _unbuilt:
    raise RuntimeError(f"no message builder for: {', '.join(_unbuilt)}")


def classify(event: str | None, payload: Any) -> NotificationKind | None:
    """
    Map an event to its notification kind, or ``None`` if it is not notable.

    Only the sub-state lookup can fail: a ``pull_request_review`` ``submitted``
    event without ``review.state`` is a malformed payload.
    """
    if not isinstance(payload, Mapping):
        return None
    action = payload.get("action")
    if not event or not isinstance(action, str):
        return None
    key: tuple[str, ...] = (event, action)
    substate_path = SUBSTATE_FIELDS.get((event, action))
    if substate_path:
        key += (str(_require(payload, substate_path)),)
    return ROUTES.get(key)


class MessageComposer:
    """Build the Slack message for an event, with mentions resolved."""

    def __init__(self, mentions: MentionResolver) -> None:
        self._mentions = mentions

    def compose(self, event: str | None, payload: Any) -> Message:
        return self.compose_kind(event, payload)[1]

    def compose_kind(
        self, event: str | None, payload: Any
    ) -> tuple[NotificationKind | None, Message]:
        """Like :meth:`compose`, also returning the matched kind."""
        kind = classify(event, payload)
        if kind is None:
            return None, NO_MESSAGE
        title, body = BUILDERS[kind](payload)
        mentions = self._mentions.find_mentions(body)
        if mentions:
            title = " ".join([*mentions, title])
        return kind, Message(title=title, body=body)
