"""Mention lookup against the handle → Slack user table."""

from __future__ import annotations

from typing import Mapping


def mention_token(user_id: str) -> str:
    return f"<@{user_id}>"


class MentionResolver:
    """Find known ``@handle`` references in free text."""

    def __init__(self, table: Mapping[str, str]) -> None:
        self._table = table

    def find_mentions(self, body: str | None) -> list[str]:
        """
        Return Slack mention tokens for every handle present in ``body``.

        Matching is a plain substring test on ``"@" + handle``. Results follow
        the table's key order, not the order handles appear in the text.
        """
        if body is None:
            return []
        return [
            mention_token(user_id)
            for handle, user_id in self._table.items()
            if f"@{handle}" in body
        ]
