"""Repository → Slack channel routing."""

from __future__ import annotations

from typing import Any, Mapping

from github2slack.errors import MalformedPayloadError

UNRESOLVED = ""


class ChannelResolver:
    def __init__(self, table: Mapping[str, str]) -> None:
        self._table = table

    def resolve(self, repository_name: str) -> str:
        """Exact key lookup; ``""`` when the repository is not registered."""
        return self._table.get(repository_name, UNRESOLVED)

    def resolve_for_payload(self, payload: Mapping[str, Any]) -> str:
        repository = payload.get("repository")
        if not isinstance(repository, Mapping):
            raise MalformedPayloadError("repository")
        name = repository.get("name")
        if not isinstance(name, str):
            raise MalformedPayloadError("repository.name")
        return self.resolve(name)
