"""StatsService — answers one slash-command invocation with a Mailgun summary."""

from __future__ import annotations

import secrets
from collections.abc import Mapping
from typing import Any

from mailstats.connectors.mailgun import MailgunClient
from mailstats.core.command import parse_command_text
from mailstats.core.config import RelayConfig
from mailstats.core.formatting import format_slack_message
from mailstats.core.types import SlackMessage
from mailstats.errors import InvalidCredentialsError, MethodNotAllowedError


class StatsService:
    def __init__(self, config: RelayConfig, client: MailgunClient) -> None:
        self._config = config
        self._client = client

    async def handle(self, method: str, body: Mapping[str, Any] | None) -> SlackMessage:
        if method.upper() != "POST":
            raise MethodNotAllowedError()

        self.verify_token(body)

        query = parse_command_text((body or {}).get("text"))
        report = await self._client.fetch_stats(query)
        return format_slack_message(report)

    def verify_token(self, body: Mapping[str, Any] | None) -> None:
        """Check that the request carries the shared Slack verification token."""
        candidate = body.get("token") if body else None
        expected = self._config.slack_token
        if not isinstance(candidate, str) or not candidate or not expected:
            raise InvalidCredentialsError()
        if not secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8")):
            raise InvalidCredentialsError()
