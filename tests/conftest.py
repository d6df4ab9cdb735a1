from __future__ import annotations

import httpx
import pytest

from mailstats.connectors.mailgun import MailgunClient
from mailstats.core.config import RelayConfig

SAMPLE_REPORT = {
    "start": "Mon, 13 Jan 2020 00:00:00 UTC",
    "end": "Tue, 14 Jan 2020 00:00:00 UTC",
    "resolution": "day",
    "stats": [
        {
            "time": "Mon, 13 Jan 2020 00:00:00 UTC",
            "accepted": {"incoming": 2, "outgoing": 10, "total": 12},
            "delivered": {"smtp": 9, "http": 0, "total": 9},
            "failed": {
                "temporary": {"espblock": 1},
                "permanent": {"bounce": 2, "suppress-bounce": 1, "total": 3},
            },
        },
        {
            "time": "Tue, 14 Jan 2020 00:00:00 UTC",
            "accepted": {"incoming": 0, "outgoing": 5, "total": 5},
            "delivered": {"smtp": 4, "http": 1, "total": 5},
            "failed": {
                "temporary": {"espblock": 0},
                "permanent": {"bounce": 1, "suppress-bounce": 0, "total": 1},
            },
        },
    ],
}


@pytest.fixture()
def relay_config() -> RelayConfig:
    return RelayConfig(
        mailgun_api_key="key-test",
        mailgun_domain="mg.example.com",
        slack_token="slack-secret",
    )


@pytest.fixture()
def mailgun_factory(relay_config: RelayConfig):
    """Build a MailgunClient backed by httpx.MockTransport; returns (client, seen_requests)."""

    def _make(
        payload: object = SAMPLE_REPORT, status_code: int = 200
    ) -> tuple[MailgunClient, list[httpx.Request]]:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if isinstance(payload, (bytes, str)):
                return httpx.Response(status_code, content=payload)
            return httpx.Response(status_code, json=payload)

        client = MailgunClient.from_config(relay_config, transport=httpx.MockTransport(handler))
        return client, seen

    return _make


@pytest.fixture()
def sample_report() -> dict:
    return SAMPLE_REPORT
