from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from mailstats.core.config import RelayConfig
from mailstats.core.types import StatsQuery, StatsReport
from mailstats.errors import (
    MailgunAuthError,
    MailgunConfigurationError,
    MailgunError,
    MailgunRateLimitError,
    MailgunResponseFormatError,
    MailgunTimeoutError,
)

logger = logging.getLogger(__name__)


class MailgunClient:
    """Reads aggregate delivery statistics from the Mailgun stats API."""

    def __init__(
        self,
        *,
        api_key: str,
        domain: str,
        base_url: str = "https://api.mailgun.net/v3",
        timeout_seconds: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.domain = domain
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @classmethod
    def from_config(
        cls, config: RelayConfig, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> "MailgunClient":
        return cls(
            api_key=config.mailgun_api_key,
            domain=config.mailgun_domain,
            base_url=config.mailgun_base_url,
            timeout_seconds=config.timeout_seconds,
            transport=transport,
        )

    async def fetch_stats(self, query: StatsQuery) -> StatsReport:
        if not self.api_key:
            raise MailgunConfigurationError("Mailgun api key is not configured")
        if not self.domain:
            raise MailgunConfigurationError("Mailgun domain is not configured")

        url = f"{self.base_url}/{self.domain}/stats/total"
        params = query.as_params()
        logger.debug("mailgun stats query: domain=%s params=%s", self.domain, params)

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.get(url, params=params, auth=("api", self.api_key))
        except httpx.TimeoutException as exc:
            raise MailgunTimeoutError() from exc
        except httpx.HTTPError as exc:
            raise MailgunError(f"mailgun request failed: {exc}") from exc

        if response.status_code >= 400:
            raise self._http_error(response)

        payload = self._decode_json(response)
        try:
            return StatsReport.model_validate(payload)
        except ValidationError as exc:
            raise MailgunResponseFormatError(f"unexpected mailgun stats response shape: {exc}") from exc

    def _decode_json(self, response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except json.JSONDecodeError as exc:
            raise MailgunResponseFormatError("mailgun response was not valid JSON") from exc

        if not isinstance(payload, dict):
            raise MailgunResponseFormatError("mailgun response JSON root must be an object")
        return payload

    def _http_error(self, response: httpx.Response) -> MailgunError:
        status = response.status_code
        message = self._error_message(response)
        logger.warning("mailgun stats request failed (%d): %s", status, message)

        if status in {401, 403}:
            return MailgunAuthError(f"mailgun authentication failed: {message}", upstream_status=status)
        if status == 429:
            return MailgunRateLimitError(f"mailgun rate limited: {message}", upstream_status=status)
        return MailgunError(f"mailgun request failed ({status}): {message}", upstream_status=status)

    def _error_message(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except json.JSONDecodeError:
            payload = None

        if isinstance(payload, dict):
            detail = payload.get("message")
            if isinstance(detail, str) and detail.strip():
                return detail.strip()

        text = response.text.strip()
        return text or "unknown error"
