"""FastAPI application receiving Slack slash-command webhooks.

Slack posts ``application/x-www-form-urlencoded`` bodies; JSON bodies are
accepted as well so the endpoint can be exercised with curl.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import parse_qsl

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from mailstats.connectors.mailgun import MailgunClient
from mailstats.core.config import RelayConfig
from mailstats.errors import RelayError
from mailstats.web.stats_service import StatsService

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(config: RelayConfig, *, client: MailgunClient | None = None) -> FastAPI:
    app = FastAPI(title="mailstats", docs_url=None, redoc_url=None)
    service = StatsService(config, client or MailgunClient.from_config(config))
    app.state.stats_service = service

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.api_route("/stats", methods=ALL_METHODS)
    async def stats(request: Request) -> Response:
        try:
            body = await _read_body(request)
            message = await service.handle(request.method, body)
        except RelayError as exc:
            if exc.status_code < 500:
                logger.warning("stats request rejected (%d): %s", exc.status_code, exc)
            else:
                logger.exception("stats request failed")
            return _error_response(exc.status_code, exc)
        except Exception as exc:
            logger.exception("stats request failed")
            return _error_response(500, exc)

        return JSONResponse(content=message.model_dump(mode="json"))

    return app


async def _read_body(request: Request) -> dict[str, Any]:
    raw = await request.body()
    if not raw:
        return {}

    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {}
        return payload if isinstance(payload, dict) else {}

    return dict(parse_qsl(raw.decode("utf-8", errors="replace"), keep_blank_values=True))


def _error_response(status_code: int, exc: Exception) -> Response:
    return Response(
        status_code=status_code,
        content=str(exc) or exc.__class__.__name__,
        media_type="text/plain",
    )
