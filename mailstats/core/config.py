from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator


class ConfigError(RuntimeError):
    """Raised when the relay config cannot be loaded."""


DEFAULT_MAILGUN_BASE_URL = "https://api.mailgun.net/v3"

ENV_VARS: dict[str, str] = {
    "mailgun_api_key": "MAILGUN_API_KEY",
    "mailgun_domain": "MAILGUN_DOMAIN",
    "slack_token": "SLACK_TOKEN",
    "mailgun_base_url": "MAILGUN_BASE_URL",
    "timeout_seconds": "MAILSTATS_TIMEOUT_SECONDS",
    "log_level": "MAILSTATS_LOG_LEVEL",
}

SECRET_FIELDS = frozenset({"mailgun_api_key", "slack_token"})


class RelayConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mailgun_api_key: str
    mailgun_domain: str
    slack_token: str
    mailgun_base_url: str = DEFAULT_MAILGUN_BASE_URL
    timeout_seconds: float = 20.0
    log_level: str = "info"

    @field_validator("mailgun_api_key", "mailgun_domain", "slack_token")
    @classmethod
    def _require_value(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("mailgun_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().lower()


def load_config(*, path: Path | None = None, environ: Mapping[str, str] | None = None) -> RelayConfig:
    """Build the config from an optional YAML file overlaid by environment variables."""
    env = os.environ if environ is None else environ
    payload: dict[str, Any] = {}

    if path is not None:
        payload.update(_read_yaml(path))

    for field, var in ENV_VARS.items():
        value = env.get(var)
        if value:
            payload[field] = value

    try:
        return RelayConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid relay config: {exc}") from exc


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid config yaml at {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("config root must be a mapping")
    return raw


def redacted(config: RelayConfig) -> dict[str, Any]:
    payload = config.model_dump(mode="json")
    for field in SECRET_FIELDS:
        value = str(payload.get(field, ""))
        payload[field] = f"{value[:4]}..." if len(value) > 8 else "***"
    return payload


def config_json(config: RelayConfig) -> str:
    return json.dumps(redacted(config), sort_keys=True)
