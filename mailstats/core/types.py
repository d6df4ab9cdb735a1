from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DURATION = "24h"
DEFAULT_EVENTS = ("accepted", "delivered", "failed")

# category -> sub-key -> cumulative count
Totals = dict[str, dict[str, int]]


class StatsQuery(BaseModel):
    duration: str = DEFAULT_DURATION
    events: list[str] = Field(default_factory=lambda: list(DEFAULT_EVENTS))

    def as_params(self) -> list[tuple[str, str]]:
        """Query params for the Mailgun stats endpoint, one ``event`` per entry."""
        return [("duration", self.duration)] + [("event", event) for event in self.events]


class StatsReport(BaseModel):
    model_config = ConfigDict(extra="ignore")

    start: str
    end: str
    resolution: str | None = None
    stats: list[dict[str, Any]] = Field(default_factory=list)


class Attachment(BaseModel):
    color: str
    title: str
    text: str


class SlackMessage(BaseModel):
    response_type: str = "in_channel"
    text: str
    attachments: list[Attachment] = Field(default_factory=list)
