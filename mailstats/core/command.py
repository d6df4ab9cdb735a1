"""Parse the free-text argument of the ``/mailstats`` slash command."""

from __future__ import annotations

from typing import Any

from mailstats.core.types import DEFAULT_DURATION, DEFAULT_EVENTS, StatsQuery


def parse_command_text(text: Any) -> StatsQuery:
    """Split ``"<duration> <event,event,...>"`` into a StatsQuery.

    Missing or empty pieces fall back to the defaults (``24h`` and
    accepted/delivered/failed). Tokens after the event list are ignored.
    """
    if not isinstance(text, str):
        return StatsQuery()

    tokens = text.split(" ")
    duration = tokens[0].strip() if tokens else ""
    raw_events = tokens[1] if len(tokens) > 1 else ""

    events = [name.strip() for name in raw_events.split(",") if name.strip()]

    return StatsQuery(
        duration=duration or DEFAULT_DURATION,
        events=events or list(DEFAULT_EVENTS),
    )
