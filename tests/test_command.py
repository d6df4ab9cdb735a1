from __future__ import annotations

import pytest

from mailstats.core.command import parse_command_text


def test_duration_and_events_are_parsed() -> None:
    query = parse_command_text("1m accepted,failed")

    assert query.duration == "1m"
    assert query.events == ["accepted", "failed"]


@pytest.mark.parametrize("text", [None, 42, "", {"text": "1m"}])
def test_missing_or_non_text_input_uses_defaults(text: object) -> None:
    query = parse_command_text(text)

    assert query.duration == "24h"
    assert query.events == ["accepted", "delivered", "failed"]


def test_duration_only_uses_default_events() -> None:
    query = parse_command_text("7d")

    assert query.duration == "7d"
    assert query.events == ["accepted", "delivered", "failed"]


def test_empty_event_names_are_dropped() -> None:
    assert parse_command_text("7d opened,,clicked,").events == ["opened", "clicked"]
    assert parse_command_text("7d ,").events == ["accepted", "delivered", "failed"]


def test_tokens_after_event_list_are_ignored() -> None:
    query = parse_command_text("3h delivered extra words")

    assert query.duration == "3h"
    assert query.events == ["delivered"]


def test_query_params_repeat_event() -> None:
    params = parse_command_text("1m accepted,failed").as_params()

    assert params == [("duration", "1m"), ("event", "accepted"), ("event", "failed")]
