"""Render aggregated Mailgun totals as a Slack message.

See https://api.slack.com/docs/message-formatting for the attachment schema.
"""

from __future__ import annotations

from mailstats.core.aggregate import aggregate_totals
from mailstats.core.types import Attachment, SlackMessage, StatsReport, Totals

DEFAULT_COLOR = "#3367d6"

KEY_COLORS: dict[str, str] = {
    "accepted": "#9bc0ab",
    "delivered": "#629976",
    "temporary": "#d9a8aa",
    "permanent": "#b85555",
    "complained": "#aa2d2c",
    "unsubscribed": "#373f41",
    "stored": "#bedafc",
    "clicked": "#ea912e",
    "opened": "#3770df",
}


def describe_range(start: str, end: str) -> str:
    if start == end:
        return f"for {start}"
    return f"from {start} to {end}"


def generate_attachments(totals: Totals) -> list[Attachment]:
    return [
        Attachment(
            color=KEY_COLORS.get(category, DEFAULT_COLOR),
            title=category,
            text="".join(f"_{sub_key}:_ {count}\n" for sub_key, count in counts.items()),
        )
        for category, counts in totals.items()
    ]


def format_slack_message(report: StatsReport) -> SlackMessage:
    totals = aggregate_totals(report.stats)
    return SlackMessage(
        response_type="in_channel",
        text=f"Mailgun totals {describe_range(report.start, report.end)}",
        attachments=generate_attachments(totals),
    )


def render_plain(message: SlackMessage) -> str:
    """Plain-text version of a message for terminal output."""
    lines = [message.text]
    for attachment in message.attachments:
        lines.append("")
        lines.append(f"[{attachment.title}]")
        lines.append(attachment.text.rstrip("\n"))
    return "\n".join(lines)
