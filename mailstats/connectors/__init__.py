from __future__ import annotations

from mailstats.connectors.mailgun import MailgunClient

__all__ = ["MailgunClient"]
