"""Slack slash-command relay for Mailgun delivery statistics."""

__version__ = "0.1.0"
