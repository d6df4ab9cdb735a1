from __future__ import annotations


class RelayError(RuntimeError):
    """Base class for failures surfaced to the webhook caller."""

    status_code: int = 500


class MethodNotAllowedError(RelayError):
    status_code = 405

    def __init__(self, message: str = "Only POST requests are accepted"):
        super().__init__(message)


class InvalidCredentialsError(RelayError):
    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class MailgunError(RelayError):
    """Raised for Mailgun API/transport failures."""

    def __init__(self, message: str, *, upstream_status: int | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class MailgunConfigurationError(MailgunError):
    """Raised when the Mailgun api key or domain is missing."""


class MailgunAuthError(MailgunError):
    pass


class MailgunRateLimitError(MailgunError):
    pass


class MailgunTimeoutError(MailgunError):
    def __init__(self, message: str = "Mailgun request timed out"):
        super().__init__(message)


class MailgunResponseFormatError(MailgunError):
    """Raised when the stats response is not the expected JSON shape."""
