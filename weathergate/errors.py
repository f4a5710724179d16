"""Gateway exception hierarchy.

Every exception carries an HTTP ``status_code`` and a ``message`` that is
safe to send to clients.  Anything the provider said stays on the exception
(``raw_message``) and only ever reaches the server logs.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for all classified gateway failures."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(GatewayError):
    """Client input was missing or malformed."""

    status_code = 400
    message = "Invalid request"


class RateLimitError(GatewayError):
    """Client exceeded its request allowance for the current window."""

    status_code = 429
    message = "Too many requests. Please try again later."


class ConfigurationError(GatewayError):
    """The provider credential is not configured."""

    message = "Server configuration error"


class UpstreamTimeoutError(GatewayError):
    """The provider did not answer within the timeout."""

    status_code = 504
    message = "Weather service timed out"


class UpstreamError(GatewayError):
    """The provider answered with a non-2xx status."""

    def __init__(self, status_code: int, raw_message: str = "") -> None:
        # Only real error statuses are passed through to the caller.
        self.status_code = status_code if 400 <= status_code < 600 else 502
        self.upstream_status = status_code
        self.raw_message = raw_message
        if status_code == 404:
            super().__init__("Location not found")
        else:
            super().__init__("Failed to fetch weather data")


class MalformedUpstreamError(GatewayError):
    """The provider payload is missing structure the gateway relies on.

    The constructor argument describes what was missing and is only logged;
    clients always see the generic message.
    """

    def __init__(self, reason: str = "") -> None:
        self.reason = reason
        super().__init__()
