"""Error types raised by the Daraja client."""


class DarajaError(Exception):
    """Base class for every error the client raises."""


class ConfigError(DarajaError):
    """Client configuration is missing or invalid."""


class TransportError(DarajaError):
    """The HTTP round trip failed (connection, DNS, timeout)."""


class ApiError(DarajaError):
    """The gateway rejected the request with a structured error body."""

    def __init__(self, code, message, request_id=None):
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"API Error: {code} - {message}")


class ParseError(DarajaError):
    """A response body matched neither the success nor the error shape."""

    def __init__(self, message, status=None, body=None):
        self.status = status
        self.body = body
        if status is not None:
            message = f"{message} (HTTP {status})"
        super().__init__(message)


class CredentialError(DarajaError):
    """Security credential could not be generated.

    ``reason`` is one of ``not_found``, ``unreadable``, ``malformed``,
    ``unsupported_key``, ``too_long`` or ``encryption_failed``.
    """

    def __init__(self, message, reason):
        self.reason = reason
        super().__init__(message)
