"""
Zaim client error taxonomy.

Local errors (configuration, authentication, validation) are raised before
any network activity. Transport errors come from the OAuth/HTTP layer and are
passed to the caller unchanged.
"""


class ZaimError(Exception):
    """Base exception for Zaim client errors."""

    pass


class ConfigurationError(ZaimError):
    """Missing or incompatible construction parameters."""

    pass


class AuthenticationError(ZaimError):
    """Resource call attempted without a complete access-token pair."""

    pass


class ValidationError(ZaimError):
    """Required operation fields are missing or an enum value is invalid."""

    def __init__(self, message: str, missing: list[str] | None = None):
        self.missing = missing or []
        super().__init__(message)


class TransportError(ZaimError):
    """Failure reported by the OAuth/HTTP transport."""

    pass


class ZaimConnectionError(TransportError):
    """Failed to connect to Zaim."""

    pass


class ZaimAPIError(TransportError):
    """Zaim returned an error response."""

    def __init__(
        self,
        status_code: int,
        message: str,
        response_body: str | None = None,
    ):
        self.status_code = status_code
        self.message = message
        self.response_body = response_body
        super().__init__(f"Zaim API error {status_code}: {message}")
