"""
Relay exception hierarchy.

Services raise these; the API layer maps them to HTTP responses:
- ClientRequestError -> 4xx with a machine-readable error code
- ConfigurationError -> 500, raised before any outbound call
- ProviderError      -> 5xx (or the provider's status for diagnostics)
"""

from typing import Optional


class RelayError(Exception):
    """Base class for all relay errors."""


class ClientRequestError(RelayError):
    """The inbound request is malformed, missing data or too large."""

    def __init__(self, error: str, message: str, status_code: int = 400):
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code


class ConfigurationError(RelayError):
    """A required setting (the provider credential) is missing."""


class ProviderError(RelayError):
    """
    The provider could not be reached or answered with a non-2xx status.

    status_code is None for transport failures (DNS, connect, timeout).
    """

    def __init__(
        self,
        detail: str,
        status_code: Optional[int] = None,
        service: Optional[str] = None,
    ):
        self.detail = detail
        self.status_code = status_code
        self.service = service
        if status_code is None:
            super().__init__(detail)
        else:
            super().__init__(f"{status_code} - {detail}")


class ProviderResponseError(ProviderError):
    """The provider answered 2xx but the payload is not what we expect."""
