"""
Provider error taxonomy.

Every failure a provider reports to its caller is one of these, or the raw
transport exception when no response was ever received.
"""

from typing import Optional


class ProviderError(Exception):
    """Base class for errors raised by the provider layer."""


class ProviderAuthError(ProviderError):
    """The access token is invalid or expired; the user must re-authenticate."""

    def __init__(self, message: str = "invalid access token detected by Provider"):
        super().__init__(message)
        self.is_auth_error = True


class ProviderApiError(ProviderError):
    """The remote service rejected the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"ProviderApiError(message={self.message!r}, status_code={self.status_code!r})"


class UnsupportedOperationError(ProviderError, NotImplementedError):
    """The provider does not offer this operation."""
