"""
Error Classifier
================
Turns a failed HTTP exchange into one error from the provider taxonomy.

Priority:
1. The provider's auth-failure marker  -> ProviderAuthError
   (checked first: some providers answer an expired token with a 400)
2. Any response with a non-success code -> ProviderApiError
3. No response at all                   -> the raw transport error

classify() is total: it always returns an exception instance and never
raises, so it is safe to call on every error path before the response body
is interpreted as data.
"""

from typing import Any, Callable, Optional

import requests

from ..errors import ProviderApiError, ProviderAuthError, ProviderError

# (response, parsed_body) -> bool
AuthPredicate = Callable[[requests.Response, Any], bool]

# parsed_body -> message or None
MessageExtractor = Callable[[Any], Optional[str]]


def _never_auth(response: requests.Response, body: Any) -> bool:
    return False


def _no_message(body: Any) -> Optional[str]:
    return None


def parse_body(response: Optional[requests.Response]) -> Any:
    """
    Parse a response body as JSON without ever raising.

    Returns:
        Decoded JSON, or None when the body is empty or not JSON
    """
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return None


class ErrorClassifier:
    """
    Classifies failures for one provider.

    Each provider defines its own auth-failure predicate and error-message
    extractor; there is no universal marker.

    Usage:
        classifier = ErrorClassifier(
            "facebook",
            is_auth_error=lambda resp, body: body['error']['code'] == 190,
            get_error_message=lambda body: body['error']['message'],
        )
        raise classifier.classify(err, resp)
    """

    def __init__(
        self,
        provider_name: str,
        is_auth_error: AuthPredicate = _never_auth,
        get_error_message: MessageExtractor = _no_message,
    ):
        """
        Args:
            provider_name: Name used in fallback messages
            is_auth_error: Predicate for "this token is no longer valid"
            get_error_message: Extracts the provider's own error message
        """
        self.provider_name = provider_name
        self._is_auth_error = is_auth_error
        self._get_error_message = get_error_message

    def classify(
        self,
        err: Optional[BaseException] = None,
        response: Optional[requests.Response] = None,
    ) -> BaseException:
        """
        Classify a transport error and/or an HTTP response.

        Args:
            err: Transport-level exception, if any
            response: HTTP response, if one was received

        Returns:
            ProviderAuthError, ProviderApiError, or err unchanged
        """
        if response is not None:
            body = parse_body(response)

            if self._safe_is_auth_error(response, body):
                return ProviderAuthError()

            status_code = getattr(response, 'status_code', None)
            fallback_message = f"request to {self.provider_name} returned {status_code}"
            message = self._safe_get_message(body) or fallback_message
            return ProviderApiError(message, status_code)

        if err is not None:
            return err

        return ProviderError(f"request to {self.provider_name} failed without a response")

    def _safe_is_auth_error(self, response: requests.Response, body: Any) -> bool:
        # Unexpected body shape -> not an auth failure
        try:
            return bool(self._is_auth_error(response, body))
        except (KeyError, IndexError, TypeError, AttributeError, ValueError):
            return False

    def _safe_get_message(self, body: Any) -> Optional[str]:
        try:
            message = self._get_error_message(body)
        except (KeyError, IndexError, TypeError, AttributeError, ValueError):
            return None
        return str(message) if message else None
