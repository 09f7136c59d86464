"""
Dropbox Provider
================
Dropbox API v2 implementation of the provider contract.

Features:
- Metadata calls through the official Dropbox SDK, bound to the shared
  requests session
- Cursor pagination via list_folder / list_folder_continue
- Downloads streamed from a temporary link
- Thumbnail proxying (Dropbox thumbnails need the access token)
"""

from typing import Any, Iterator, Optional

import dropbox
import requests
from dropbox.exceptions import ApiError, AuthError, DropboxException, HttpError
from dropbox.files import PathOrLink, ThumbnailFormat, ThumbnailSize

from ...config.constants import DROPBOX_LIST_LIMIT, PROVIDER_DROPBOX, USER_AGENT
from ...config.logging_config import setup_logger
from ...errors import ProviderApiError, ProviderAuthError
from ...utils.file_utils import normalize_dropbox_path
from ...utils.request_utils import get_url_meta, stream_response
from ..base import BaseProvider
from ..classifier import ErrorClassifier
from ..models import ListResult, LogoutResult
from ..transport import open_stream
from . import adapter

logger = setup_logger(__name__)

_AUTH_ERROR_SUMMARIES = ('expired_access_token', 'invalid_access_token')

# Raised by SDK calls: SDK errors plus transport errors from requests
_CLIENT_ERRORS = (DropboxException, requests.exceptions.RequestException)


def is_auth_error(response: requests.Response, body: Any) -> bool:
    if response.status_code == 401:
        return True
    summary = body.get('error_summary', '') if isinstance(body, dict) else ''
    return summary.startswith(_AUTH_ERROR_SUMMARIES)


def get_error_message(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        return body.get('user_message') or body.get('error_summary')
    return None


class DropboxErrorClassifier(ErrorClassifier):
    """
    Classifier that also understands the Dropbox SDK exception hierarchy.

    - AuthError                     -> ProviderAuthError
    - ApiError (route error, 409)   -> ProviderApiError
    - HttpError (400, 429, 5xx ...) -> ProviderApiError (401 -> auth)
    Anything else falls through to the response-based rules.
    """

    def classify(self, err=None, response=None):
        if isinstance(err, AuthError):
            return ProviderAuthError()

        if isinstance(err, ApiError):
            message = err.user_message_text or f"request to {self.provider_name} failed: {err.error}"
            return ProviderApiError(message, 409)

        if isinstance(err, HttpError):
            if err.status_code == 401:
                return ProviderAuthError()
            body = err.body if isinstance(err.body, str) and err.body else None
            message = body or f"request to {self.provider_name} returned {err.status_code}"
            return ProviderApiError(message, err.status_code)

        return super().classify(err, response)


class DropboxProvider(BaseProvider):
    """
    Dropbox provider.

    A short-lived SDK client is built per call from the caller's token; it
    shares the provider's requests session so connections are pooled. SDK
    retries are disabled.
    """

    name = PROVIDER_DROPBOX
    display_name = "Dropbox"

    def __init__(self, session=None, settings=None):
        super().__init__(session, settings)
        self.adapter = adapter
        self.classifier = DropboxErrorClassifier(
            self.name,
            is_auth_error=is_auth_error,
            get_error_message=get_error_message,
        )

    def _client(self, token: str) -> dropbox.Dropbox:
        return dropbox.Dropbox(
            oauth2_access_token=token,
            session=self.session,
            timeout=self.timeout,
            max_retries_on_error=0,
            max_retries_on_rate_limit=0,
            user_agent=USER_AGENT,
        )

    def _fail(self, err: BaseException, tag: str) -> BaseException:
        error = self.classifier.classify(err=err)
        logger.error("Dropbox request failed", extra={'tag': tag, 'error': repr(err)})
        return error

    def list(
        self,
        directory: Optional[str],
        token: str,
        cursor: Optional[str] = None,
    ) -> ListResult:
        """List a folder; a cursor continues the listing it came from."""
        client = self._client(token)

        try:
            if cursor:
                result = client.files_list_folder_continue(cursor)
            else:
                result = client.files_list_folder(
                    normalize_dropbox_path(directory),
                    limit=DROPBOX_LIST_LIMIT,
                )
        except _CLIENT_ERRORS as e:
            raise self._fail(e, 'provider.dropbox.list.error')

        try:
            account = client.users_get_current_account()
        except _CLIENT_ERRORS as e:
            raise self._fail(e, 'provider.dropbox.user.error')

        username = self.adapter.get_username(account)
        return self.adapter.adapt_data(result, username, directory, {'cursor': cursor})

    def _get_temporary_link(self, item_id: str, token: str, tag: str) -> str:
        client = self._client(token)
        try:
            result = client.files_get_temporary_link(normalize_dropbox_path(item_id))
        except _CLIENT_ERRORS as e:
            raise self._fail(e, tag)
        return result.link

    def download(self, item_id: str, token: str) -> Iterator[bytes]:
        url = self._get_temporary_link(item_id, token, 'provider.dropbox.download.error')

        return open_stream(
            self.session,
            url,
            self.classifier,
            'provider.dropbox.download.url.error',
            timeout=self.timeout,
            chunk_size=self.chunk_size,
        )

    def thumbnail(self, item_id: str, token: str) -> Iterator[bytes]:
        client = self._client(token)
        try:
            _, response = client.files_get_thumbnail_v2(
                PathOrLink.path(normalize_dropbox_path(item_id)),
                format=ThumbnailFormat.jpeg,
                size=ThumbnailSize.w256h256,
            )
        except _CLIENT_ERRORS as e:
            raise self._fail(e, 'provider.dropbox.thumbnail.error')

        return stream_response(response, self.chunk_size)

    def size(self, item_id: str, token: str) -> Optional[int]:
        url = self._get_temporary_link(item_id, token, 'provider.dropbox.size.error')

        try:
            meta = get_url_meta(self.session, url, timeout=self.timeout)
        except (requests.exceptions.RequestException, ProviderApiError, ValueError) as e:
            logger.error(
                "Size probe failed",
                extra={'tag': 'provider.dropbox.size.error', 'error': repr(e)},
            )
            return None

        return meta['size']

    def logout(self, token: str) -> LogoutResult:
        client = self._client(token)
        try:
            client.auth_token_revoke()
        except AuthError:
            logger.info(
                "Token already invalid, nothing to revoke",
                extra={'tag': 'provider.dropbox.logout'},
            )
        except _CLIENT_ERRORS as e:
            raise self._fail(e, 'provider.dropbox.logout.error')

        return LogoutResult(revoked=True)
