"""
Google Drive Provider
=====================
Google Drive API v3 implementation of the provider contract.

Features:
- Folder listing by parent ID ('root' at the top level)
- Shared Drive items included in listings
- Export of Google-native documents to Office/PDF formats on download
- Thumbnail proxying from the file's thumbnailLink

Path Format:
Unlike Dropbox which uses filesystem-style paths (/folder/file.jpg),
Google Drive uses folder IDs. Directories and items are identified by ID.
"""

from typing import Any, Dict, Iterator, Optional
from urllib.parse import quote

import requests

from ...config.constants import (
    GOOGLE_DRIVE_API_URL,
    GOOGLE_DRIVE_ITEM_FIELDS,
    GOOGLE_DRIVE_LIST_FIELDS,
    GOOGLE_DRIVE_PAGE_SIZE,
    GOOGLE_REVOKE_URL,
    PROVIDER_GOOGLE_DRIVE,
)
from ...config.logging_config import setup_logger
from ...errors import ProviderApiError, ProviderAuthError
from ...utils.request_utils import get_url_meta
from ..base import BaseProvider
from ..classifier import ErrorClassifier
from ..models import ListResult, LogoutResult
from ..transport import open_stream, request_json
from . import adapter

logger = setup_logger(__name__)


def is_auth_error(response: requests.Response, body: Any) -> bool:
    """
    401 from the Drive API, or an invalid_token answer from the OAuth
    endpoints (which use 400).
    """
    if response.status_code == 401:
        return True
    if not isinstance(body, dict):
        return False
    error = body.get('error')
    if isinstance(error, dict):
        return error.get('status') == 'UNAUTHENTICATED'
    return error == 'invalid_token'


def get_error_message(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    error = body.get('error')
    if isinstance(error, dict):
        return error.get('message')
    return body.get('error_description') or error


def _escape_query_value(value: str) -> str:
    return value.replace('\\', '\\\\').replace("'", "\\'")


class GoogleDriveProvider(BaseProvider):
    """
    Google Drive provider.

    Downloads are two-phase: the file resource is fetched to decide between
    alt=media and an export URL, then that URL is streamed with the token.
    """

    name = PROVIDER_GOOGLE_DRIVE
    display_name = "Google Drive"

    def __init__(self, session=None, settings=None):
        super().__init__(session, settings)
        self.adapter = adapter
        self.classifier = ErrorClassifier(
            self.name,
            is_auth_error=is_auth_error,
            get_error_message=get_error_message,
        )

    def _get(self, url: str, token: str, params: Dict[str, Any], tag: str) -> Any:
        return request_json(
            self.session,
            'GET',
            url,
            self.classifier,
            tag,
            timeout=self.timeout,
            params=params,
            headers=self._auth_headers(token),
        ) or {}

    def list(
        self,
        directory: Optional[str],
        token: str,
        cursor: Optional[str] = None,
    ) -> ListResult:
        folder_id = directory or 'root'
        params = {
            'q': f"'{_escape_query_value(folder_id)}' in parents and trashed=false",
            'fields': GOOGLE_DRIVE_LIST_FIELDS,
            'pageSize': GOOGLE_DRIVE_PAGE_SIZE,
            'orderBy': 'folder,name',
            'supportsAllDrives': 'true',
            'includeItemsFromAllDrives': 'true',
        }
        if cursor:
            params['pageToken'] = cursor

        body = self._get(
            f"{GOOGLE_DRIVE_API_URL}/files", token, params, 'provider.google_drive.list.error'
        )

        username = self._get_username(token)
        return self.adapter.adapt_data(body, username, directory, {'cursor': cursor})

    def _get_username(self, token: str) -> Optional[str]:
        body = self._get(
            f"{GOOGLE_DRIVE_API_URL}/about",
            token,
            {'fields': 'user'},
            'provider.google_drive.user.error',
        )
        return self.adapter.get_username(body)

    def _get_item(self, item_id: str, token: str, tag: str) -> Dict[str, Any]:
        return self._get(
            f"{GOOGLE_DRIVE_API_URL}/files/{quote(item_id, safe='')}",
            token,
            {'fields': GOOGLE_DRIVE_ITEM_FIELDS, 'supportsAllDrives': 'true'},
            tag,
        )

    def _get_media_url(self, item_id: str, token: str, tag: str) -> str:
        item = self._get_item(item_id, token, tag)

        url = self.adapter.get_download_url(item)
        if not url:
            logger.error("Item has no downloadable content", extra={'tag': tag})
            raise ProviderApiError(f"item {item_id} has no downloadable content", 400)
        return url

    def download(self, item_id: str, token: str) -> Iterator[bytes]:
        url = self._get_media_url(item_id, token, 'provider.google_drive.download.error')

        return open_stream(
            self.session,
            url,
            self.classifier,
            'provider.google_drive.download.url.error',
            headers=self._auth_headers(token),
            timeout=self.timeout,
            chunk_size=self.chunk_size,
        )

    def thumbnail(self, item_id: str, token: str) -> Iterator[bytes]:
        item = self._get_item(item_id, token, 'provider.google_drive.thumbnail.error')

        url = self.adapter.get_item_thumbnail_url(item)
        if not url:
            raise ProviderApiError(f"no thumbnail available for item {item_id}", 404)

        return open_stream(
            self.session,
            url,
            self.classifier,
            'provider.google_drive.thumbnail.url.error',
            headers=self._auth_headers(token),
            timeout=self.timeout,
            chunk_size=self.chunk_size,
        )

    def size(self, item_id: str, token: str) -> Optional[int]:
        url = self._get_media_url(item_id, token, 'provider.google_drive.size.error')

        try:
            meta = get_url_meta(
                self.session,
                url,
                headers=self._auth_headers(token),
                timeout=self.timeout,
            )
        except (requests.exceptions.RequestException, ProviderApiError, ValueError) as e:
            logger.error(
                "Size probe failed",
                extra={'tag': 'provider.google_drive.size.error', 'error': repr(e)},
            )
            return None

        return meta['size']

    def logout(self, token: str) -> LogoutResult:
        try:
            request_json(
                self.session,
                'POST',
                GOOGLE_REVOKE_URL,
                self.classifier,
                'provider.google_drive.logout.error',
                timeout=self.timeout,
                data={'token': token},
            )
        except ProviderAuthError:
            logger.info(
                "Token already invalid, nothing to revoke",
                extra={'tag': 'provider.google_drive.logout'},
            )

        return LogoutResult(revoked=True)
