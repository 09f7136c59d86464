"""
Facebook Provider
=================
Facebook Graph API implementation of the provider contract.

Features:
- Album listing at the root, photo listing inside an album
- Cursor pagination through the Graph API 'after' cursor
- Largest-variant media selection for downloads
- Public thumbnail URLs in listings (no thumbnail proxying)

API reference: https://developers.facebook.com/docs/graph-api/using-graph-api/
"""

from typing import Any, Dict, Iterator, Optional

import requests

from ...config.constants import (
    FACEBOOK_ALBUM_FIELDS,
    FACEBOOK_GRAPH_URL,
    FACEBOOK_INVALID_TOKEN_CODE,
    FACEBOOK_PHOTO_FIELDS,
    PROVIDER_FACEBOOK,
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
    """Graph API error code 190: invalid OAuth 2.0 access token."""
    return body['error']['code'] == FACEBOOK_INVALID_TOKEN_CODE


def get_error_message(body: Any) -> Optional[str]:
    return body['error']['message']


class FacebookProvider(BaseProvider):
    """
    Facebook Graph API provider.

    Listing uses two endpoints:
    - me/albums: root listing, every album is a folder
    - {album_id}/photos: photos of one album

    Photo downloads are two-phase: the photo object is fetched for its
    image variants, then the largest variant's CDN URL is streamed.
    """

    name = PROVIDER_FACEBOOK
    display_name = "Facebook"

    def __init__(self, session=None, settings=None):
        super().__init__(session, settings)
        self.adapter = adapter
        self.classifier = ErrorClassifier(
            self.name,
            is_auth_error=is_auth_error,
            get_error_message=get_error_message,
        )

        version = self.settings.facebook_graph_version
        self.base_url = f"{FACEBOOK_GRAPH_URL}/{version}" if version else FACEBOOK_GRAPH_URL

    def list(
        self,
        directory: Optional[str],
        token: str,
        cursor: Optional[str] = None,
    ) -> ListResult:
        """List albums (root) or the photos of one album."""
        params = {'fields': FACEBOOK_ALBUM_FIELDS}

        if cursor:
            params['after'] = cursor

        path = 'me/albums'
        if directory:
            path = f"{directory}/photos"
            params['fields'] = FACEBOOK_PHOTO_FIELDS

        body = self._get(path, token, params, 'provider.facebook.list.error')

        username = self._get_username(token)
        return self.adapter.adapt_data(body, username, directory, {'cursor': cursor})

    def _get_username(self, token: str) -> Optional[str]:
        body = self._get('me', token, {'fields': 'email'}, 'provider.facebook.user.error')
        return self.adapter.get_username(body)

    def _get(self, path: str, token: str, params: Dict[str, Any], tag: str) -> Any:
        return request_json(
            self.session,
            'GET',
            f"{self.base_url}/{path}",
            self.classifier,
            tag,
            timeout=self.timeout,
            params=params,
            headers=self._auth_headers(token),
        ) or {}

    def _get_media_url(self, item_id: str, token: str, tag: str) -> str:
        body = self._get(item_id, token, {'fields': 'images'}, tag)

        url = self.adapter.get_largest_image_url(body)
        if not url:
            logger.error("Item has no downloadable image", extra={'tag': tag})
            raise ProviderApiError(f"no downloadable image for item {item_id}", 404)
        return url

    def download(self, item_id: str, token: str) -> Iterator[bytes]:
        url = self._get_media_url(item_id, token, 'provider.facebook.download.error')

        # CDN URLs are pre-signed; the token is not sent along
        return open_stream(
            self.session,
            url,
            self.classifier,
            'provider.facebook.download.url.error',
            timeout=self.timeout,
            chunk_size=self.chunk_size,
        )

    # thumbnail(): not implemented, listings carry public thumbnail URLs

    def size(self, item_id: str, token: str) -> Optional[int]:
        url = self._get_media_url(item_id, token, 'provider.facebook.size.error')

        try:
            meta = get_url_meta(self.session, url, timeout=self.timeout)
        except (requests.exceptions.RequestException, ProviderApiError, ValueError) as e:
            logger.error(
                "Size probe failed",
                extra={'tag': 'provider.facebook.size.error', 'error': repr(e)},
            )
            return None

        return meta['size']

    def logout(self, token: str) -> LogoutResult:
        try:
            request_json(
                self.session,
                'DELETE',
                f"{self.base_url}/me/permissions",
                self.classifier,
                'provider.facebook.logout.error',
                timeout=self.timeout,
                headers=self._auth_headers(token),
            )
        except ProviderAuthError:
            logger.info(
                "Token already invalid, nothing to revoke",
                extra={'tag': 'provider.facebook.logout'},
            )

        return LogoutResult(revoked=True)
