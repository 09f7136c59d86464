"""
Companion Providers - Base Provider
===================================
Abstract base class for every remote file provider.

Providers are stateless across calls:
- The access token is passed into each operation and never stored
- No session or listing state survives a call
- The HTTP session (connection pool) is injected and may be shared by
  all providers and all concurrent calls
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

import requests

from ..config.logging_config import setup_logger
from ..config.settings import CompanionSettings
from ..errors import UnsupportedOperationError
from ..utils.request_utils import create_session
from .models import ListResult, LogoutResult

logger = setup_logger(__name__)


class BaseProvider(ABC):
    """
    Abstract base class for remote file providers.

    All providers (Facebook, Dropbox, Google Drive, ...) must implement
    this interface to be usable with the ProviderRegistry.

    Each concrete provider composes three collaborators:
    - self.session: shared requests.Session
    - self.adapter: module of pure functions normalizing raw payloads
    - self.classifier: ErrorClassifier with the provider's auth marker

    Typical workflow:
        provider = registry.get("facebook")

        page = provider.list(None, token)
        while page.next_page_path:
            page = provider.list(None, token, cursor=page.next_page_path)

        for chunk in provider.download(page.items[0].id, token):
            sink.write(chunk)
    """

    # Registry key, e.g. 'facebook'
    name: str = ""

    # Human-readable name, e.g. 'Facebook'
    display_name: str = ""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        settings: Optional[CompanionSettings] = None,
    ):
        """
        Args:
            session: Shared HTTP session (a private one is created if omitted)
            settings: Provider layer settings (defaults if omitted)
        """
        self.settings = settings or CompanionSettings()
        self.session = session if session is not None else create_session(self.settings.pool_size)
        self.timeout = self.settings.http_timeout
        self.chunk_size = self.settings.download_chunk_size

    @abstractmethod
    def list(
        self,
        directory: Optional[str],
        token: str,
        cursor: Optional[str] = None,
    ) -> ListResult:
        """
        List one page of a directory.

        The listing call is followed, only after it succeeds, by an identity
        call resolving the username.

        Args:
            directory: Directory identifier (None = root)
            token: Provider access token
            cursor: Cursor from a previous ListResult of this provider

        Returns:
            ListResult with canonical items and the next cursor

        Raises:
            ProviderAuthError: If the token is invalid or expired
            ProviderApiError: If the service rejected either call
            requests.exceptions.RequestException: If no response was received
        """
        pass

    @abstractmethod
    def download(self, item_id: str, token: str) -> Iterator[bytes]:
        """
        Stream the binary content of an item.

        Item metadata is fetched first to select the concrete content URL;
        the content stream is opened only afterwards. Errors of either phase
        that happen before streaming starts are raised by this call.

        Args:
            item_id: Item identifier from a CanonicalItem
            token: Provider access token

        Returns:
            Iterator of byte chunks. Exhaustion means the download is
            complete; an exception while iterating ends the stream. Closing
            the iterator early releases the connection.
        """
        pass

    def thumbnail(self, item_id: str, token: str) -> Iterator[bytes]:
        """
        Stream a thumbnail image for an item.

        Default implementation raises UnsupportedOperationError without
        touching the network. Providers that expose directly usable
        thumbnail URLs in their listings keep this default.

        Raises:
            UnsupportedOperationError: Always, unless overridden
        """
        error = UnsupportedOperationError(
            f"call to thumbnail is not implemented for {self.name}"
        )
        logger.error(
            "Thumbnail not supported",
            extra={'tag': f"provider.{self.name}.thumbnail.error"},
        )
        raise error

    @abstractmethod
    def size(self, item_id: str, token: str) -> Optional[int]:
        """
        Get the content length of an item.

        Resolves the content URL like download(), then probes it without
        transferring the body. Size is advisory: a failed probe yields None.

        Returns:
            Size in bytes, or None when unknown
        """
        pass

    @abstractmethod
    def logout(self, token: str) -> LogoutResult:
        """
        Revoke the access token at the remote service.

        Revoking an already revoked token reports revoked=True as well.

        Returns:
            LogoutResult
        """
        pass

    def supports_thumbnail(self) -> bool:
        """Whether thumbnail() is implemented, so callers can hide the affordance."""
        return type(self).thumbnail is not BaseProvider.thumbnail

    def get_provider_type(self) -> str:
        """Get provider type identifier."""
        return self.name

    def get_provider_name(self) -> str:
        """Get human-readable provider name."""
        return self.display_name

    @staticmethod
    def _auth_headers(token: str) -> dict:
        return {'Authorization': f"Bearer {token}"}
