"""
Provider Registry
=================
Selects provider implementations by name and routes inbound requests.

Class level: the mapping of provider names to provider classes.
Instance level: one provider instance per enabled name, all sharing a
single HTTP session (connection pool).
"""

from typing import Any, Dict, List, Optional

import requests

from ..config.constants import (
    PROVIDER_DROPBOX,
    PROVIDER_FACEBOOK,
    PROVIDER_GOOGLE_DRIVE,
)
from ..config.credentials import mask_token
from ..config.logging_config import set_level, setup_logger
from ..config.settings import CompanionSettings
from ..errors import ProviderError
from ..utils.request_utils import create_session
from .base import BaseProvider
from .dropbox import DropboxProvider
from .facebook import FacebookProvider
from .google_drive import GoogleDriveProvider
from .models import ProviderRequest

logger = setup_logger(__name__)

OPERATIONS = ('list', 'download', 'thumbnail', 'size', 'logout')


class ProviderRegistry:
    """
    Registry of remote file providers.

    Usage:
        registry = ProviderRegistry.from_settings()

        provider = registry.get("facebook")
        page = provider.list(None, token)

        # Or through the inbound call surface
        page = registry.dispatch("facebook", "list", ProviderRequest(token=token))
    """

    # Registered provider classes
    _providers = {
        PROVIDER_FACEBOOK: FacebookProvider,
        PROVIDER_DROPBOX: DropboxProvider,
        PROVIDER_GOOGLE_DRIVE: GoogleDriveProvider,
    }

    def __init__(self, providers: Dict[str, BaseProvider]):
        self._instances = dict(providers)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[CompanionSettings] = None,
        session: Optional[requests.Session] = None,
    ) -> "ProviderRegistry":
        """
        Build a registry holding every enabled provider.

        Args:
            settings: Provider layer settings (loaded from env if None)
            session: Shared HTTP session (created from settings if None)

        Returns:
            ProviderRegistry instance

        Raises:
            ValueError: If an enabled provider name is unknown
        """
        settings = settings or CompanionSettings.from_env()
        set_level(settings.log_level)
        session = session if session is not None else create_session(settings.pool_size)

        instances = {}
        for name in settings.enabled_providers:
            instances[name] = cls.create(name, session=session, settings=settings)

        logger.info(
            "Provider registry ready",
            extra={'providers': sorted(instances)},
        )
        return cls(instances)

    @classmethod
    def create(
        cls,
        provider_type: str,
        session: Optional[requests.Session] = None,
        settings: Optional[CompanionSettings] = None,
    ) -> BaseProvider:
        """
        Create a provider instance.

        Args:
            provider_type: Provider name ('facebook', 'dropbox', 'google_drive')
            session: Shared HTTP session
            settings: Provider layer settings

        Returns:
            Provider instance

        Raises:
            ValueError: If provider type unknown
        """
        provider_type = provider_type.lower().strip()

        if provider_type not in cls._providers:
            supported = ", ".join(cls._providers.keys())
            raise ValueError(
                f"Unknown provider: '{provider_type}'. "
                f"Supported: {supported}"
            )

        provider_class = cls._providers[provider_type]
        return provider_class(session=session, settings=settings)

    @classmethod
    def get_supported_providers(cls) -> list:
        """Get list of supported provider types."""
        return list(cls._providers.keys())

    @classmethod
    def is_provider_supported(cls, provider_type: str) -> bool:
        """Check if a provider type is supported."""
        return provider_type.lower().strip() in cls._providers

    @classmethod
    def register_provider(cls, provider_type: str, provider_class: type) -> None:
        """
        Register a new provider class.

        Args:
            provider_type: Provider type identifier
            provider_class: BaseProvider subclass

        Raises:
            TypeError: If provider_class is not a BaseProvider subclass
        """
        if not isinstance(provider_class, type) or not issubclass(provider_class, BaseProvider):
            raise TypeError(f"{provider_class!r} is not a BaseProvider subclass")

        cls._providers[provider_type.lower().strip()] = provider_class

    def names(self) -> List[str]:
        """Names of the providers held by this registry."""
        return list(self._instances.keys())

    def get(self, name: str) -> BaseProvider:
        """
        Look up an enabled provider instance.

        Raises:
            ValueError: If no provider is enabled under that name
        """
        key = name.lower().strip()
        try:
            return self._instances[key]
        except KeyError:
            raise ValueError(
                f"Provider not enabled: '{key}'. "
                f"Enabled: {', '.join(self._instances) or 'none'}"
            ) from None

    def dispatch(self, name: str, operation: str, request: ProviderRequest) -> Any:
        """
        Route a normalized request to a provider operation.

        Args:
            name: Provider name
            operation: One of 'list', 'download', 'thumbnail', 'size', 'logout'
            request: Normalized inbound request

        Returns:
            ListResult, Iterator[bytes], Optional[int] or LogoutResult

        Raises:
            ValueError: Unknown provider, unknown operation, or missing item id
            ProviderError: Classified provider failures
        """
        provider = self.get(name)

        if operation not in OPERATIONS:
            raise ValueError(
                f"Unknown operation: '{operation}'. Supported: {', '.join(OPERATIONS)}"
            )

        logger.info(
            "Dispatching provider request",
            extra={
                'provider': name,
                'operation': operation,
                'token': mask_token(request.token),
            },
        )

        try:
            return self._call(provider, operation, request)
        except ProviderError as e:
            logger.error(
                "Provider request failed",
                extra={
                    'tag': f"provider.{provider.name}.{operation}.error",
                    'error': repr(e),
                    'token': mask_token(request.token),
                },
            )
            raise

    @staticmethod
    def _call(provider: BaseProvider, operation: str, request: ProviderRequest) -> Any:
        if operation == 'list':
            return provider.list(request.directory, request.token, cursor=request.cursor)

        if operation == 'logout':
            return provider.logout(request.token)

        if not request.id:
            raise ValueError(f"Operation '{operation}' requires an item id")

        if operation == 'download':
            return provider.download(request.id, request.token)
        if operation == 'thumbnail':
            return provider.thumbnail(request.id, request.token)
        return provider.size(request.id, request.token)
