"""
Companion Providers
===================
Server-side provider layer for a file picker: browse, list and fetch files
from remote services through one contract.
"""

from .config.constants import SHARED_VERSION
from .errors import (
    ProviderApiError,
    ProviderAuthError,
    ProviderError,
    UnsupportedOperationError,
)
from .providers import (
    BaseProvider,
    ProviderRegistry,
    ProviderRequest,
    deliver,
)

__version__ = SHARED_VERSION

__all__ = [
    "__version__",
    "ProviderError",
    "ProviderAuthError",
    "ProviderApiError",
    "UnsupportedOperationError",
    "BaseProvider",
    "ProviderRegistry",
    "ProviderRequest",
    "deliver",
]
