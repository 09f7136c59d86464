"""
Companion - Remote File Providers
=================================
Uniform list/download/thumbnail/size/logout contract over third-party
file services.

Supported Providers:
    - Facebook (Graph API albums and photos)
    - Dropbox (API v2 through the official SDK)
    - Google Drive (Drive API v3, native documents exported)
"""

from .base import BaseProvider
from .classifier import ErrorClassifier
from .dropbox import DropboxProvider
from .facebook import FacebookProvider
from .google_drive import GoogleDriveProvider
from .models import CanonicalItem, ListResult, LogoutResult, ProviderRequest
from .registry import ProviderRegistry
from .transport import deliver

__all__ = [
    # Contract
    "BaseProvider",
    "ErrorClassifier",
    "ProviderRegistry",
    "deliver",
    # Providers
    "FacebookProvider",
    "DropboxProvider",
    "GoogleDriveProvider",
    # Models
    "CanonicalItem",
    "ListResult",
    "LogoutResult",
    "ProviderRequest",
]
