"""
Google Drive provider (Drive API v3).
"""

from . import adapter
from .provider import GoogleDriveProvider

__all__ = [
    "adapter",
    "GoogleDriveProvider",
]
