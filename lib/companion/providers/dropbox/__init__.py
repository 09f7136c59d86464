"""
Dropbox provider (Dropbox API v2).
"""

from . import adapter
from .provider import DropboxProvider

__all__ = [
    "adapter",
    "DropboxProvider",
]
