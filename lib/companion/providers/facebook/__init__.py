"""
Facebook provider (Graph API albums and photos).
"""

from . import adapter
from .provider import FacebookProvider

__all__ = [
    "adapter",
    "FacebookProvider",
]
