"""
File Utilities
==============
Path normalization and content type detection.
"""

import mimetypes
import os
from typing import Optional

from ..config.constants import CONTENT_TYPE_MAPPING

# Dropbox accepts these in place of a path
_DROPBOX_PATH_PREFIXES = ('id:', 'rev:', 'ns:')


def normalize_dropbox_path(path: Optional[str]) -> str:
    """
    Normalize a path for the Dropbox API.

    - Returns "" for the root (None, "" or "/")
    - Leaves id:/rev:/ns: references untouched
    - Converts backslashes to forward slashes
    - Ensures leading slash
    - Removes duplicate and trailing slashes
    - Converts to lowercase

    Args:
        path: Raw path string

    Returns:
        Normalized path string
    """
    if not path or path == '/':
        return ''

    if path.startswith(_DROPBOX_PATH_PREFIXES):
        return path

    normalized = path.replace('\\', '/')

    if not normalized.startswith('/'):
        normalized = '/' + normalized

    while '//' in normalized:
        normalized = normalized.replace('//', '/')

    if len(normalized) > 1 and normalized.endswith('/'):
        normalized = normalized[:-1]

    if normalized == '/':
        return ''

    return normalized.lower()


def get_file_extension(filename: Optional[str]) -> str:
    """
    Get lowercase file extension from filename.

    Args:
        filename: Filename or path

    Returns:
        Lowercase extension including dot (e.g., '.jpg')
    """
    if not filename:
        return ''

    _, ext = os.path.splitext(filename)
    return ext.lower()


def get_mime_type(filename: Optional[str]) -> Optional[str]:
    """
    Guess the MIME type from a filename.

    Args:
        filename: Filename to analyze

    Returns:
        MIME type string, or None when the extension is unknown
    """
    file_ext = get_file_extension(filename)
    if not file_ext:
        return None

    content_type = CONTENT_TYPE_MAPPING.get(file_ext.lstrip('.'))
    if content_type:
        return content_type

    guessed, _ = mimetypes.guess_type(f"file{file_ext}")
    return guessed
