"""
Utilities module - HTTP session, streaming and file helpers.
"""

from .file_utils import (
    normalize_dropbox_path,
    get_file_extension,
    get_mime_type,
)

from .request_utils import (
    create_session,
    validate_url,
    get_url_meta,
    stream_response,
    ResponseStream,
)

__all__ = [
    # File utilities
    "normalize_dropbox_path",
    "get_file_extension",
    "get_mime_type",
    # Request utilities
    "create_session",
    "validate_url",
    "get_url_meta",
    "stream_response",
    "ResponseStream",
]
