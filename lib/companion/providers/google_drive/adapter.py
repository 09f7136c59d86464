"""
Google Drive adapter.

Pure functions mapping Drive API v3 payloads to canonical fields, plus the
media selection for downloads: Google-native documents have no binary
content and are exported instead.
"""

from typing import Any, Dict, List, Optional, TypedDict
from urllib.parse import quote, urlencode

from ...config.constants import (
    GOOGLE_DEFAULT_EXPORT_MIME,
    GOOGLE_DRIVE_API_URL,
    GOOGLE_DRIVE_FOLDER_MIME,
    GOOGLE_EXPORT_MIME_TYPES,
)
from ..models import CanonicalItem, ListResult

GOOGLE_APPS_PREFIX = 'application/vnd.google-apps.'


class DriveFile(TypedDict, total=False):
    id: str
    name: str
    mimeType: str
    size: str            # int64 serialized as string; absent for native docs
    modifiedTime: str
    iconLink: str
    thumbnailLink: str


def is_folder(item: DriveFile) -> bool:
    return item.get('mimeType') == GOOGLE_DRIVE_FOLDER_MIME


def is_google_native(item: DriveFile) -> bool:
    mime_type = item.get('mimeType') or ''
    return mime_type.startswith(GOOGLE_APPS_PREFIX) and not is_folder(item)


def get_item_icon(item: DriveFile) -> Optional[str]:
    return item.get('iconLink') or None


def get_item_sub_list(res: Dict[str, Any]) -> List[DriveFile]:
    if not isinstance(res, dict):
        return []
    return list(res.get('files') or [])


def get_item_name(item: DriveFile) -> str:
    return item.get('name') or ''


def get_mime_type(item: DriveFile) -> Optional[str]:
    if is_folder(item):
        return None
    if is_google_native(item):
        return get_export_mime_type(item)
    return item.get('mimeType') or None


def get_item_size(item: DriveFile) -> Optional[int]:
    raw = item.get('size')
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def get_item_id(item: DriveFile) -> str:
    return item.get('id') or ''


def get_item_request_path(item: DriveFile) -> str:
    return get_item_id(item)


def get_item_modified_date(item: DriveFile) -> Optional[str]:
    return item.get('modifiedTime')


def get_item_thumbnail_url(item: DriveFile) -> Optional[str]:
    return item.get('thumbnailLink') or None


def get_next_page_path(
    res: Dict[str, Any],
    current_query: Optional[Dict[str, Any]] = None,
    directory: Optional[str] = None,
) -> Optional[str]:
    """nextPageToken is bound to the query that produced it."""
    if not isinstance(res, dict):
        return None
    return res.get('nextPageToken') or None


def get_username(about: Optional[Dict[str, Any]]) -> Optional[str]:
    if not isinstance(about, dict):
        return None
    user = about.get('user') or {}
    return user.get('emailAddress') or user.get('displayName')


def get_export_mime_type(item: DriveFile) -> str:
    return GOOGLE_EXPORT_MIME_TYPES.get(item.get('mimeType'), GOOGLE_DEFAULT_EXPORT_MIME)


def get_download_url(item: DriveFile) -> Optional[str]:
    """
    Content URL for a file.

    Returns:
        alt=media URL for binary files, export URL for Google-native
        documents, None for folders
    """
    item_id = get_item_id(item)
    if not item_id or is_folder(item):
        return None

    file_url = f"{GOOGLE_DRIVE_API_URL}/files/{quote(item_id, safe='')}"
    if is_google_native(item):
        query = urlencode({'mimeType': get_export_mime_type(item)})
        return f"{file_url}/export?{query}"

    return f"{file_url}?{urlencode({'alt': 'media', 'supportsAllDrives': 'true'})}"


def adapt_data(
    res: Dict[str, Any],
    username: Optional[str],
    directory: Optional[str],
    current_query: Optional[Dict[str, Any]] = None,
) -> ListResult:
    items = [
        CanonicalItem(
            is_folder=is_folder(item),
            icon=get_item_icon(item),
            name=get_item_name(item),
            mime_type=get_mime_type(item),
            size=get_item_size(item),
            id=get_item_id(item),
            thumbnail=get_item_thumbnail_url(item),
            request_path=get_item_request_path(item),
            modified_date=get_item_modified_date(item),
        )
        for item in get_item_sub_list(res)
    ]

    return ListResult(
        username=username,
        items=items,
        next_page_path=get_next_page_path(res, current_query, directory),
    )
