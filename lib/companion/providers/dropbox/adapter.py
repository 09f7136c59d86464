"""
Dropbox adapter.

Pure functions mapping Dropbox SDK metadata objects (ListFolderResult,
FileMetadata, FolderMetadata, FullAccount) to canonical fields.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from dropbox.files import FileMetadata, FolderMetadata

from ...utils.file_utils import get_mime_type as mime_type_for_name
from ..models import CanonicalItem, ListResult


def is_folder(entry: Any) -> bool:
    return isinstance(entry, FolderMetadata)


def get_item_icon(entry: Any) -> Optional[str]:
    if is_folder(entry):
        return 'folder'
    if isinstance(entry, FileMetadata):
        return 'file'
    return None


def get_item_sub_list(result: Any) -> List[Any]:
    """Entries of a ListFolderResult; deleted entries are skipped."""
    entries = getattr(result, 'entries', None) or []
    return [
        entry for entry in entries
        if isinstance(entry, (FileMetadata, FolderMetadata))
    ]


def get_item_name(entry: Any) -> str:
    return getattr(entry, 'name', None) or ''


def get_mime_type(entry: Any) -> Optional[str]:
    if is_folder(entry):
        return None
    return mime_type_for_name(get_item_name(entry))


def get_item_size(entry: Any) -> Optional[int]:
    if not isinstance(entry, FileMetadata):
        return None
    return getattr(entry, 'size', None)


def get_item_id(entry: Any) -> str:
    return getattr(entry, 'id', None) or ''


def get_item_request_path(entry: Any) -> str:
    # Dropbox accepts "id:..." wherever it accepts a path
    return getattr(entry, 'path_lower', None) or get_item_id(entry)


def get_item_modified_date(entry: Any) -> Optional[str]:
    modified = getattr(entry, 'server_modified', None)
    if not isinstance(modified, datetime):
        return None
    # SDK timestamps are naive UTC
    return modified.strftime('%Y-%m-%dT%H:%M:%SZ')


def get_item_thumbnail_url(entry: Any) -> Optional[str]:
    # Dropbox thumbnails require the token; they are served by thumbnail()
    return None


def get_next_page_path(
    result: Any,
    current_query: Optional[Dict[str, Any]] = None,
    directory: Optional[str] = None,
) -> Optional[str]:
    """The list_folder cursor already encodes the directory."""
    if not getattr(result, 'has_more', False):
        return None
    return getattr(result, 'cursor', None) or None


def get_username(account: Any) -> Optional[str]:
    email = getattr(account, 'email', None)
    if email:
        return email
    name = getattr(account, 'name', None)
    return getattr(name, 'display_name', None)


def adapt_data(
    result: Any,
    username: Optional[str],
    directory: Optional[str],
    current_query: Optional[Dict[str, Any]] = None,
) -> ListResult:
    items = [
        CanonicalItem(
            is_folder=is_folder(entry),
            icon=get_item_icon(entry),
            name=get_item_name(entry),
            mime_type=get_mime_type(entry),
            size=get_item_size(entry),
            id=get_item_id(entry),
            thumbnail=get_item_thumbnail_url(entry),
            request_path=get_item_request_path(entry),
            modified_date=get_item_modified_date(entry),
        )
        for entry in get_item_sub_list(result)
    ]

    return ListResult(
        username=username,
        items=items,
        next_page_path=get_next_page_path(result, current_query, directory),
    )
