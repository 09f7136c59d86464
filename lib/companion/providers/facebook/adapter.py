"""
Facebook Graph API adapter.

Pure functions mapping Graph API payloads to canonical fields. Albums
(root listing) are folders; photos (album listing) are files.
"""

from typing import Any, Dict, List, Optional, TypedDict

from ..models import CanonicalItem, ListResult


class FacebookImage(TypedDict, total=False):
    source: str
    width: int
    height: int


class FacebookItem(TypedDict, total=False):
    id: str
    name: str
    type: str            # albums only
    created_time: str
    cover_photo: Dict[str, Any]
    icon: str            # photos only
    images: List[FacebookImage]
    width: int
    height: int


def _resolution(image: FacebookImage) -> int:
    width = image.get('width') or 0
    height = image.get('height') or 0
    return width * height


def sort_images(images: Optional[List[FacebookImage]]) -> List[FacebookImage]:
    """
    Order image variants by ascending resolution.

    The sort is stable: variants with equal resolution keep their original
    order, so the last element is a deterministic "largest" choice.
    """
    return sorted(images or [], key=_resolution)


def is_folder(item: FacebookItem) -> bool:
    # Only albums carry a 'type' field in the requested field sets
    return bool(item.get('type'))


def get_item_icon(item: FacebookItem) -> Optional[str]:
    return item.get('icon') or None


def get_item_sub_list(res: Dict[str, Any]) -> List[FacebookItem]:
    if not isinstance(res, dict):
        return []
    return list(res.get('data') or [])


def get_item_name(item: FacebookItem) -> str:
    name = item.get('name')
    if name:
        return name
    # Photos without a caption
    return f"{item.get('id', '')} {item.get('created_time', '')}".strip()


def get_mime_type(item: FacebookItem) -> Optional[str]:
    return None if is_folder(item) else 'image/jpeg'


def get_item_id(item: FacebookItem) -> str:
    return str(item.get('id', ''))


def get_item_request_path(item: FacebookItem) -> str:
    return str(item.get('id', ''))


def get_item_modified_date(item: FacebookItem) -> Optional[str]:
    return item.get('created_time')


def get_item_thumbnail_url(item: FacebookItem) -> Optional[str]:
    """Smallest image variant of a photo; albums have none."""
    if is_folder(item):
        return None
    images = sort_images(item.get('images'))
    if not images:
        return None
    return images[0].get('source')


def get_largest_image_url(item: FacebookItem) -> Optional[str]:
    images = sort_images(item.get('images'))
    if not images:
        return None
    return images[-1].get('source')


def get_next_page_path(
    res: Dict[str, Any],
    current_query: Optional[Dict[str, Any]] = None,
    directory: Optional[str] = None,
) -> Optional[str]:
    """
    Cursor for the next page.

    The Graph API only includes paging.next when another page exists; the
    'after' cursor alone is present on the last page too.
    """
    if not isinstance(res, dict):
        return None
    paging = res.get('paging')
    if not isinstance(paging, dict) or not paging.get('next'):
        return None
    cursors = paging.get('cursors')
    if not isinstance(cursors, dict):
        return None
    return cursors.get('after') or None


def get_username(user: Optional[Dict[str, Any]]) -> Optional[str]:
    if not user:
        return None
    return user.get('email') or user.get('name')


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
            # The Graph API does not report file sizes
            size=None,
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
