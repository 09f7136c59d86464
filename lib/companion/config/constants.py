"""
Companion Providers - Constants and Configuration
=================================================
Shared constants, provider identifiers, API endpoints and default values
for the remote file-picker provider layer.
"""

from typing import Dict, Tuple

# Version identifier for Companion Providers
SHARED_VERSION = "1.0.0"
PACKAGE_NAME = "companion-providers"

USER_AGENT = f"{PACKAGE_NAME}/{SHARED_VERSION}"

# =============================================================================
# PROVIDER IDENTIFIERS
# =============================================================================

PROVIDER_FACEBOOK: str = "facebook"
PROVIDER_DROPBOX: str = "dropbox"
PROVIDER_GOOGLE_DRIVE: str = "google_drive"

# =============================================================================
# HTTP CONFIGURATION
# =============================================================================

# Per-call I/O timeout (seconds)
DEFAULT_HTTP_TIMEOUT: float = 30.0

# Chunk size for streamed downloads (bytes)
DOWNLOAD_CHUNK_SIZE: int = 64 * 1024  # 64KB

# Connections kept per host in the shared pool
DEFAULT_POOL_SIZE: int = 10

ALLOWED_URL_SCHEMES: Tuple[str, ...] = ('http', 'https')

# =============================================================================
# FACEBOOK
# =============================================================================

FACEBOOK_GRAPH_URL: str = "https://graph.facebook.com"

# Fields requested for the album listing (root)
FACEBOOK_ALBUM_FIELDS: str = "name,cover_photo,created_time,type"

# Fields requested for the photo listing (inside an album)
FACEBOOK_PHOTO_FIELDS: str = "icon,images,name,width,height,created_time"

# "Invalid OAuth 2.0 Access Token"
FACEBOOK_INVALID_TOKEN_CODE: int = 190

# =============================================================================
# DROPBOX
# =============================================================================

DROPBOX_LIST_LIMIT: int = 100

# =============================================================================
# GOOGLE DRIVE
# =============================================================================

GOOGLE_DRIVE_API_URL: str = "https://www.googleapis.com/drive/v3"
GOOGLE_REVOKE_URL: str = "https://oauth2.googleapis.com/revoke"
GOOGLE_DRIVE_FOLDER_MIME: str = "application/vnd.google-apps.folder"
GOOGLE_DRIVE_PAGE_SIZE: int = 100

GOOGLE_DRIVE_LIST_FIELDS: str = (
    "nextPageToken,"
    "files(id,name,mimeType,size,modifiedTime,iconLink,thumbnailLink)"
)
GOOGLE_DRIVE_ITEM_FIELDS: str = "id,name,mimeType,size,thumbnailLink"

# Export formats for Google-native documents (they have no binary content)
GOOGLE_EXPORT_MIME_TYPES: Dict[str, str] = {
    'application/vnd.google-apps.document':
        'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/vnd.google-apps.spreadsheet':
        'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'application/vnd.google-apps.presentation':
        'application/vnd.openxmlformats-officedocument.presentationml.presentation',
    'application/vnd.google-apps.drawing': 'image/png',
    'application/vnd.google-apps.script': 'application/vnd.google-apps.script+json',
}

# Fallback export format for any other Google-native type
GOOGLE_DEFAULT_EXPORT_MIME: str = 'application/pdf'

# =============================================================================
# CONTENT TYPE MAPPING
# =============================================================================

# Used when the platform mimetypes table has no entry
CONTENT_TYPE_MAPPING: Dict[str, str] = {
    # RAW formats
    'nef': 'image/x-nikon-nef',
    'dng': 'image/x-adobe-dng',
    'cr2': 'image/x-canon-cr2',
    'cr3': 'image/x-canon-cr3',
    'arw': 'image/x-sony-arw',
    'orf': 'image/x-olympus-orf',
    'rw2': 'image/x-panasonic-rw2',
    # Formats missing from older mimetypes tables
    'heic': 'image/heic',
    'heif': 'image/heif',
    'webp': 'image/webp',
    'md': 'text/markdown',
}
