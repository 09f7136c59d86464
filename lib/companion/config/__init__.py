"""
Configuration module - Settings, credentials, logging and constants.
"""

from .credentials import (
    generate_secret,
    encrypt_token,
    decrypt_token,
    mask_token,
)

from .constants import (
    SHARED_VERSION,
    USER_AGENT,
    DEFAULT_HTTP_TIMEOUT,
    DOWNLOAD_CHUNK_SIZE,
    # Provider identifiers
    PROVIDER_FACEBOOK,
    PROVIDER_DROPBOX,
    PROVIDER_GOOGLE_DRIVE,
)

from .logging_config import set_level, setup_logger
from .settings import CompanionSettings

__all__ = [
    # Credentials
    "generate_secret",
    "encrypt_token",
    "decrypt_token",
    "mask_token",
    # Constants
    "SHARED_VERSION",
    "USER_AGENT",
    "DEFAULT_HTTP_TIMEOUT",
    "DOWNLOAD_CHUNK_SIZE",
    # Provider identifiers
    "PROVIDER_FACEBOOK",
    "PROVIDER_DROPBOX",
    "PROVIDER_GOOGLE_DRIVE",
    # Logging / settings
    "setup_logger",
    "set_level",
    "CompanionSettings",
]
