"""
Runtime Settings
================
Environment-driven configuration for the provider layer.

Values are read from the process environment. A ``.env`` file in the
working directory is loaded first when present, without overriding
variables that are already set.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from .constants import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_POOL_SIZE,
    DOWNLOAD_CHUNK_SIZE,
    PROVIDER_DROPBOX,
    PROVIDER_FACEBOOK,
    PROVIDER_GOOGLE_DRIVE,
)

ALL_PROVIDERS: Tuple[str, ...] = (
    PROVIDER_FACEBOOK,
    PROVIDER_DROPBOX,
    PROVIDER_GOOGLE_DRIVE,
)


@dataclass(frozen=True)
class CompanionSettings:
    """
    Provider layer settings.

    Attributes:
        secret: Fernet key used to unwrap encrypted token envelopes
                (None = tokens arrive in plain text)
        http_timeout: Per-call I/O timeout in seconds
        download_chunk_size: Chunk size for streamed downloads in bytes
        pool_size: Connections kept per host in the shared session
        enabled_providers: Provider names the registry instantiates
        facebook_graph_version: Optional Graph API version (e.g. 'v19.0')
        log_level: Logging level name
    """
    secret: Optional[str] = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    download_chunk_size: int = DOWNLOAD_CHUNK_SIZE
    pool_size: int = DEFAULT_POOL_SIZE
    enabled_providers: Tuple[str, ...] = field(default=ALL_PROVIDERS)
    facebook_graph_version: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        load_env_file: bool = True,
    ) -> "CompanionSettings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            load_env_file: Whether to load a .env file first

        Returns:
            CompanionSettings instance

        Raises:
            ValueError: If a numeric variable is not a valid positive number
        """
        if load_env_file and environ is None:
            load_dotenv()

        env = os.environ if environ is None else environ

        return cls(
            secret=env.get("COMPANION_SECRET") or None,
            http_timeout=_positive_float(env, "COMPANION_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            download_chunk_size=_positive_int(
                env, "COMPANION_DOWNLOAD_CHUNK_SIZE", DOWNLOAD_CHUNK_SIZE
            ),
            pool_size=_positive_int(env, "COMPANION_POOL_SIZE", DEFAULT_POOL_SIZE),
            enabled_providers=_provider_list(env.get("COMPANION_ENABLED_PROVIDERS")),
            facebook_graph_version=env.get("FACEBOOK_GRAPH_VERSION") or None,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _provider_list(raw: Optional[str]) -> Tuple[str, ...]:
    """Parse a comma-separated provider list; empty means all providers."""
    if not raw:
        return ALL_PROVIDERS
    names = [name.strip().lower() for name in raw.split(',')]
    return tuple(name for name in names if name)
