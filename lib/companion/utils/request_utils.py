"""
Request Utilities
=================
Shared HTTP session, URL validation, metadata probes and chunked streaming.

One session is shared by every provider instance and every concurrent call,
so connection reuse is pooled across the whole process.
"""

from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter

from ..config.constants import (
    ALLOWED_URL_SCHEMES,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_POOL_SIZE,
    DOWNLOAD_CHUNK_SIZE,
    USER_AGENT,
)
from ..errors import ProviderApiError


def create_session(pool_size: int = DEFAULT_POOL_SIZE) -> requests.Session:
    """
    Create the shared HTTP session.

    Retries are disabled at the transport level; retry policy belongs to
    the caller.

    Args:
        pool_size: Connections kept per host

    Returns:
        Configured requests.Session
    """
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=pool_size,
        pool_maxsize=pool_size,
        max_retries=0,
    )
    session.mount('https://', adapter)
    session.mount('http://', adapter)
    session.headers['User-Agent'] = USER_AGENT
    return session


def validate_url(url: Optional[str]) -> bool:
    """
    Check that a URL is absolute and uses an allowed scheme.

    Args:
        url: URL to validate

    Returns:
        True if the URL may be fetched
    """
    if not url or not isinstance(url, str):
        return False

    try:
        parsed = urlparse(url)
    except ValueError:
        return False

    return parsed.scheme in ALLOWED_URL_SCHEMES and bool(parsed.netloc)


def get_url_meta(
    session: requests.Session,
    url: str,
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> Dict[str, Any]:
    """
    Probe a URL with HEAD to learn its content type and length.

    The body is never transferred.

    Args:
        session: Shared HTTP session
        url: URL to probe
        headers: Optional request headers (e.g. Authorization)
        timeout: I/O timeout in seconds

    Returns:
        Dict with 'type' (str or None) and 'size' (int or None)

    Raises:
        ValueError: If the URL is not fetchable
        ProviderApiError: If the probe returns a non-success status
        requests.exceptions.RequestException: On transport failure
    """
    if not validate_url(url):
        raise ValueError(f"Invalid request URL: {url}")

    response = session.head(
        url,
        headers=dict(headers or {}),
        allow_redirects=True,
        timeout=timeout,
    )
    try:
        if response.status_code >= 300:
            raise ProviderApiError(
                f"URL meta request returned {response.status_code}",
                response.status_code,
            )

        length = response.headers.get('content-length')
        size = int(length) if length and length.isdigit() else None

        return {
            'type': response.headers.get('content-type'),
            'size': size,
        }
    finally:
        response.close()


class ResponseStream:
    """
    Iterator over the body of a streamed response.

    The response is closed when the body is exhausted, when reading fails,
    or when close() is called, including before the first chunk was read.

    Usage:
        chunks = ResponseStream(response, 64 * 1024)
        for chunk in chunks:
            sink.write(chunk)
    """

    def __init__(
        self,
        response: requests.Response,
        chunk_size: int = DOWNLOAD_CHUNK_SIZE,
        on_error: Optional[Callable[[BaseException], None]] = None,
    ):
        """
        Args:
            response: Response opened with stream=True
            chunk_size: Maximum bytes per chunk
            on_error: Called with a read error before it propagates
        """
        self._response = response
        self._chunk_size = chunk_size
        self._on_error = on_error
        self._chunks = None
        self.closed = False

    def __iter__(self) -> "ResponseStream":
        return self

    def __next__(self) -> bytes:
        if self.closed:
            raise StopIteration

        if self._chunks is None:
            self._chunks = self._response.iter_content(chunk_size=self._chunk_size)

        try:
            while True:
                chunk = next(self._chunks)
                # Skip keep-alive chunks
                if chunk:
                    return chunk
        except StopIteration:
            self.close()
            raise
        except Exception as e:
            self.close()
            if self._on_error is not None:
                self._on_error(e)
            raise

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        self._response.close()


def stream_response(
    response: requests.Response,
    chunk_size: int = DOWNLOAD_CHUNK_SIZE,
    on_error: Optional[Callable[[BaseException], None]] = None,
) -> ResponseStream:
    """
    Stream the body of a response chunk by chunk.

    Args:
        response: Response opened with stream=True
        chunk_size: Maximum bytes per chunk
        on_error: Called with a read error before it propagates

    Returns:
        ResponseStream yielding non-empty byte chunks
    """
    return ResponseStream(response, chunk_size, on_error)
