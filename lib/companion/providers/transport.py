"""
Provider Transport
==================
Request helpers shared by the providers: JSON calls, binary stream opening
and delivery of a stream as data/end/error signals.

Every helper classifies failures at the I/O boundary, before a response
body is interpreted as data.
"""

from typing import Any, Callable, Iterator, Optional

import requests

from ..config.constants import DEFAULT_HTTP_TIMEOUT, DOWNLOAD_CHUNK_SIZE
from ..config.logging_config import setup_logger
from ..errors import ProviderApiError
from ..utils.request_utils import ResponseStream, stream_response, validate_url
from .classifier import ErrorClassifier

logger = setup_logger(__name__)

# on_data(error, chunk): chunk=None and error=None signals the end
DataCallback = Callable[[Optional[BaseException], Optional[bytes]], None]


def request_json(
    session: requests.Session,
    method: str,
    url: str,
    classifier: ErrorClassifier,
    tag: str,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    **kwargs,
) -> Any:
    """
    Perform a request and decode its JSON body.

    Args:
        session: Shared HTTP session
        method: HTTP method
        url: Request URL
        classifier: Provider error classifier
        tag: Log tag for failures (e.g. 'provider.facebook.list.error')
        timeout: I/O timeout in seconds
        **kwargs: Passed to session.request (params, headers, data, ...)

    Returns:
        Decoded JSON body (None for an empty body)

    Raises:
        ProviderAuthError, ProviderApiError, or the raw transport error
    """
    try:
        response = session.request(method, url, timeout=timeout, **kwargs)
    except requests.exceptions.RequestException as e:
        logger.error("Request failed", extra={'tag': tag, 'error': repr(e)})
        raise classifier.classify(err=e)

    if response.status_code < 200 or response.status_code >= 300:
        error = classifier.classify(response=response)
        logger.error(
            "Request returned an error status",
            extra={'tag': tag, 'status_code': response.status_code, 'error': repr(error)},
        )
        raise error

    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        logger.error("Response body is not valid JSON", extra={'tag': tag})
        raise ProviderApiError(
            f"request to {classifier.provider_name} returned an invalid body",
            response.status_code,
        )


def open_stream(
    session: requests.Session,
    url: str,
    classifier: ErrorClassifier,
    tag: str,
    headers: Optional[dict] = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    chunk_size: int = DOWNLOAD_CHUNK_SIZE,
) -> ResponseStream:
    """
    Open a streaming GET and return an iterator over its body.

    The connection is opened eagerly so that a rejected request raises here,
    before any chunk exists. Failures while reading later chunks propagate
    from the iterator as the raw transport error.

    Args:
        session: Shared HTTP session
        url: Binary content URL
        classifier: Provider error classifier
        tag: Log tag for failures
        headers: Optional request headers
        timeout: I/O timeout in seconds
        chunk_size: Maximum bytes per chunk

    Returns:
        ResponseStream of byte chunks; closing it releases the connection,
        whether or not reading has started
    """
    if not validate_url(url):
        logger.error("Refusing to stream invalid URL", extra={'tag': tag})
        raise ProviderApiError(f"invalid media URL returned by {classifier.provider_name}")

    try:
        response = session.get(url, headers=headers, stream=True, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error("Stream request failed", extra={'tag': tag, 'error': repr(e)})
        raise classifier.classify(err=e)

    if response.status_code != 200:
        error = classifier.classify(response=response)
        response.close()
        logger.error(
            "Stream request returned an error status",
            extra={'tag': tag, 'status_code': response.status_code},
        )
        raise error

    def log_interruption(error: BaseException) -> None:
        logger.error("Stream interrupted", extra={'tag': tag, 'error': repr(error)})

    return stream_response(response, chunk_size, on_error=log_interruption)


def deliver(chunks_factory: Callable[[], Iterator[bytes]], on_data: DataCallback) -> None:
    """
    Drive a download and report it through a data callback.

    Signals, in order: on_data(None, chunk) per chunk, then exactly one of
    on_data(None, None) for the end or on_data(error, None) for a failure.
    No chunk follows an error and no error follows the end.

    Args:
        chunks_factory: Starts the download (e.g. lambda: provider.download(...))
        on_data: Callback receiving (error, chunk)
    """
    try:
        chunks = chunks_factory()
    except Exception as e:
        on_data(e, None)
        return

    try:
        for chunk in chunks:
            on_data(None, chunk)
    except Exception as e:
        on_data(e, None)
        return
    finally:
        close = getattr(chunks, 'close', None)
        if close is not None:
            close()

    on_data(None, None)
