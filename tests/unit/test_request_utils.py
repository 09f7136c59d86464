"""
Unit Tests: Request Utilities
=============================
Tests the shared session, URL validation, HEAD probe and chunk streaming.
"""

import pytest
import requests


class TestCreateSession:
    """Tests for create_session function."""

    @pytest.mark.unit
    def test_pool_and_user_agent(self):
        """Session mounts a pooled adapter without retries."""
        from companion.config.constants import USER_AGENT
        from companion.utils import create_session

        session = create_session(pool_size=4)

        adapter = session.get_adapter("https://graph.facebook.com")
        assert adapter._pool_maxsize == 4
        assert adapter.max_retries.total == 0
        assert session.headers["User-Agent"] == USER_AGENT


class TestValidateUrl:
    """Tests for validate_url function."""

    @pytest.mark.unit
    @pytest.mark.parametrize("url", [
        "https://cdn.example.com/a.jpg",
        "http://example.com/path?x=1",
    ])
    def test_accepts_http_urls(self, url):
        """Absolute http(s) URLs are accepted."""
        from companion.utils import validate_url

        assert validate_url(url) is True

    @pytest.mark.unit
    @pytest.mark.parametrize("url", [
        None,
        "",
        "/relative/path",
        "ftp://example.com/file",
        "file:///etc/passwd",
        "javascript:alert(1)",
        "https://",
    ])
    def test_rejects_other_urls(self, url):
        """Anything else is rejected."""
        from companion.utils import validate_url

        assert validate_url(url) is False


class TestGetUrlMeta:
    """Tests for get_url_meta function."""

    @pytest.mark.unit
    def test_reads_headers(self, mock_session, make_response):
        """Returns type and size from the HEAD response."""
        from companion.utils import get_url_meta

        response = make_response(200, headers={"Content-Type": "image/jpeg", "Content-Length": "1024"})
        mock_session.head.return_value = response

        meta = get_url_meta(mock_session, "https://cdn.example.com/a.jpg", headers={"X-Test": "1"})

        assert meta == {"type": "image/jpeg", "size": 1024}
        assert response.closed is True
        call = mock_session.head.call_args
        assert call.kwargs["allow_redirects"] is True
        assert call.kwargs["headers"] == {"X-Test": "1"}

    @pytest.mark.unit
    def test_missing_length_is_none(self, mock_session, make_response):
        """No Content-Length means unknown size."""
        from companion.utils import get_url_meta

        mock_session.head.return_value = make_response(200, headers={"Content-Length": "abc"})

        assert get_url_meta(mock_session, "https://cdn.example.com/a.jpg")["size"] is None

    @pytest.mark.unit
    def test_error_status_raises(self, mock_session, make_response):
        """Non-success status raises ProviderApiError."""
        from companion.errors import ProviderApiError
        from companion.utils import get_url_meta

        mock_session.head.return_value = make_response(404)

        with pytest.raises(ProviderApiError) as exc_info:
            get_url_meta(mock_session, "https://cdn.example.com/a.jpg")

        assert exc_info.value.status_code == 404

    @pytest.mark.unit
    def test_invalid_url_raises(self, mock_session):
        """Invalid URLs are never requested."""
        from companion.utils import get_url_meta

        with pytest.raises(ValueError):
            get_url_meta(mock_session, "ftp://example.com/a.jpg")

        mock_session.head.assert_not_called()


class TestStreamResponse:
    """Tests for stream_response function."""

    @pytest.mark.unit
    def test_skips_keepalive_chunks(self, make_response):
        """Empty chunks are dropped and the response closed."""
        from companion.utils import stream_response

        response = make_response(200, chunks=[b"a", b"", b"b"])

        assert list(stream_response(response, 2)) == [b"a", b"b"]
        assert response.closed is True

    @pytest.mark.unit
    def test_closes_on_read_error(self, make_response):
        """A read error closes the response and propagates."""
        from companion.utils import stream_response

        response = make_response(200, chunks=[b"a", requests.exceptions.ChunkedEncodingError("eof")])

        with pytest.raises(requests.exceptions.ChunkedEncodingError):
            list(stream_response(response))

        assert response.closed is True

    @pytest.mark.unit
    def test_close_before_reading(self, make_response):
        """close() releases the response even if no chunk was read."""
        from companion.utils import stream_response

        response = make_response(200, chunks=[b"a"])

        chunks = stream_response(response)
        chunks.close()
        chunks.close()

        assert response.closed is True
        assert chunks.closed is True
        assert list(chunks) == []

    @pytest.mark.unit
    def test_read_error_reported(self, make_response):
        """on_error sees the read error before it propagates."""
        from companion.utils import stream_response

        error = requests.exceptions.ConnectionError("reset")
        seen = []
        response = make_response(200, chunks=[error])

        with pytest.raises(requests.exceptions.ConnectionError):
            list(stream_response(response, on_error=seen.append))

        assert seen == [error]
        assert response.closed is True
