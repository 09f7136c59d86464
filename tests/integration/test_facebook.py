"""
Integration Tests: Facebook Provider
====================================
Tests real Graph API calls.
Requires TEST_FACEBOOK_ACCESS_TOKEN environment variable.

Run with: pytest tests/integration/test_facebook.py -v
"""

import pytest


@pytest.fixture
def facebook_provider(live_registry):
    return live_registry.get("facebook")


@pytest.mark.integration
@pytest.mark.facebook
class TestFacebookListing:
    """Test listing albums and photos."""

    def test_lists_albums(self, facebook_provider, facebook_token):
        """Root listing returns albums as folders."""
        page = facebook_provider.list(None, facebook_token)

        assert page.username
        assert all(item.is_folder for item in page.items)
        print(f"Found {len(page.items)} albums for {page.username}")

    def test_lists_first_album(self, facebook_provider, facebook_token):
        """An album lists its photos as files."""
        albums = facebook_provider.list(None, facebook_token)
        if not albums.items:
            pytest.skip("Account has no albums")

        page = facebook_provider.list(albums.items[0].request_path, facebook_token)

        assert all(not item.is_folder for item in page.items)


@pytest.mark.integration
@pytest.mark.facebook
class TestFacebookContent:
    """Test download and size of a photo."""

    def _first_photo(self, provider, token):
        albums = provider.list(None, token)
        for album in albums.items:
            photos = provider.list(album.request_path, token)
            if photos.items:
                return photos.items[0]
        pytest.skip("No photos available")

    def test_downloads_photo(self, facebook_provider, facebook_token):
        """Download yields JPEG bytes."""
        photo = self._first_photo(facebook_provider, facebook_token)

        content = b"".join(facebook_provider.download(photo.id, facebook_token))

        assert content[:2] == b"\xff\xd8"

    def test_size_of_photo(self, facebook_provider, facebook_token):
        """Size is a positive integer or unknown."""
        photo = self._first_photo(facebook_provider, facebook_token)

        size = facebook_provider.size(photo.id, facebook_token)

        assert size is None or size > 0


@pytest.mark.integration
@pytest.mark.facebook
class TestFacebookErrors:
    """Test error classification against the live API."""

    def test_invalid_token(self, facebook_provider, facebook_token):
        """A bogus token is reported as an auth error."""
        from companion.errors import ProviderAuthError

        with pytest.raises(ProviderAuthError):
            facebook_provider.list(None, "invalid-token")
