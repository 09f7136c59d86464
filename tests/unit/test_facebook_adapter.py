"""
Unit Tests: Facebook Adapter
============================
Tests normalization of Graph API payloads.
No external API calls - runs fast.
"""

import pytest


ALBUM = {
    "id": "10150",
    "name": "Summer",
    "type": "normal",
    "created_time": "2023-06-01T10:00:00+0000",
    "cover_photo": {"id": "555"},
}

PHOTO = {
    "id": "777",
    "created_time": "2023-06-02T11:00:00+0000",
    "icon": "https://static.xx.fbcdn.net/icon.gif",
    "images": [
        {"source": "https://cdn/medium.jpg", "width": 600, "height": 400},
        {"source": "https://cdn/large.jpg", "width": 1200, "height": 800},
        {"source": "https://cdn/small.jpg", "width": 130, "height": 87},
    ],
}


class TestSortImages:
    """Tests for sort_images function."""

    @pytest.mark.unit
    def test_orders_by_resolution(self):
        """Should order variants smallest first."""
        from companion.providers.facebook.adapter import sort_images

        result = sort_images(PHOTO["images"])

        assert [image["source"] for image in result] == [
            "https://cdn/small.jpg",
            "https://cdn/medium.jpg",
            "https://cdn/large.jpg",
        ]

    @pytest.mark.unit
    def test_is_stable_for_equal_resolution(self):
        """Variants with equal area should keep their input order."""
        from companion.providers.facebook.adapter import sort_images

        images = [
            {"source": "a", "width": 200, "height": 100},
            {"source": "b", "width": 100, "height": 200},
            {"source": "c", "width": 10, "height": 10},
        ]

        result = sort_images(images)

        assert [image["source"] for image in result] == ["c", "a", "b"]

    @pytest.mark.unit
    def test_is_idempotent(self):
        """Sorting twice should give the same order as sorting once."""
        from companion.providers.facebook.adapter import sort_images

        once = sort_images(PHOTO["images"])

        assert sort_images(once) == once

    @pytest.mark.unit
    def test_does_not_mutate_input(self):
        """Input list should be left untouched."""
        from companion.providers.facebook.adapter import sort_images

        images = list(PHOTO["images"])
        sort_images(images)

        assert images == PHOTO["images"]

    @pytest.mark.unit
    def test_handles_missing_images(self):
        """None should produce an empty list."""
        from companion.providers.facebook.adapter import sort_images

        assert sort_images(None) == []


class TestItemExtractors:
    """Tests for the per-item field extractors."""

    @pytest.mark.unit
    def test_album_is_folder(self):
        """Albums carry a type field and are folders."""
        from companion.providers.facebook import adapter

        assert adapter.is_folder(ALBUM) is True
        assert adapter.is_folder(PHOTO) is False

    @pytest.mark.unit
    def test_folder_has_no_mime_type_or_thumbnail(self):
        """Folders report neither MIME type nor thumbnail."""
        from companion.providers.facebook import adapter

        assert adapter.get_mime_type(ALBUM) is None
        assert adapter.get_item_thumbnail_url(ALBUM) is None

    @pytest.mark.unit
    def test_photo_fields(self):
        """Photo thumbnail is the smallest variant, download the largest."""
        from companion.providers.facebook import adapter

        assert adapter.get_mime_type(PHOTO) == "image/jpeg"
        assert adapter.get_item_thumbnail_url(PHOTO) == "https://cdn/small.jpg"
        assert adapter.get_largest_image_url(PHOTO) == "https://cdn/large.jpg"
        assert adapter.get_item_icon(PHOTO) == "https://static.xx.fbcdn.net/icon.gif"

    @pytest.mark.unit
    def test_unnamed_photo_uses_id_and_date(self):
        """Photos without a caption are named after id and creation time."""
        from companion.providers.facebook import adapter

        assert adapter.get_item_name(PHOTO) == "777 2023-06-02T11:00:00+0000"
        assert adapter.get_item_name(ALBUM) == "Summer"

    @pytest.mark.unit
    def test_missing_fields_return_none(self):
        """An empty item must not raise in any extractor."""
        from companion.providers.facebook import adapter

        item = {}

        assert adapter.is_folder(item) is False
        assert adapter.get_item_icon(item) is None
        assert adapter.get_item_thumbnail_url(item) is None
        assert adapter.get_largest_image_url(item) is None
        assert adapter.get_item_modified_date(item) is None
        assert adapter.get_item_id(item) == ""
        assert adapter.get_item_name(item) == ""


class TestPagination:
    """Tests for get_next_page_path function."""

    @pytest.mark.unit
    def test_returns_after_cursor_when_next_exists(self):
        """Cursor is returned while another page exists."""
        from companion.providers.facebook.adapter import get_next_page_path

        res = {
            "data": [],
            "paging": {
                "cursors": {"before": "b0", "after": "c1"},
                "next": "https://graph.facebook.com/me/albums?after=c1",
            },
        }

        assert get_next_page_path(res) == "c1"

    @pytest.mark.unit
    def test_last_page_has_no_cursor(self):
        """Without paging.next the listing is complete."""
        from companion.providers.facebook.adapter import get_next_page_path

        res = {"data": [], "paging": {"cursors": {"after": "c9"}}}

        assert get_next_page_path(res) is None

    @pytest.mark.unit
    @pytest.mark.parametrize("res", [{}, {"paging": None}, {"paging": {"next": "x"}}, None, []])
    def test_never_raises(self, res):
        """Malformed envelopes yield None."""
        from companion.providers.facebook.adapter import get_next_page_path

        assert get_next_page_path(res) is None


class TestAdaptData:
    """Tests for adapt_data function."""

    @pytest.mark.unit
    def test_builds_list_result(self):
        """Should normalize every entry and keep size unknown."""
        from companion.providers.facebook.adapter import adapt_data

        result = adapt_data({"data": [ALBUM, PHOTO]}, "user@example.com", None)

        assert result.username == "user@example.com"
        assert result.next_page_path is None
        assert [item.is_folder for item in result.items] == [True, False]
        assert all(item.size is None for item in result.items)
        assert result.items[1].request_path == "777"

    @pytest.mark.unit
    def test_to_dict_uses_wire_keys(self):
        """Serialized items use camelCase keys."""
        from companion.providers.facebook.adapter import adapt_data

        data = adapt_data({"data": [PHOTO]}, "me", "10150").to_dict()

        item = data["items"][0]
        assert data["nextPagePath"] is None
        assert item["isFolder"] is False
        assert item["mimeType"] == "image/jpeg"
        assert item["requestPath"] == "777"
        assert item["modifiedDate"] == "2023-06-02T11:00:00+0000"

    @pytest.mark.unit
    def test_username_prefers_email(self):
        """Email wins over display name."""
        from companion.providers.facebook.adapter import get_username

        assert get_username({"email": "a@b.c", "name": "A"}) == "a@b.c"
        assert get_username({"name": "A"}) == "A"
        assert get_username(None) is None
