"""
Tests for shared input validators.
"""

import pytest

from shared.utils.validators import (
    escape_like_pattern,
    photo_extension,
    validate_photo_upload,
    validate_restaurant_id,
)


class TestEscapeLikePattern:
    def test_escapes_wildcards(self):
        assert escape_like_pattern("50%_off") == "50\\%\\_off"

    def test_escapes_backslash_first(self):
        assert escape_like_pattern("a\\%") == "a\\\\\\%"

    def test_empty(self):
        assert escape_like_pattern("") == ""


class TestValidateRestaurantId:
    def test_strips_whitespace(self):
        assert validate_restaurant_id("  restaurant-a ") == "restaurant-a"

    @pytest.mark.parametrize("value", [None, "", "   ", "r" * 65])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            validate_restaurant_id(value)

    def test_max_length_accepted(self):
        assert validate_restaurant_id("r" * 64) == "r" * 64


class TestValidatePhotoUpload:
    """MIME type and extension allow-lists."""

    @pytest.mark.parametrize(
        "filename, content_type, extension",
        [
            ("pho.jpg", "image/jpeg", ".jpg"),
            ("PHO.JPEG", "image/jpeg", ".jpeg"),
            ("tea.png", "image/png", ".png"),
            ("rolls.webp", "image/webp; charset=binary", ".webp"),
        ],
    )
    def test_accepts_images(self, filename, content_type, extension):
        assert validate_photo_upload(filename, content_type) == extension

    def test_rejects_mime_type(self):
        with pytest.raises(ValueError, match="menu.pdf: file type 'application/pdf'"):
            validate_photo_upload("menu.pdf", "application/pdf")

    def test_rejects_missing_mime_type(self):
        with pytest.raises(ValueError, match="'unknown'"):
            validate_photo_upload("pho.jpg", None)

    def test_rejects_extension(self):
        """An image MIME type with a foreign extension is still refused."""
        with pytest.raises(ValueError, match="extension '.gif'"):
            validate_photo_upload("pho.gif", "image/jpeg")

    def test_rejects_missing_extension(self):
        with pytest.raises(ValueError, match="extension 'none'"):
            validate_photo_upload("pho", "image/jpeg")

    def test_photo_extension(self):
        assert photo_extension("a.b.PNG") == ".png"
        assert photo_extension(None) == ""
