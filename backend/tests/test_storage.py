"""
Tests for local photo file storage.
"""

import io

import pytest

from shared.infrastructure.storage import FileTooLargeError, PhotoStorage


@pytest.fixture
def small_storage(tmp_path):
    """Storage with a tiny size cap and chunk size."""
    return PhotoStorage(tmp_path / "photos", "http://localhost:3000/", 10, chunk_size=4)


class TestPhotoStorage:
    def test_write_and_promote(self, small_storage):
        """A finished temp file is renamed to its final name."""
        temp = small_storage.write_temp(io.BytesIO(b"abcdef"))
        assert temp.name.startswith(".tmp-")

        final = small_storage.promote(temp, "photo-1.jpg")

        assert final.read_bytes() == b"abcdef"
        assert not temp.exists()

    def test_too_large_leaves_nothing(self, small_storage):
        """Oversized streams raise and their partial file is removed."""
        with pytest.raises(FileTooLargeError) as exc_info:
            small_storage.write_temp(io.BytesIO(b"x" * 11))

        assert exc_info.value.max_bytes == 10
        assert list(small_storage.directory.iterdir()) == []

    def test_exact_size_accepted(self, small_storage):
        temp = small_storage.write_temp(io.BytesIO(b"x" * 10))
        assert temp.stat().st_size == 10

    def test_public_url(self, small_storage):
        """Trailing slashes in the base URL are ignored."""
        assert small_storage.public_url("a.png") == "http://localhost:3000/uploads/a.png"

    @pytest.mark.parametrize("filename", ["../secret.jpg", "nested/a.jpg", ""])
    def test_path_for_rejects_traversal(self, small_storage, filename):
        with pytest.raises(ValueError):
            small_storage.path_for(filename)

    def test_remove(self, small_storage):
        """Removing reports whether a file was actually deleted."""
        small_storage.promote(small_storage.write_temp(io.BytesIO(b"img")), "a.jpg")

        assert small_storage.remove("a.jpg") is True
        assert small_storage.remove("a.jpg") is False
        assert small_storage.remove("../a.jpg") is False

    def test_is_writable_creates_directory(self, small_storage):
        assert small_storage.is_writable() is True
        assert small_storage.directory.is_dir()
