"""
Local file storage for uploaded menu item photos.

Files are streamed into a hidden temp file first and only renamed to their
final name once fully written, so a rejected or interrupted upload never
leaves a servable file behind.
"""

from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import BinaryIO

from shared.config.constants import PhotoUpload
from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)


class FileTooLargeError(Exception):
    """Raised when a streamed upload exceeds the configured size cap."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        super().__init__(f"File exceeds {max_bytes} bytes")


class PhotoStorage:
    """
    Stores photo files in a directory that is also served at /uploads.

    Usage:
        storage = PhotoStorage("uploads", "http://localhost:3000", max_file_size=5_242_880)
        temp = storage.write_temp(upload.file)
        storage.promote(temp, "photo-1-1700000000000-42.jpg")
        storage.public_url("photo-1-1700000000000-42.jpg")
    """

    def __init__(
        self,
        directory: str | Path,
        base_url: str,
        max_file_size: int,
        *,
        chunk_size: int = PhotoUpload.CHUNK_SIZE,
    ):
        self._directory = Path(directory)
        self._base_url = base_url.rstrip("/")
        self._max_file_size = max_file_size
        self._chunk_size = chunk_size

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def max_file_size(self) -> int:
        return self._max_file_size

    def ensure_directory(self) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        """Resolve a stored filename, refusing anything outside the directory."""
        name = Path(filename).name
        if not name or name != filename:
            raise ValueError(f"Invalid stored filename: {filename!r}")
        return self._directory / name

    def public_url(self, filename: str) -> str:
        return f"{self._base_url}/uploads/{filename}"

    def write_temp(self, source: BinaryIO) -> Path:
        """
        Stream ``source`` into a temp file inside the storage directory.

        Raises:
            FileTooLargeError: If more than max_file_size bytes are read.
                The partial temp file is removed before raising.
        """
        self.ensure_directory()
        temp_path = self._directory / f"{PhotoUpload.TEMP_PREFIX}{uuid.uuid4().hex}"
        written = 0

        try:
            with temp_path.open("wb") as target:
                while True:
                    chunk = source.read(self._chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self._max_file_size:
                        raise FileTooLargeError(self._max_file_size)
                    target.write(chunk)
        except BaseException:
            self.discard(temp_path)
            raise

        return temp_path

    def promote(self, temp_path: Path, filename: str) -> Path:
        """Atomically move a finished temp file to its final name."""
        final_path = self.path_for(filename)
        os.replace(temp_path, final_path)
        return final_path

    def discard(self, path: Path) -> None:
        """Remove a file if present; used for temp files and rollbacks."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to remove file", path=str(path), error=str(e))

    def remove(self, filename: str) -> bool:
        """
        Delete a stored photo file.

        Returns False (and logs a warning) when the file could not be removed,
        so callers can finish their database work regardless.
        """
        try:
            path = self.path_for(filename)
            path.unlink()
            return True
        except FileNotFoundError:
            logger.warning("Photo file already missing", filename=filename)
            return False
        except (OSError, ValueError) as e:
            logger.warning("Failed to delete photo file", filename=filename, error=str(e))
            return False

    def is_writable(self) -> bool:
        """Check that the directory exists (or can be created) and accepts writes."""
        try:
            self.ensure_directory()
        except OSError:
            return False
        return os.access(self._directory, os.W_OK)


def get_photo_storage() -> PhotoStorage:
    """FastAPI dependency returning storage configured from settings."""
    return PhotoStorage(
        settings.upload_dir,
        settings.base_url,
        settings.max_file_size,
    )
