"""
Photo Service - menu item image management.

Upload is an all-or-nothing batch: every file is type-checked before any
is stored, each file is streamed under a size cap, and any failure rolls
back the transaction and removes every file the request wrote.

Usage:
    from rest_api.services.domain import PhotoService, IncomingPhoto

    service = PhotoService(db, storage)
    photos = service.upload_photos(item_id, restaurant_id, [
        IncomingPhoto(filename="burger.jpg", content_type="image/jpeg", stream=fh),
    ])
    service.set_primary(item_id, photos[1].id, restaurant_id)
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Sequence

from sqlalchemy import update
from sqlalchemy.orm import Session

from rest_api.models import MenuItem, MenuItemPhoto
from rest_api.services.crud.repository import BaseRepository, RestaurantRepository
from shared.config.logging import upload_logger as logger
from shared.config.settings import settings
from shared.infrastructure.db import unit_of_work
from shared.infrastructure.storage import FileTooLargeError, PhotoStorage
from shared.utils.admin_schemas import PhotoOutput
from shared.utils.exceptions import (
    InvalidUploadError,
    MenuItemNotFoundError,
    PhotoNotFoundError,
)
from shared.utils.validators import validate_photo_upload


@dataclass
class IncomingPhoto:
    """One uploaded file as received from the multipart body."""

    filename: str | None
    content_type: str | None
    stream: BinaryIO


class PhotoService:
    """
    Service for menu item photos.

    Business rules:
    - At most one primary photo per item
    - Deleting the primary promotes the remaining photo with the lowest order
    - Photos are hard-deleted together with their file
    """

    def __init__(
        self,
        db: Session,
        storage: PhotoStorage,
        *,
        max_files: int | None = None,
    ):
        self._db = db
        self._storage = storage
        self._max_files = max_files or settings.max_files_per_upload
        self._items = RestaurantRepository(MenuItem, db)
        self._photos = BaseRepository(MenuItemPhoto, db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_photos(self, item_id: int, restaurant_id: str) -> list[PhotoOutput]:
        """Photos of an item ordered by display order."""
        item = self._require_item(item_id, restaurant_id)
        return [PhotoOutput.model_validate(p) for p in self._ordered_photos(item.id)]

    # =========================================================================
    # Command Methods
    # =========================================================================

    def upload_photos(
        self,
        item_id: int,
        restaurant_id: str,
        files: Sequence[IncomingPhoto],
    ) -> list[PhotoOutput]:
        """
        Store a batch of photos for an item.

        Raises:
            MenuItemNotFoundError: If the item is missing or deleted.
            InvalidUploadError: If the batch is empty, too large, or any file
                has a wrong type, extension or size. Nothing is kept.
        """
        if not files:
            raise InvalidUploadError("No files uploaded", field="photos")
        if len(files) > self._max_files:
            raise InvalidUploadError(
                f"Too many files: at most {self._max_files} per upload",
                field="photos",
            )

        item = self._require_item(item_id, restaurant_id)
        extensions = self._validate_batch(files)

        existing = self._ordered_photos(item.id)
        has_primary = any(p.is_primary for p in existing)
        written: list[Path] = []
        created: list[MenuItemPhoto] = []

        try:
            with unit_of_work(self._db):
                for index, (incoming, extension) in enumerate(zip(files, extensions)):
                    stored_path = self._store_file(item.id, incoming, extension)
                    written.append(stored_path)

                    photo = MenuItemPhoto(
                        menu_item_id=item.id,
                        url=self._storage.public_url(stored_path.name),
                        filename=stored_path.name,
                        is_primary=not has_primary and index == 0,
                        display_order=len(existing) + index,
                    )
                    self._db.add(photo)
                    created.append(photo)
        except Exception:
            for path in written:
                self._storage.discard(path)
            logger.warning(
                "Photo upload aborted",
                item_id=item.id,
                files=len(files),
                removed=len(written),
            )
            raise

        for photo in created:
            self._db.refresh(photo)

        logger.info("Photos uploaded", item_id=item.id, count=len(created))
        return [PhotoOutput.model_validate(p) for p in created]

    def delete_photo(self, item_id: int, photo_id: int, restaurant_id: str) -> None:
        """
        Delete a photo row and its file.

        Raises:
            MenuItemNotFoundError: If the item is missing or deleted.
            PhotoNotFoundError: If the photo does not belong to the item.
        """
        item = self._require_item(item_id, restaurant_id)
        photo = self._require_photo(item.id, photo_id)
        filename = photo.filename
        was_primary = photo.is_primary

        with unit_of_work(self._db):
            self._photos.delete(photo)
            self._db.flush()

            if was_primary:
                successor = self._photos.find_first(
                    MenuItemPhoto.menu_item_id == item.id,
                    order_by=[MenuItemPhoto.display_order, MenuItemPhoto.id],
                )
                if successor is not None:
                    successor.is_primary = True

        # The row is gone; a leftover file is only worth a warning
        self._storage.remove(filename)
        logger.info("Photo deleted", item_id=item.id, photo_id=photo_id, was_primary=was_primary)

    def set_primary(self, item_id: int, photo_id: int, restaurant_id: str) -> PhotoOutput:
        """
        Make one photo the item's only primary photo.

        Raises:
            MenuItemNotFoundError: If the item is missing or deleted.
            PhotoNotFoundError: If the photo does not belong to the item.
        """
        item = self._require_item(item_id, restaurant_id)
        photo = self._require_photo(item.id, photo_id)

        with unit_of_work(self._db):
            self._db.execute(
                update(MenuItemPhoto)
                .where(MenuItemPhoto.menu_item_id == item.id)
                .values(is_primary=False)
            )
            photo.is_primary = True

        self._db.refresh(photo)
        logger.info("Primary photo set", item_id=item.id, photo_id=photo_id)
        return PhotoOutput.model_validate(photo)

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _require_item(self, item_id: int, restaurant_id: str) -> MenuItem:
        item = self._items.find_by_id(item_id, restaurant_id)
        if item is None:
            raise MenuItemNotFoundError(item_id, restaurant_id=restaurant_id)
        return item

    def _require_photo(self, item_id: int, photo_id: int) -> MenuItemPhoto:
        photos = self._photos.find_where(
            MenuItemPhoto.id == photo_id,
            MenuItemPhoto.menu_item_id == item_id,
        )
        if not photos:
            raise PhotoNotFoundError(photo_id, item_id=item_id)
        return photos[0]

    def _ordered_photos(self, item_id: int) -> Sequence[MenuItemPhoto]:
        return self._photos.find_where(
            MenuItemPhoto.menu_item_id == item_id,
            order_by=[MenuItemPhoto.display_order, MenuItemPhoto.id],
        )

    def _validate_batch(self, files: Sequence[IncomingPhoto]) -> list[str]:
        """Check every file's type before anything is written."""
        extensions: list[str] = []
        problems: list[str] = []
        for incoming in files:
            try:
                extensions.append(validate_photo_upload(incoming.filename, incoming.content_type))
            except ValueError as e:
                problems.append(str(e))

        if problems:
            raise InvalidUploadError(
                "Only JPEG, PNG and WebP images are accepted",
                errors=problems,
            )
        return extensions

    def _store_file(self, item_id: int, incoming: IncomingPhoto, extension: str) -> Path:
        try:
            temp_path = self._storage.write_temp(incoming.stream)
        except FileTooLargeError as e:
            raise InvalidUploadError(
                f"{incoming.filename or '<unnamed>'}: file exceeds {e.max_bytes} bytes",
                filename=incoming.filename,
            ) from e

        filename = (
            f"photo-{item_id}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"
        )
        return self._storage.promote(temp_path, filename)
