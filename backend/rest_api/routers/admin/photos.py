"""
Menu item photo endpoints.

Uploads arrive as multipart/form-data with one or more files under the
"photos" field. Files are written through PhotoStorage and served back
from /uploads.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.infrastructure.storage import PhotoStorage, get_photo_storage
from shared.utils.admin_schemas import PhotoOutput
from shared.utils.schemas import ApiResponse, MessageResponse
from rest_api.routers._common import get_restaurant_id
from rest_api.services.domain import IncomingPhoto, PhotoService


router = APIRouter(tags=["admin-photos"])


def _get_service(db: Session, storage: PhotoStorage) -> PhotoService:
    """Get PhotoService instance."""
    return PhotoService(db, storage)


@router.post(
    "/items/{item_id}/photos",
    response_model=ApiResponse[list[PhotoOutput]],
    status_code=status.HTTP_201_CREATED,
)
def upload_photos(
    item_id: int,
    photos: list[UploadFile] = File(..., description="Image files (JPEG, PNG, WebP)"),
    db: Session = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[list[PhotoOutput]]:
    """
    Upload photos for a menu item.

    All files are accepted or none are: a wrong type, extension or size in
    any file rejects the whole request.
    """
    incoming = [
        IncomingPhoto(filename=f.filename, content_type=f.content_type, stream=f.file)
        for f in photos
    ]
    created = _get_service(db, storage).upload_photos(item_id, restaurant_id, incoming)
    return ApiResponse(data=created, message=f"{len(created)} photo(s) uploaded")


@router.get("/items/{item_id}/photos", response_model=ApiResponse[list[PhotoOutput]])
def list_photos(
    item_id: int,
    db: Session = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[list[PhotoOutput]]:
    """Photos of a menu item ordered by display order."""
    return ApiResponse(data=_get_service(db, storage).list_photos(item_id, restaurant_id))


@router.delete("/items/{item_id}/photos/{photo_id}", response_model=MessageResponse)
def delete_photo(
    item_id: int,
    photo_id: int,
    db: Session = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
    restaurant_id: str = Depends(get_restaurant_id),
) -> MessageResponse:
    """Delete a photo; a deleted primary is replaced by the next photo."""
    _get_service(db, storage).delete_photo(item_id, photo_id, restaurant_id)
    return MessageResponse(message="Photo deleted")


@router.patch(
    "/items/{item_id}/photos/{photo_id}/primary",
    response_model=ApiResponse[PhotoOutput],
)
def set_primary_photo(
    item_id: int,
    photo_id: int,
    db: Session = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
    restaurant_id: str = Depends(get_restaurant_id),
) -> ApiResponse[PhotoOutput]:
    """Make one photo the item's primary photo."""
    photo = _get_service(db, storage).set_primary(item_id, photo_id, restaurant_id)
    return ApiResponse(data=photo, message="Primary photo updated")
