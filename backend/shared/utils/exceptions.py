"""
Centralized HTTP exceptions for consistent error handling.
Standardized HTTP status codes, error codes and messages.

Usage:
    from shared.utils.exceptions import NotFoundError, DuplicateEntityError, ValidationError

    raise NotFoundError("Menu item", item_id, code="MENU_ITEM_NOT_FOUND")
    raise DuplicateEntityError("Category", "Burgers")
    raise ValidationError("Invalid price format")
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    ``code`` is a stable machine-readable identifier for clients;
    ``errors`` optionally lists individual problems.
    """

    default_code = "ERROR"

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        code: str | None = None,
        errors: list[Any] | None = None,
        **log_context: Any,
    ):
        self.code = code or self.default_code
        self.errors = errors

        # Log the error with context
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, code=self.code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404). Soft-deleted entities count as not found.

    Usage:
        raise NotFoundError("Category", 123)
        raise NotFoundError("Menu item", item_id, code="MENU_ITEM_NOT_FOUND")
    """

    default_code = "NOT_FOUND"

    def __init__(
        self,
        entity: str,
        entity_id: int | str | None = None,
        *,
        code: str | None = None,
        **log_context: Any,
    ):
        if entity_id is not None:
            detail = f"{entity} with id {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            code=code,
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class MenuItemNotFoundError(NotFoundError):
    """Menu item not found or deleted."""

    def __init__(self, item_id: int | None = None, **log_context: Any):
        super().__init__("Menu item", item_id, code="MENU_ITEM_NOT_FOUND", **log_context)


class PhotoNotFoundError(NotFoundError):
    """Photo does not exist or belongs to another item."""

    def __init__(self, photo_id: int | None = None, **log_context: Any):
        super().__init__("Photo", photo_id, code="PHOTO_NOT_FOUND", **log_context)


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Price must be positive")
        raise ValidationError("Category not found", code="CATEGORY_NOT_FOUND", field="category_id")
    """

    default_code = "VALIDATION_ERROR"

    def __init__(
        self,
        detail: str,
        *,
        code: str | None = None,
        errors: list[Any] | None = None,
        **log_context: Any,
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            code=code,
            errors=errors,
            **log_context,
        )


class DuplicateEntityError(ValidationError):
    """An active entity with the same name already exists."""

    default_code = "DUPLICATE_NAME"

    def __init__(self, entity: str, name: str | None = None, **log_context: Any):
        if name:
            detail = f"{entity} named '{name}' already exists"
        else:
            detail = f"{entity} already exists"

        super().__init__(detail, entity=entity, name=name, **log_context)


class EntityInUseError(ValidationError):
    """Entity cannot be deleted because other rows still reference it."""

    default_code = "ENTITY_IN_USE"

    def __init__(self, entity: str, detail: str, **log_context: Any):
        super().__init__(detail, entity=entity, **log_context)


class InvalidSelectionError(ValidationError):
    """Modifier group selection rules are inconsistent."""

    default_code = "INVALID_SELECTION"


class InvalidUploadError(ValidationError):
    """Uploaded file rejected (type, extension or size)."""

    default_code = "INVALID_FILE"


class BulkSaveError(ValidationError):
    """
    Bulk modifier group save was refused.

    ``errors`` holds one human-readable line per blocked group.
    """

    default_code = "BULK_SAVE_BLOCKED"

    def __init__(self, errors: list[str], **log_context: Any):
        super().__init__(
            "Some modifier groups could not be deleted",
            errors=errors,
            blocked=len(errors),
            **log_context,
        )


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    Usage:
        raise InternalError("Failed to store photo", item_id=123)
    """

    default_code = "INTERNAL_ERROR"

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )


class DatabaseError(InternalError):
    """Database operation failed."""

    default_code = "DATABASE_ERROR"

    def __init__(self, operation: str, **log_context: Any):
        detail = f"Database error while trying to {operation}. Please try again."
        super().__init__(detail, operation=operation, **log_context)
