"""
Shared validators for input sanitization.
"""

from pathlib import PurePath

from shared.config.constants import Limits, PhotoUpload


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in LIKE patterns.

    SQL LIKE uses % and _ as wildcards. This function escapes them
    so a search for "50%" matches the literal text instead of everything.

    Args:
        value: The search string to escape

    Returns:
        The escaped string safe for use in LIKE patterns (escape char: backslash)
    """
    if not value:
        return value

    # Escape the escape character first, then the wildcards
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def normalize_name(value: str) -> str:
    """Collapse surrounding whitespace; names are compared case-insensitively."""
    return value.strip()


def validate_restaurant_id(value: str | None) -> str:
    """
    Validate the tenant identifier sent in the X-Restaurant-ID header.

    Raises:
        ValueError: If empty or too long.
    """
    if value is None:
        raise ValueError("Restaurant id is required")

    value = value.strip()
    if not value:
        raise ValueError("Restaurant id must not be empty")
    if len(value) > Limits.RESTAURANT_ID_MAX:
        raise ValueError(
            f"Restaurant id must be at most {Limits.RESTAURANT_ID_MAX} characters"
        )
    return value


def photo_extension(filename: str | None) -> str:
    """Lower-cased extension of an uploaded filename ('' when absent)."""
    if not filename:
        return ""
    return PurePath(filename).suffix.lower()


def validate_photo_upload(filename: str | None, content_type: str | None) -> str:
    """
    Check an uploaded photo against the MIME type and extension allow-lists.

    Returns:
        The normalized extension (e.g. ".jpg").

    Raises:
        ValueError: With a message naming the offending file.
    """
    name = filename or "<unnamed>"
    mime = (content_type or "").split(";")[0].strip().lower()

    if mime not in PhotoUpload.ALLOWED_MIME_TYPES:
        raise ValueError(
            f"{name}: file type '{mime or 'unknown'}' is not allowed "
            "(JPEG, PNG and WebP only)"
        )

    extension = photo_extension(filename)
    if extension not in PhotoUpload.ALLOWED_EXTENSIONS:
        raise ValueError(
            f"{name}: extension '{extension or 'none'}' is not allowed "
            "(.jpg, .jpeg, .png, .webp)"
        )

    return extension
