"""
Restaurant (tenant) identification for every menu endpoint.

Admin calls send the restaurant in the X-Restaurant-ID header; without it
the configured default restaurant is used, which keeps single-restaurant
deployments header-free.
"""

from fastapi import Header, Query

from shared.config.settings import settings
from shared.infrastructure.correlation import RESTAURANT_ID_HEADER
from shared.utils.exceptions import ValidationError
from shared.utils.validators import validate_restaurant_id

RESTAURANT_HEADER = RESTAURANT_ID_HEADER


def _resolve(value: str | None) -> str:
    if value is None:
        return settings.default_restaurant_id
    try:
        return validate_restaurant_id(value)
    except ValueError as e:
        raise ValidationError(str(e), code="INVALID_RESTAURANT", field=RESTAURANT_HEADER) from e


def get_restaurant_id(
    x_restaurant_id: str | None = Header(default=None, alias=RESTAURANT_HEADER),
) -> str:
    """
    FastAPI dependency resolving the current restaurant.

    Raises:
        ValidationError: If the header is present but empty or too long.
    """
    return _resolve(x_restaurant_id)


def get_guest_restaurant_id(
    restaurant_id: str | None = Query(default=None, description="Restaurant to show"),
    x_restaurant_id: str | None = Header(default=None, alias=RESTAURANT_HEADER),
) -> str:
    """Guest menu variant: the query parameter wins over the header."""
    return _resolve(restaurant_id if restaurant_id is not None else x_restaurant_id)
