"""
Security module: rate limiting for public endpoints.

Admin calls identify the restaurant through the X-Restaurant-ID header
(see rest_api.routers._common.restaurant); there is no token auth yet.
"""

from shared.security.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    "limiter",
    "rate_limit_exceeded_handler",
]
