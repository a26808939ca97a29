"""
Catalog Services - the public guest menu.

Provides:
- Guest menu assembly (visible categories, available items, modifiers)
"""

from .guest_menu import GuestMenuService

__all__ = [
    "GuestMenuService",
]
