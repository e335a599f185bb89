"""Domain models for the wishlist store."""

from wishlist.models.user import User
from wishlist.models.item import Item, ItemView, ReservationState

__all__ = ["User", "Item", "ItemView", "ReservationState"]
