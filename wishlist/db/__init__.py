"""Database layer — SQLite behind a single lock with the repository pattern."""

from wishlist.db.database import Database
from wishlist.db.errors import ConstraintViolation, StoreError, StoreFault
from wishlist.db.item_repo import ItemRepository
from wishlist.db.reservation_repo import ReservationRepository
from wishlist.db.schema import SCHEMA_DDL
from wishlist.db.user_repo import UserRepository

__all__ = [
    "Database", "SCHEMA_DDL",
    "StoreError", "ConstraintViolation", "StoreFault",
    "UserRepository", "ItemRepository", "ReservationRepository",
]
