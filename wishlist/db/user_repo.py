"""Repository for the ``users`` table — registration and identity lookups."""

from __future__ import annotations

import logging
from typing import Optional

from wishlist.db.database import Database
from wishlist.models.user import User

logger = logging.getLogger(__name__)

INSERT_USER = "INSERT INTO users (name, email) VALUES (?, ?)"
SELECT_BY_EMAIL = "SELECT id, name, email FROM users WHERE email = ?"
SELECT_BY_ID = "SELECT id, name, email FROM users WHERE id = ?"


class UserRepository:
    """Single-Responsibility repository for user persistence."""

    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def add(self, name: str, email: str) -> int:
        """Insert a new user. Raises ``ConstraintViolation`` on duplicate name or email."""
        user_id = self._db.insert(INSERT_USER, (name, email))
        logger.info(f"Registered user {user_id}: {name}")
        return user_id

    # -- Read ------------------------------------------------------------------

    def get_by_email(self, email: str) -> Optional[User]:
        row = self._db.fetchone(SELECT_BY_EMAIL, (email,))
        return User.from_row(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        row = self._db.fetchone(SELECT_BY_ID, (user_id,))
        return User.from_row(row) if row else None
