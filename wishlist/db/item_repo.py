"""Repository for the ``items`` table — create, delete and viewer listings."""

from __future__ import annotations

from typing import Optional

from wishlist.db.database import Database
from wishlist.models.item import Item, ItemView

INSERT_ITEM = (
    "INSERT INTO items (name, link, created_by, reserved_by) VALUES (?, ?, ?, ?)"
)
DELETE_OWN_ITEM = "DELETE FROM items WHERE id = ? AND created_by = ?"
SELECT_ITEMS = "SELECT id, name, link, created_by, reserved_by FROM items ORDER BY id"
SELECT_ITEM = "SELECT id, name, link, created_by, reserved_by FROM items WHERE id = ?"


class ItemRepository:
    """Single-Responsibility repository for item persistence."""

    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def add(
        self,
        name: str,
        link: Optional[str],
        created_by: int,
        reserved_by: Optional[int] = None,
    ) -> int:
        """
        Insert an item and return its id.

        ``reserved_by`` may be set to create an item that is already
        reserved.  Unknown user ids raise ``ConstraintViolation``.
        """
        return self._db.insert(INSERT_ITEM, (name, link or "", created_by, reserved_by))

    # -- Read ------------------------------------------------------------------

    def get(self, item_id: int) -> Optional[Item]:
        row = self._db.fetchone(SELECT_ITEM, (item_id,))
        return Item.from_row(row) if row else None

    def list(self, viewer_id: int) -> list[ItemView]:
        """All items, projected for ``viewer_id``."""
        rows = self._db.fetchall(SELECT_ITEMS)
        return [Item.from_row(r).view_for(viewer_id) for r in rows]

    # -- Delete ----------------------------------------------------------------

    def delete(self, user_id: int, item_id: int) -> int:
        """
        Delete ``item_id`` if ``user_id`` created it.

        Returns the number of deleted rows.  Zero means the item does not
        exist or belongs to someone else; neither case raises.
        """
        return self._db.execute(DELETE_OWN_ITEM, (item_id, user_id))
