"""Reservation state of items: reserve, release and owner queries."""

from __future__ import annotations

from typing import Optional

from wishlist.db.database import Database
from wishlist.models.item import ReservationState

SET_RESERVATION = "UPDATE items SET reserved_by = ? WHERE id = ?"
RESERVE_IF_FREE = "UPDATE items SET reserved_by = ? WHERE id = ? AND reserved_by IS NULL"
SELECT_RESERVATION = "SELECT reserved_by FROM items WHERE id = ?"


class ReservationRepository:
    """
    Reservation engine over ``items.reserved_by``.

    ``reserve`` overwrites whatever reservation exists and ``unreserve``
    clears it for anyone; checking who may do so is up to the caller.
    ``reserve_if_free`` is the compare-and-set variant.
    """

    def __init__(self, db: Database):
        self._db = db

    def reserve(self, user_id: int, item_id: int) -> int:
        """Set ``user_id`` as reservation owner. Returns the affected row count."""
        return self._db.execute(SET_RESERVATION, (user_id, item_id))

    def reserve_if_free(self, user_id: int, item_id: int) -> bool:
        """Reserve only if nobody holds the item. ``False`` if taken or missing."""
        return self._db.execute(RESERVE_IF_FREE, (user_id, item_id)) > 0

    def unreserve(self, item_id: int) -> int:
        """Clear the reservation. Releasing an unreserved item is a no-op."""
        return self._db.execute(SET_RESERVATION, (None, item_id))

    def get_owner(self, item_id: int) -> Optional[int]:
        """Reserving user id, or ``None`` if the item is unreserved or missing."""
        row = self._db.fetchone(SELECT_RESERVATION, (item_id,))
        return row["reserved_by"] if row else None

    def reservation_state(self, item_id: int) -> tuple[ReservationState, Optional[int]]:
        """Like ``get_owner`` but tells a missing item from an unreserved one."""
        row = self._db.fetchone(SELECT_RESERVATION, (item_id,))
        if row is None:
            return ReservationState.NOT_FOUND, None
        if row["reserved_by"] is None:
            return ReservationState.UNRESERVED, None
        return ReservationState.RESERVED, row["reserved_by"]
