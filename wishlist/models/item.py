"""Item domain models — stored rows and their viewer-relative projection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ReservationState(str, Enum):
    NOT_FOUND = "not_found"
    UNRESERVED = "unreserved"
    RESERVED = "reserved"


@dataclass(frozen=True)
class Item:
    """An item row exactly as stored, including who reserved it."""

    id: int
    name: str
    link: str
    created_by: int
    reserved_by: Optional[int] = None

    @property
    def is_reserved(self) -> bool:
        return self.reserved_by is not None

    def view_for(self, viewer_id: int) -> "ItemView":
        """Project this row for ``viewer_id`` without exposing ``reserved_by``."""
        return ItemView(
            id=self.id,
            name=self.name,
            link=self.link,
            is_own=viewer_id == self.created_by,
            is_reserved=self.is_reserved,
            is_reserved_by_us=self.is_reserved and self.reserved_by == viewer_id,
        )

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Item":
        return cls(
            id=row["id"],
            name=row["name"],
            link=row.get("link") or "",
            created_by=row["created_by"],
            reserved_by=row.get("reserved_by"),
        )


@dataclass(frozen=True)
class ItemView:
    """
    An item as one viewer may see it.

    Only the three derived flags describe reservation state; the identity of
    the reserving user is deliberately not part of this type.
    """

    id: int
    name: str
    link: str
    is_own: bool
    is_reserved: bool
    is_reserved_by_us: bool

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.link:
            data["link"] = self.link
        data["is_own"] = self.is_own
        data["is_reserved"] = self.is_reserved
        data["is_reserved_by_us"] = self.is_reserved_by_us
        return data
