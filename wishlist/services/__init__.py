"""Glue around the store: login sessions and change notifications."""

from wishlist.services.events import Event, EventBroker
from wishlist.services.session_cache import SessionCache, SessionEntry

__all__ = ["Event", "EventBroker", "SessionCache", "SessionEntry"]
