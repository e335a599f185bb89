"""Session cache — login tokens and confirmed sessions, kept in memory.

A login creates an *unconfirmed* token that is delivered out of band.  Once
the user follows the link the token is confirmed and becomes the session
cookie value until it expires or the user logs out.
"""

from __future__ import annotations

import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class SessionEntry:
    """One issued token with expiration metadata."""
    user_id: int
    expires_at: float  # Unix timestamp
    confirmed: bool = False

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class SessionCache:
    """Thread-safe token store.

    Usage:
        cache = SessionCache(session_ttl=3600, token_ttl=600)
        token = cache.add(user_id)        # send link containing token
        cache.confirm(token)              # user followed the link
        cache.lookup(token)               # -> user_id for later requests
    """

    def __init__(
        self,
        session_ttl: float,
        token_ttl: float,
        clock: Callable[[], float] = time.time,
    ):
        self.session_ttl = session_ttl
        self.token_ttl = token_ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, SessionEntry] = {}

    def add(self, user_id: int) -> str:
        """Issue a new unconfirmed token for ``user_id``."""
        token = secrets.token_urlsafe(32)
        now = self._clock()
        with self._lock:
            self._drop_expired(now)
            self._entries[token] = SessionEntry(
                user_id=user_id,
                expires_at=now + self.token_ttl,
            )
        return token

    def confirm(self, token: str) -> int:
        """Turn ``token`` into a session. Raises ``KeyError`` if unknown or expired."""
        with self._lock:
            entry = self._entries.get(token)
            if entry is None or entry.is_expired(self._clock()):
                self._entries.pop(token, None)
                raise KeyError(f"no such token: {token[:8]}...")
            entry.confirmed = True
            entry.expires_at = self._clock() + self.session_ttl
            return entry.user_id

    def lookup(self, token: str) -> Optional[int]:
        """User id of a confirmed, unexpired session; ``None`` otherwise."""
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[token]
                return None
            return entry.user_id if entry.confirmed else None

    def forget(self, token: str) -> None:
        with self._lock:
            self._entries.pop(token, None)

    def purge(self) -> int:
        """Drop expired entries and return how many were removed."""
        now = self._clock()
        with self._lock:
            return self._drop_expired(now)

    def _drop_expired(self, now: float) -> int:
        # Caller must hold self._lock.
        expired = [t for t, e in self._entries.items() if e.is_expired(now)]
        for token in expired:
            del self._entries[token]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
