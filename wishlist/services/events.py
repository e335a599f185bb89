"""In-process long-poll broker for change notifications.

Handlers publish after a successful mutation; browsers poll with the
timestamp of the last event they saw and get everything newer, waiting up to
a timeout if there is nothing yet.  Runs on one asyncio event loop.
"""

from __future__ import annotations

import asyncio
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class Event:
    timestamp: int  # milliseconds, strictly increasing per broker
    category: str
    data: Any

    def to_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp, "category": self.category, "data": self.data}


class EventBroker:
    """Keeps the last ``history_size`` events and wakes pollers on publish."""

    def __init__(self, history_size: int = 100, clock: Callable[[], float] = time.time):
        self._events: deque[Event] = deque(maxlen=history_size)
        self._clock = clock
        self._changed = asyncio.Event()
        self._last_timestamp = 0

    def publish(self, category: str, data: Any = None) -> Event:
        timestamp = max(int(self._clock() * 1000), self._last_timestamp + 1)
        self._last_timestamp = timestamp
        event = Event(timestamp=timestamp, category=category, data=data)
        self._events.append(event)

        changed, self._changed = self._changed, asyncio.Event()
        changed.set()
        return event

    def now_ms(self) -> int:
        """A cursor that every later ``publish`` sorts after."""
        return max(int(self._clock() * 1000) - 1, self._last_timestamp)

    def since(self, category: str, since_ms: int) -> list[Event]:
        return [e for e in self._events if e.category == category and e.timestamp > since_ms]

    async def wait(self, category: str, since_ms: int, timeout: float) -> list[Event]:
        """Events newer than ``since_ms``; an empty list if none arrive in time."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while True:
            events = self.since(category, since_ms)
            if events:
                return events

            remaining = deadline - loop.time()
            if remaining <= 0:
                return []

            changed = self._changed
            try:
                await asyncio.wait_for(changed.wait(), remaining)
            except asyncio.TimeoutError:
                return self.since(category, since_ms)
