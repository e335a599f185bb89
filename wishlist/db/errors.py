"""Store error taxonomy.

Lookups that find nothing return ``None``; they never raise.  Everything
raised out of the store is a :class:`StoreError`.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for all store failures."""


class ConstraintViolation(StoreError):
    """A unique or foreign-key constraint rejected the statement."""


class StoreFault(StoreError):
    """Any other I/O or query failure, including use after ``close()``."""
