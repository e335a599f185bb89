"""Shared gift wishlist with private reservations."""

__version__ = "1.0.0"
