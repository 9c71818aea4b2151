"""Persisted record models (one JSON object per record)."""

from gallery.models.item import Item
from gallery.models.user import User

__all__ = ["Item", "User"]
