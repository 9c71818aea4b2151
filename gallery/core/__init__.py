"""Core app configuration and persistence."""

from gallery.core.config import get_settings, settings
from gallery.core.storage import JsonCollection

__all__ = ["get_settings", "settings", "JsonCollection"]
