"""HTTP middleware."""

from gallery.middleware.session import SessionMiddleware

__all__ = ["SessionMiddleware"]
