"""
Authorization policy for item mutations.

Pure functions of the request identity and the target item; evaluated on every
request, nothing is cached. Creating and uploading need any authenticated user;
updating and deleting an item need its owner or an admin.
"""

from gallery.core.errors import AuthenticationError, AuthorizationError
from gallery.models import Item
from gallery.schemas.auth import Identity

ADMIN_ROLE = "admin"


def require_identity(identity: Identity | None) -> bool:
    """True iff the caller is authenticated."""
    return identity is not None


def can_mutate(identity: Identity | None, item: Item) -> bool:
    """True iff the caller is an admin or owns the item."""
    if identity is None:
        return False
    return identity.role == ADMIN_ROLE or (item.owner is not None and identity.id == item.owner)


def ensure_authenticated(identity: Identity | None) -> Identity:
    if not require_identity(identity):
        raise AuthenticationError("Authentication required")
    return identity


def ensure_can_mutate(identity: Identity | None, item: Item) -> None:
    """Raise unless identity may update or delete item. Look the item up first so 404 wins."""
    ensure_authenticated(identity)
    if not can_mutate(identity, item):
        raise AuthorizationError("You do not have permission to modify this item")
