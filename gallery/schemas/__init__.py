"""Pydantic request/response schemas."""

from gallery.schemas.auth import (
    Identity,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PublicUser,
    Role,
)
from gallery.schemas.health import HealthResponse
from gallery.schemas.upload import UploadResponse

__all__ = [
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PublicUser",
    "Role",
    "UploadResponse",
]
