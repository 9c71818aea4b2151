"""Request/response schemas for auth endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["admin", "user"]


class LoginRequest(BaseModel):
    """Credentials for login. Presence is checked by the endpoint (400, not 422)."""

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="Password")


class Identity(BaseModel):
    """Authenticated caller (id, username, role) for the current request."""

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    id: int
    username: str
    role: Role


class PublicUser(BaseModel):
    """User as returned to clients (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: Role
    name: str = ""


class LoginResponse(BaseModel):
    """Response after a successful login; the credential travels in a cookie."""

    user: PublicUser
    message: str = "Login successful"


class MessageResponse(BaseModel):
    """Plain message response (logout)."""

    message: str
