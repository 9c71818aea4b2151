"""Login, logout, current user and the identity dependencies (get_identity, get_current_user)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from gallery.core.config import get_settings
from gallery.core.errors import AuthenticationError, ValidationError
from gallery.core.security import (
    PASSWORD_MAX_LEN,
    USERNAME_MAX_LEN,
    mint_credential,
    verify_password,
)
from gallery.schemas.auth import (
    Identity,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PublicUser,
)
from gallery.services.policy import ensure_authenticated
from gallery.services.user_store import UserStore, get_user_store

logger = logging.getLogger(__name__)
router = APIRouter()


def get_identity(request: Request) -> Identity | None:
    """Dependency: identity resolved by SessionMiddleware, or None for anonymous callers."""
    return getattr(request.state, "identity", None)


def get_current_user(
    identity: Annotated[Identity | None, Depends(get_identity)],
) -> Identity:
    """Dependency: require an authenticated caller. Raises 401 if the request is anonymous."""
    return ensure_authenticated(identity)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    users: Annotated[UserStore, Depends(get_user_store)],
) -> LoginResponse:
    """
    Authenticate with username and password.
    On success the signed credential is set as an HTTP-only session cookie.
    """
    if not body.username or not body.password:
        raise ValidationError("Username and password required")
    if len(body.username) > USERNAME_MAX_LEN or len(body.password) > PASSWORD_MAX_LEN:
        raise AuthenticationError("Invalid credentials")

    user = users.find_by_username(body.username)
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Login failed", extra={"username": body.username[:64]})
        raise AuthenticationError("Invalid credentials")

    settings = get_settings()
    token = mint_credential(Identity(id=user.id, username=user.username, role=user.role))
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    logger.info("Login succeeded", extra={"user_id": user.id})
    return LoginResponse(user=PublicUser.model_validate(user), message="Login successful")


@router.get("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """
    Clear the session cookie. Always succeeds.

    The credential itself is not revoked: a copy of it stays valid until it expires.
    """
    settings = get_settings()
    response.delete_cookie(
        settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return MessageResponse(message="Logged out successfully")


@router.get("/current-user", response_model=PublicUser)
def current_user(
    identity: Annotated[Identity, Depends(get_current_user)],
    users: Annotated[UserStore, Depends(get_user_store)],
) -> PublicUser:
    """Return the stored record of the authenticated caller (without the password hash)."""
    return PublicUser.model_validate(users.get(identity.id))
