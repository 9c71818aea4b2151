"""Read access and provisioning over the persisted user collection."""

import logging

import pydantic

from gallery.core.config import get_settings
from gallery.core.errors import NotFoundError, StorageError, ValidationError
from gallery.core.storage import JsonCollection
from gallery.models import User
from gallery.schemas.auth import Role

logger = logging.getLogger(__name__)


class UserStore:
    """Users stored as one JSON collection. The API only reads; provisioning tools write."""

    def __init__(self, collection: JsonCollection) -> None:
        self.collection = collection

    @staticmethod
    def _load(record: dict) -> User:
        """Parse one stored record; a malformed record is a storage failure, not a crash."""
        try:
            return User.model_validate(record)
        except pydantic.ValidationError as e:
            logger.error("Malformed user record %r: %s", record.get("id"), e)
            raise StorageError("Failed to read users") from e

    def all(self) -> list[User]:
        return [self._load(r) for r in self.collection.read()]

    def get(self, user_id: int) -> User:
        for user in self.all():
            if user.id == user_id:
                return user
        raise NotFoundError("User not found")

    def find_by_username(self, username: str) -> User | None:
        for user in self.all():
            if user.username == username:
                return user
        return None

    def add(self, username: str, password_hash: str, role: Role = "user", name: str = "") -> User:
        """Append a user with the next free id. Usernames are unique."""
        with self.collection.transaction() as records:
            users = [self._load(r) for r in records]
            if any(u.username == username for u in users):
                raise ValidationError(f"User '{username}' already exists")
            user = User(
                id=max((u.id for u in users), default=0) + 1,
                username=username,
                password_hash=password_hash,
                role=role,
                name=name,
            )
            records.append(user.to_record())
        logger.info("Created user", extra={"user_id": user.id, "role": role})
        return user

    def set_password_hash(self, username: str, password_hash: str) -> User:
        """Replace the stored hash for username (password reset)."""
        with self.collection.transaction() as records:
            for i, record in enumerate(records):
                user = self._load(record)
                if user.username == username:
                    user.password_hash = password_hash
                    records[i] = {**record, **user.to_record()}
                    break
            else:
                raise NotFoundError("User not found")
        logger.info("Reset password", extra={"user_id": user.id})
        return user


def get_user_store() -> UserStore:
    """Dependency that builds a UserStore over the configured users file."""
    return UserStore(JsonCollection(get_settings().users_path, "users"))
