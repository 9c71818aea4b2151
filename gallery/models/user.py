"""Persisted user record (auth and RBAC)."""

from pydantic import BaseModel, ConfigDict, Field

from gallery.schemas.auth import Role


class User(BaseModel):
    """
    User account as stored in the users collection.

    The bcrypt hash is stored under the key "password"; role is 'admin' or 'user'.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    username: str
    password_hash: str = Field(alias="password")
    role: Role = "user"
    name: str = ""

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)
