"""Persisted gallery item record."""

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """
    Gallery item as stored in the items collection.

    owner is the creating user's id and never changes. Records written before
    ownership existed load with owner=None and are editable by admins only.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    desc: str
    imgs: list[str] = Field(default_factory=list)
    owner: int | None = None
    created: str | None = None

    def to_record(self) -> dict:
        return self.model_dump()
