"""Request/response schemas for item endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from gallery.models import Item


class ItemCreate(BaseModel):
    """Body of POST /items. name and desc are checked by the store so a missing one is a 400."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, description="Display name")
    desc: str | None = Field(default=None, description="Description")
    imgs: list[str] | None = Field(
        default=None,
        description="Image paths; a placeholder is used when omitted or empty.",
    )


class ItemUpdate(BaseModel):
    """Body of PUT /items/{id}. Only fields present in the body are changed."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    desc: str | None = None
    imgs: list[str] | None = None


class ItemDeleteResponse(BaseModel):
    """Response after deleting an item."""

    message: str = "Item deleted successfully"
    item: Item
