"""Request/response schemas for the upload endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    """Response after storing an uploaded image."""

    model_config = ConfigDict(populate_by_name=True)

    image_path: str = Field(
        ...,
        alias="imagePath",
        description="Public path of the stored image (images/webp/<name>).",
    )
