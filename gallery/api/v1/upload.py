"""Upload endpoint: accept one image file (field "image") from an authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

from gallery.api.v1.auth import get_current_user
from gallery.core.config import get_settings
from gallery.schemas.auth import Identity
from gallery.schemas.upload import UploadResponse
from gallery.services.uploads import save_image

router = APIRouter()


@router.post("", response_model=UploadResponse)
async def upload_image(
    _user: Annotated[Identity, Depends(get_current_user)],
    image: Annotated[UploadFile | None, File()] = None,
) -> UploadResponse:
    """
    Store an uploaded image and return its public path.

    Send `multipart/form-data` with a field named `image`. Allowed extensions are
    jpg, jpeg, png, gif and webp; files over MAX_UPLOAD_BYTES are rejected.
    The stored file always gets a .webp name. Items reference the returned path.
    """
    settings = get_settings()
    filename = image.filename if image is not None else None
    # Read one byte past the limit so oversized files are detected without reading them whole.
    content = await image.read(settings.MAX_UPLOAD_BYTES + 1) if image is not None else None
    path = await run_in_threadpool(
        save_image, filename, content, settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES
    )
    return UploadResponse(image_path=path)
