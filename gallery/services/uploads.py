"""Image upload: validate type and size, store under a generated name."""

import logging
import random
import time
from pathlib import Path

from gallery.core.errors import StorageError, UploadError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})
# Stored files always get this extension; the public path prefix mirrors UPLOAD_DIR's default.
STORED_EXTENSION = ".webp"
PUBLIC_PREFIX = "images/webp"


def _stored_name() -> str:
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{STORED_EXTENSION}"


def validate_image(filename: str | None, content: bytes | None, max_bytes: int) -> None:
    """Raise UploadError for a missing file, a non-image extension, or oversized content."""
    if not filename or content is None:
        raise UploadError("No file uploaded")
    if Path(filename).suffix.lower() not in ALLOWED_IMAGE_EXTENSIONS:
        raise UploadError("Only image files are allowed!")
    if len(content) > max_bytes:
        raise UploadError(
            f"File size must not exceed {max_bytes // (1024 * 1024)} MB."
        )


def save_image(
    filename: str | None,
    content: bytes | None,
    upload_dir: Path,
    max_bytes: int,
) -> str:
    """Validate and write the image; return its public path (images/webp/<name>)."""
    validate_image(filename, content, max_bytes)
    name = _stored_name()
    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        (upload_dir / name).write_bytes(content)
    except OSError as e:
        logger.error("Failed to store upload %s: %s", name, e)
        raise StorageError("Failed to upload file") from e
    public_path = f"{PUBLIC_PREFIX}/{name}"
    logger.info("File uploaded", extra={"image_path": public_path, "size": len(content)})
    return public_path
