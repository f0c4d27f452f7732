"""
Image storage — writes uploaded profile pictures to ``settings.UPLOAD_DIR``.

Files are written synchronously; the request waits until the bytes are on
disk. Every I/O failure surfaces as ``StorageError`` so callers can never
mistake a failed upload for a missing one.

The stored name is a random hex id plus an extension chosen from the
declared content type. The client's filename is never used, so only image
extensions ever reach the ``/uploads`` static mount.
"""
import logging
import uuid
from pathlib import Path

from fastapi import UploadFile

from social_api.config import settings
from social_api.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


async def store_image(upload: UploadFile) -> str:
    """
    Store *upload* and return its public URL.

    Raises ValidationError for content types outside ``IMAGE_EXTENSIONS``
    and StorageError when the file cannot be read or written.
    """
    suffix = IMAGE_EXTENSIONS.get((upload.content_type or "").lower())
    if suffix is None:
        raise ValidationError(f"Unsupported content type: {upload.content_type}")

    name = f"{uuid.uuid4().hex}{suffix}"
    target = Path(settings.UPLOAD_DIR) / name
    try:
        data = await upload.read()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    except OSError as exc:
        logger.exception("Failed to store upload %r", upload.filename)
        raise StorageError(f"Could not store {upload.filename!r}: {exc}") from exc

    logger.info("Stored profile image %s (%d bytes)", name, len(data))
    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{name}"


def remove_image(url: str) -> None:
    """Delete the file behind a URL returned by ``store_image``."""
    name = url.rsplit("/", 1)[-1]
    try:
        (Path(settings.UPLOAD_DIR) / name).unlink(missing_ok=True)
    except OSError:
        # Called while another error is propagating; that one wins.
        logger.warning("Could not remove orphaned upload %s", name, exc_info=True)
    else:
        logger.info("Removed orphaned upload %s", name)
