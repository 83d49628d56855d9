"""
Image uploads for recipes and profile pictures.

Files land in ``settings.upload_dir`` under a unique name
``{millis}-{random}{ext}`` and are served by the static mount at
``/uploads``. The returned path is stored verbatim on the entity.
"""
import asyncio
import logging
import os
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from fridge.config import settings
from fridge.core.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}
PUBLIC_PREFIX = "/uploads"
CHUNK_SIZE = 64 * 1024


def unique_name(original: str) -> str:
    ext = Path(original).suffix.lower()
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"


def check_image(filename: str | None, content_type: str | None) -> None:
    """Only jpeg, jpg, png and gif images are allowed."""
    ext = Path(filename or "").suffix.lower()
    if ext not in ALLOWED_EXTENSIONS or (content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
        raise ValidationError(
            "Only image files (jpeg, jpg, png, gif) are allowed!", code="INVALID_FILE_TYPE"
        )


async def save_image(upload: UploadFile) -> str:
    """
    Store an uploaded image and return its public path.

    Raises:
        ValidationError: wrong type, empty file, or larger than MAX_UPLOAD_MB
    """
    check_image(upload.filename, upload.content_type)
    max_bytes = settings.max_upload_mb * 1024 * 1024

    os.makedirs(settings.upload_dir, exist_ok=True)
    name = unique_name(upload.filename)
    target = Path(settings.upload_dir) / name

    # Disk writes run in a worker thread so a large upload does not block the loop
    size = 0
    fh = await asyncio.to_thread(open, target, "wb")
    try:
        try:
            while chunk := await upload.read(CHUNK_SIZE):
                size += len(chunk)
                if size > max_bytes:
                    raise ValidationError(
                        f"File is too large (max {settings.max_upload_mb} MB)", code="FILE_TOO_LARGE"
                    )
                await asyncio.to_thread(fh.write, chunk)
        finally:
            await asyncio.to_thread(fh.close)
        if size == 0:
            raise ValidationError("Uploaded file is empty", code="EMPTY_FILE")
    except ValidationError:
        target.unlink(missing_ok=True)
        raise

    logger.info("[media] stored %s (%d bytes)", name, size)
    return f"{PUBLIC_PREFIX}/{name}"
