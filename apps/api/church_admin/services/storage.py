from __future__ import annotations

import logging
import os
import shutil
import uuid
from pathlib import Path

from fastapi import HTTPException, UploadFile

from church_admin.core.config import settings

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"
ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def _file_size(file: UploadFile) -> int:
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(0)
    return size


def validate_image(file: UploadFile) -> str:
    """Returns the extension to store the image under."""
    extension = ALLOWED_IMAGE_TYPES.get((file.content_type or "").lower())
    if extension is None:
        raise HTTPException(status_code=400, detail="only jpeg, png, gif or webp images are accepted")
    size = _file_size(file)
    if size == 0:
        raise HTTPException(status_code=400, detail="file is empty")
    if size > settings.max_upload_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"file too large (max {settings.max_upload_bytes // (1024 * 1024)}MB)",
        )
    return extension


def public_url(relative: str) -> str:
    path = f"{UPLOAD_URL_PREFIX}/{relative}".replace("\\", "/")
    if settings.public_base_url:
        return f"{settings.public_base_url.rstrip('/')}{path}"
    return path


def save_image(file: UploadFile, folder: str = "images") -> str:
    extension = validate_image(file)
    folder_path = Path(settings.upload_dir) / folder.strip("/")
    folder_path.mkdir(parents=True, exist_ok=True)

    filename = f"{uuid.uuid4().hex}{extension}"
    with open(folder_path / filename, "wb") as buffer:
        shutil.copyfileobj(file.file, buffer)

    logger.info("stored upload %s as %s/%s", file.filename, folder, filename)
    return public_url(f"{folder.strip('/')}/{filename}")
