"""Image upload : stockage disque dans le dossier uploads"""

import logging
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from app.core.errors import DomainValidation, UnsupportedMedia

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPES = {"image/png", "image/jpeg", "image/jpg", "image/gif", "image/webp"}
MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB
PUBLIC_PREFIX = "/uploads"


def ensure_uploads_directory(directory: str) -> Path:
    path = Path(directory).resolve()
    path.mkdir(parents=True, exist_ok=True)
    return path


def build_public_url(file_name: str) -> str:
    return f"{PUBLIC_PREFIX}/{file_name}"


def save_image(upload: UploadFile, directory: str) -> dict:
    if upload.content_type not in IMAGE_MIME_TYPES:
        raise UnsupportedMedia("Unsupported image format")

    content = upload.file.read(MAX_IMAGE_BYTES + 1)
    if len(content) > MAX_IMAGE_BYTES:
        raise DomainValidation("Image exceeds 5MB limit")

    ext = Path(upload.filename or "").suffix or ".png"
    file_name = f"{int(time.time() * 1000)}-{secrets.token_hex(6)}{ext}"
    target = ensure_uploads_directory(directory) / file_name
    target.write_bytes(content)
    logger.info(f"Stored upload {file_name} ({len(content)} bytes)")

    return {
        "url": build_public_url(file_name),
        "fileName": file_name,
        "originalName": upload.filename,
        "size": len(content),
        "mimeType": upload.content_type,
    }
