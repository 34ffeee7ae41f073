"""Image upload validation and storage."""
import logging
import random
import time
from pathlib import Path
from typing import Optional

from app.errors import PayloadTooLarge, StorageError, UnsupportedMediaType, ValidationError

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"
ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def is_allowed_image(filename: str, content_type: Optional[str]) -> bool:
    """Both the extension and the declared content type must be on the allow-list."""
    extension = Path(filename or "").suffix.lower()
    mime = (content_type or "").split(";")[0].strip().lower()
    return extension in ALLOWED_EXTENSIONS and mime in ALLOWED_CONTENT_TYPES


def generate_filename(original_name: str) -> str:
    """<epoch millis>-<random int><original extension>"""
    extension = Path(original_name).suffix.lower()
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9 - 1)}{extension}"


def save_image(
    upload_dir: Path,
    filename: Optional[str],
    content_type: Optional[str],
    data: bytes,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> str:
    """Validate an uploaded image, write it to upload_dir and return its public URL path."""
    if not filename:
        raise ValidationError("No file uploaded")

    if not is_allowed_image(filename, content_type):
        logger.warning(f"Rejected upload {filename!r} with content type {content_type!r}")
        raise UnsupportedMediaType()

    if len(data) > max_bytes:
        logger.warning(f"Rejected upload {filename!r}: {len(data)} bytes exceeds {max_bytes}")
        raise PayloadTooLarge(f"File too large (max {max_bytes / (1024 * 1024):g} MB)")

    stored_name = generate_filename(filename)
    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        (upload_dir / stored_name).write_bytes(data)
    except OSError as e:
        logger.error(f"Error writing upload {stored_name}: {e}", exc_info=True)
        raise StorageError("Failed to upload file") from e

    logger.info(f"Saved upload {filename!r} as {stored_name} ({len(data)} bytes)")
    return f"{UPLOAD_URL_PREFIX}/{stored_name}"
