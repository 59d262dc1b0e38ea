"""Attachment bytes stored flat in {attachments_dir}/{filename}"""

import logging
import secrets
import time
from pathlib import Path

from app.config import settings

logger = logging.getLogger(__name__)


def ensure_attachments_dir() -> Path:
    root = Path(settings.attachments_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


def blob_path(filename: str) -> Path:
    return Path(settings.attachments_dir) / filename


def generate_filename(original_name: str) -> str:
    """Unix timestamp plus 16 random bytes, keeping the original extension."""
    ext = Path(original_name).suffix
    return f"{int(time.time())}_{secrets.token_hex(16)}{ext}"


def write_blob(filename: str, data: bytes) -> Path:
    path = ensure_attachments_dir() / filename
    path.write_bytes(data)
    return path


def remove_blob(filename: str) -> None:
    """Best-effort removal; a failure is logged, never raised."""
    path = blob_path(filename)
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Failed to remove attachment file", extra={"path": str(path), "error": str(e)})
