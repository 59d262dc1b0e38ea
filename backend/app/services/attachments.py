"""Attachment metadata in the database, bytes in the attachments directory."""

import logging
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import BlobMissingError, FileStorageError, NotFoundError, StorageError, ValidationFailedError
from app.models import Attachment
from app.services import blobs
from app.services.notes import get_note
from app.timestamps import utcnow

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass
class AttachmentBlob:
    path: Path
    filename: str
    original_name: str
    mime_type: str
    size: int


def check_upload_size(size: int) -> None:
    if size > settings.max_attachment_bytes:
        limit_mb = settings.max_attachment_bytes // (1024 * 1024)
        raise ValidationFailedError(f"File too large. Maximum size is {limit_mb}MB")


async def create_attachment(
    db: AsyncSession,
    note_id: int,
    original_name: str,
    mime_type: str | None,
    data: bytes,
) -> Attachment:
    await get_note(db, note_id)
    if not data:
        raise ValidationFailedError("Empty file")
    check_upload_size(len(data))

    filename = blobs.generate_filename(original_name)
    try:
        blobs.write_blob(filename, data)
    except OSError as e:
        blobs.remove_blob(filename)
        logger.error("Attachment write failed", extra={"note_id": note_id, "error": str(e)})
        raise FileStorageError() from e

    attachment = Attachment(
        note_id=note_id,
        filename=filename,
        original_name=original_name,
        mime_type=mime_type or DEFAULT_MIME_TYPE,
        size=len(data),
        created_at=utcnow(),
    )
    db.add(attachment)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        blobs.remove_blob(filename)
        logger.error("Attachment insert failed", extra={"note_id": note_id, "error": str(e)})
        raise StorageError("Failed to store file info") from e
    await db.refresh(attachment)
    logger.info(
        "Stored attachment",
        extra={"note_id": note_id, "attachment_id": attachment.id, "size": attachment.size},
    )
    return attachment


async def list_note_attachments(db: AsyncSession, note_id: int) -> list[Attachment]:
    await get_note(db, note_id)
    result = await db.execute(
        select(Attachment)
        .where(Attachment.note_id == note_id)
        .order_by(Attachment.created_at.desc(), Attachment.id.desc())
    )
    return list(result.scalars().all())


async def resolve_attachment(db: AsyncSession, attachment_id: int) -> AttachmentBlob:
    attachment = await db.get(Attachment, attachment_id)
    if attachment is None:
        raise NotFoundError("Attachment not found")
    path = blobs.blob_path(attachment.filename)
    if not path.is_file():
        logger.warning(
            "Attachment row without file",
            extra={"attachment_id": attachment_id, "stored_name": attachment.filename},
        )
        raise BlobMissingError()
    return AttachmentBlob(
        path=path,
        filename=attachment.filename,
        original_name=attachment.original_name,
        mime_type=attachment.mime_type,
        size=attachment.size,
    )
