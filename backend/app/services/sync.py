"""Last-write-wins reconciliation of a device snapshot against the server store.

One call runs in one transaction:

1. folders the server does not know are inserted as sent (existing folders are
   never touched, so renames do not travel through sync);
2. notes the server does not know are inserted as sent; known notes are
   overwritten only when the incoming ``updated_at`` is strictly newer;
3. everything changed after ``last_sync`` is read back as the delta.

Any database error rolls the whole call back. Deletions are not synced.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import SyncError
from app.models import Attachment, Folder, Note
from app.schemas.attachment import AttachmentResponse
from app.schemas.folder import FolderResponse
from app.schemas.note import NoteResponse
from app.schemas.sync import SyncFolder, SyncNote
from app.timestamps import utcnow

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    server_time: datetime
    folders: list[FolderResponse] = field(default_factory=list)
    notes: list[NoteResponse] = field(default_factory=list)
    attachments: list[AttachmentResponse] = field(default_factory=list)

    @property
    def summary(self) -> str:
        return (
            f"Synced {len(self.notes)} notes, {len(self.folders)} folders, "
            f"{len(self.attachments)} attachments"
        )


async def _merge_folders(db: AsyncSession, local_folders: list[SyncFolder]) -> int:
    inserted = 0
    for incoming in local_folders:
        if await db.get(Folder, incoming.id) is not None:
            continue
        db.add(Folder(id=incoming.id, name=incoming.name, created_at=incoming.created_at))
        inserted += 1
        logger.debug("Sync inserted folder", extra={"folder_id": incoming.id})
    return inserted


async def _merge_notes(db: AsyncSession, local_notes: list[SyncNote]) -> tuple[int, int]:
    inserted = updated = 0
    for incoming in local_notes:
        existing = await db.get(Note, incoming.id)
        if existing is None:
            db.add(
                Note(
                    id=incoming.id,
                    title=incoming.title,
                    content=incoming.content,
                    folder_id=incoming.folder_id,
                    order_index=incoming.order_index,
                    created_at=incoming.created_at,
                    updated_at=incoming.updated_at,
                )
            )
            inserted += 1
            logger.debug("Sync inserted note", extra={"note_id": incoming.id})
        elif incoming.updated_at > existing.updated_at:
            existing.title = incoming.title
            existing.content = incoming.content
            existing.folder_id = incoming.folder_id
            existing.order_index = incoming.order_index
            existing.updated_at = incoming.updated_at
            updated += 1
            logger.debug("Sync updated note", extra={"note_id": incoming.id})
    return inserted, updated


async def changed_folders(db: AsyncSession, since: datetime | None) -> list[Folder]:
    q = select(Folder).order_by(Folder.created_at, Folder.id)
    if since is not None:
        q = q.where(Folder.created_at > since)
    result = await db.execute(q)
    return list(result.scalars().all())


async def changed_notes(db: AsyncSession, since: datetime | None) -> list[Note]:
    q = select(Note).order_by(Note.updated_at, Note.id)
    if since is not None:
        q = q.where(Note.updated_at > since)
    result = await db.execute(q)
    return list(result.scalars().all())


async def changed_attachments(db: AsyncSession, since: datetime | None) -> list[Attachment]:
    q = select(Attachment).order_by(Attachment.created_at, Attachment.id)
    if since is not None:
        q = q.where(Attachment.created_at > since)
    result = await db.execute(q)
    return list(result.scalars().all())


async def reconcile(
    db: AsyncSession,
    device_id: str,
    last_sync: datetime | None,
    local_folders: list[SyncFolder],
    local_notes: list[SyncNote],
) -> SyncResult:
    """Merge a device snapshot and return the server delta since ``last_sync``.

    ``last_sync`` of None means the device has never synced and gets everything.
    Raises SyncError after rolling back if any step fails.
    """
    logger.info(
        "Sync request",
        extra={
            "device_id": device_id,
            "last_sync": last_sync.isoformat() if last_sync else None,
            "folders": len(local_folders),
            "notes": len(local_notes),
        },
    )
    try:
        folders_inserted = await _merge_folders(db, local_folders)
        # Notes may reference folders inserted above
        await db.flush()
        notes_inserted, notes_updated = await _merge_notes(db, local_notes)
        await db.flush()

        folders = [FolderResponse.model_validate(f) for f in await changed_folders(db, last_sync)]
        notes = [NoteResponse.model_validate(n) for n in await changed_notes(db, last_sync)]
        attachments = [
            AttachmentResponse.model_validate(a) for a in await changed_attachments(db, last_sync)
        ]
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Sync failed", extra={"device_id": device_id, "error": str(e)})
        raise SyncError(f"Sync failed: {e.__class__.__name__}") from e

    result = SyncResult(
        server_time=utcnow(),
        folders=folders,
        notes=notes,
        attachments=attachments,
    )
    logger.info(
        "Sync completed",
        extra={
            "device_id": device_id,
            "folders_inserted": folders_inserted,
            "notes_inserted": notes_inserted,
            "notes_updated": notes_updated,
            "summary": result.summary,
        },
    )
    return result
