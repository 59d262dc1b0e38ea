import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFoundError, StorageError
from app.models import Attachment, Folder, Note
from app.schemas.note import NoteOrderItem
from app.services import blobs
from app.services.folders import get_folder
from app.timestamps import utcnow

logger = logging.getLogger(__name__)


async def list_notes(db: AsyncSession) -> list[Note]:
    result = await db.execute(
        select(Note).order_by(Note.order_index.asc(), Note.created_at.desc())
    )
    return list(result.scalars().all())


async def list_folder_notes(db: AsyncSession, folder_id: int) -> list[Note]:
    await get_folder(db, folder_id)
    result = await db.execute(
        select(Note)
        .where(Note.folder_id == folder_id)
        .order_by(Note.order_index.desc(), Note.created_at.asc())
    )
    return list(result.scalars().all())


async def get_note(db: AsyncSession, note_id: int) -> Note:
    note = await db.get(Note, note_id)
    if note is None:
        raise NotFoundError("Note not found")
    return note


async def next_order_index(db: AsyncSession, folder_id: int | None) -> int:
    """Current max order index in the folder scope plus one. NULL folder is its own scope."""
    q = select(func.coalesce(func.max(Note.order_index), 0))
    if folder_id is None:
        q = q.where(Note.folder_id.is_(None))
    else:
        q = q.where(Note.folder_id == folder_id)
    result = await db.execute(q)
    return result.scalar_one() + 1


async def _require_folder(db: AsyncSession, folder_id: int) -> None:
    if await db.get(Folder, folder_id) is None:
        raise NotFoundError("Folder not found")


async def create_note(
    db: AsyncSession,
    title: str,
    content: str = "",
    folder_id: int | None = None,
) -> Note:
    if folder_id is not None:
        await _require_folder(db, folder_id)
    now = utcnow()
    note = Note(
        title=title,
        content=content,
        folder_id=folder_id,
        order_index=await next_order_index(db, folder_id),
        created_at=now,
        updated_at=now,
    )
    db.add(note)
    await db.commit()
    await db.refresh(note)
    logger.debug("Created note", extra={"note_id": note.id, "folder_id": folder_id})
    return note


async def update_note(
    db: AsyncSession,
    note_id: int,
    title: str | None = None,
    content: str | None = None,
    folder_id: int | None = None,
) -> Note:
    note = await get_note(db, note_id)
    if title is not None:
        note.title = title
    if content is not None:
        note.content = content
    if folder_id is not None:
        if folder_id == 0:
            note.folder_id = None
        else:
            await _require_folder(db, folder_id)
            note.folder_id = folder_id
    note.updated_at = utcnow()
    await db.commit()
    await db.refresh(note)
    return note


async def delete_note(db: AsyncSession, note_id: int) -> None:
    """Delete a note. Attachment rows go with it via ON DELETE CASCADE; their files are removed afterwards."""
    note = await get_note(db, note_id)
    result = await db.execute(select(Attachment.filename).where(Attachment.note_id == note_id))
    filenames = list(result.scalars().all())
    await db.delete(note)
    await db.commit()
    for filename in filenames:
        blobs.remove_blob(filename)
    logger.info("Deleted note", extra={"note_id": note_id, "attachments": len(filenames)})


async def reorder_notes(db: AsyncSession, folder_id: int, note_order: list[NoteOrderItem]) -> None:
    """Assign order indices to notes of one folder, all or nothing."""
    await get_folder(db, folder_id)
    try:
        for item in note_order:
            await db.execute(
                update(Note)
                .where(Note.id == item.id, Note.folder_id == folder_id)
                .values(order_index=item.order)
            )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Reorder failed", extra={"folder_id": folder_id, "error": str(e)})
        raise StorageError("Failed to update note order") from e
