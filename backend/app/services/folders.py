import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ConflictError, NotFoundError
from app.models import Folder, Note

logger = logging.getLogger(__name__)


async def list_folders(db: AsyncSession) -> list[Folder]:
    result = await db.execute(select(Folder).order_by(Folder.created_at, Folder.id))
    return list(result.scalars().all())


async def get_folder(db: AsyncSession, folder_id: int) -> Folder:
    folder = await db.get(Folder, folder_id)
    if folder is None:
        raise NotFoundError("Folder not found")
    return folder


async def _ensure_name_free(db: AsyncSession, name: str, exclude_id: int | None = None) -> None:
    q = select(Folder.id).where(Folder.name == name)
    if exclude_id is not None:
        q = q.where(Folder.id != exclude_id)
    result = await db.execute(q)
    if result.first() is not None:
        raise ConflictError(f"Folder '{name}' already exists")


async def _commit_unique_name(db: AsyncSession, name: str) -> None:
    # A concurrent writer can take the name between the check and the commit
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"Folder '{name}' already exists")


async def create_folder(db: AsyncSession, name: str) -> Folder:
    await _ensure_name_free(db, name)
    folder = Folder(name=name)
    db.add(folder)
    await _commit_unique_name(db, name)
    await db.refresh(folder)
    logger.info("Created folder", extra={"folder_id": folder.id})
    return folder


async def rename_folder(db: AsyncSession, folder_id: int, name: str) -> Folder:
    folder = await get_folder(db, folder_id)
    await _ensure_name_free(db, name, exclude_id=folder_id)
    folder.name = name
    await _commit_unique_name(db, name)
    await db.refresh(folder)
    return folder


async def count_folder_notes(db: AsyncSession, folder_id: int) -> int:
    result = await db.execute(
        select(func.count()).select_from(Note).where(Note.folder_id == folder_id)
    )
    return result.scalar_one()


async def delete_folder(db: AsyncSession, folder_id: int) -> None:
    """Delete an empty folder. A folder that still owns notes is left alone."""
    folder = await get_folder(db, folder_id)
    note_count = await count_folder_notes(db, folder_id)
    if note_count > 0:
        raise ConflictError(
            f"Folder contains {note_count} notes. Move or delete notes first."
        )
    await db.delete(folder)
    await db.commit()
    logger.info("Deleted folder", extra={"folder_id": folder_id})
