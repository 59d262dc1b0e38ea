"""Startup data fixes run after migrations: default folders and legacy order indices."""

import logging

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import Database
from app.models import Folder, Note
from app.services import blobs

logger = logging.getLogger(__name__)


async def seed_default_folders(db: AsyncSession, names: list[str] | None = None) -> int:
    """Create the default folders when the store has none. Returns count created."""
    result = await db.execute(select(func.count()).select_from(Folder))
    if result.scalar_one() > 0:
        return 0
    names = settings.default_folders if names is None else names
    for name in names:
        db.add(Folder(name=name))
    await db.commit()
    if names:
        logger.info("Created default folders: %s", ", ".join(names))
    return len(names)


async def backfill_order_index(db: AsyncSession) -> int:
    """Give legacy notes without an order index ``order_index = id``. Returns rows touched."""
    result = await db.execute(
        update(Note)
        .where(or_(Note.order_index == 0, Note.order_index.is_(None)))
        .values(order_index=Note.id)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    if result.rowcount:
        logger.info("Backfilled order_index for %s notes", result.rowcount)
    return result.rowcount


async def bootstrap_store(database: Database) -> None:
    blobs.ensure_attachments_dir()
    async with database.session() as session:
        await seed_default_folders(session)
        await backfill_order_index(session)
