from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import Note
from app.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from app.services import notes as note_service

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=list[NoteResponse])
async def list_notes(db: AsyncSession = Depends(get_db)) -> list[Note]:
    return await note_service.list_notes(db)


@router.post("", response_model=NoteResponse, status_code=201)
async def create_note(data: NoteCreate, db: AsyncSession = Depends(get_db)) -> Note:
    return await note_service.create_note(db, data.title, data.content, data.folder_id)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(note_id: int, db: AsyncSession = Depends(get_db)) -> Note:
    return await note_service.get_note(db, note_id)


@router.patch("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: int,
    data: NoteUpdate,
    db: AsyncSession = Depends(get_db),
) -> Note:
    return await note_service.update_note(
        db, note_id, title=data.title, content=data.content, folder_id=data.folder_id
    )


@router.delete("/{note_id}", status_code=204)
async def delete_note(note_id: int, db: AsyncSession = Depends(get_db)) -> None:
    await note_service.delete_note(db, note_id)
