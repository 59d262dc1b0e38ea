from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import Folder, Note
from app.schemas.folder import FolderCreate, FolderResponse, FolderUpdate
from app.schemas.note import NoteCreate, NoteReorderRequest, NoteResponse
from app.services import folders as folder_service
from app.services import notes as note_service

router = APIRouter(prefix="/folders", tags=["folders"])


@router.get("", response_model=list[FolderResponse])
async def list_folders(db: AsyncSession = Depends(get_db)) -> list[Folder]:
    return await folder_service.list_folders(db)


@router.post("", response_model=FolderResponse, status_code=201)
async def create_folder(data: FolderCreate, db: AsyncSession = Depends(get_db)) -> Folder:
    return await folder_service.create_folder(db, data.name)


@router.patch("/{folder_id}", response_model=FolderResponse)
async def update_folder(
    folder_id: int,
    data: FolderUpdate,
    db: AsyncSession = Depends(get_db),
) -> Folder:
    return await folder_service.rename_folder(db, folder_id, data.name)


@router.delete("/{folder_id}", status_code=204)
async def delete_folder(folder_id: int, db: AsyncSession = Depends(get_db)) -> None:
    await folder_service.delete_folder(db, folder_id)


@router.get("/{folder_id}/notes", response_model=list[NoteResponse])
async def list_folder_notes(folder_id: int, db: AsyncSession = Depends(get_db)) -> list[Note]:
    return await note_service.list_folder_notes(db, folder_id)


@router.post("/{folder_id}/notes", response_model=NoteResponse, status_code=201)
async def create_folder_note(
    folder_id: int,
    data: NoteCreate,
    db: AsyncSession = Depends(get_db),
) -> Note:
    # The path wins over any folder_id in the body
    return await note_service.create_note(db, data.title, data.content, folder_id)


@router.put("/{folder_id}/notes/order", status_code=204)
async def reorder_folder_notes(
    folder_id: int,
    body: NoteReorderRequest,
    db: AsyncSession = Depends(get_db),
) -> None:
    await note_service.reorder_notes(db, folder_id, body.note_order)
