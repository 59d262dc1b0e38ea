
from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.middleware.rate_limit import upload_limiter
from app.models import Attachment
from app.schemas.attachment import AttachmentResponse
from app.services import attachments as attachment_service

router = APIRouter(tags=["attachments"])


@router.post("/notes/{note_id}/attachments", response_model=AttachmentResponse, status_code=201)
@upload_limiter
async def upload_attachment(
    request: Request,
    note_id: int,
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
) -> Attachment:
    # Reject on the declared size before pulling the body into memory
    if file.size is not None:
        attachment_service.check_upload_size(file.size)
    data = await file.read()
    return await attachment_service.create_attachment(
        db,
        note_id,
        original_name=file.filename or "upload",
        mime_type=file.content_type,
        data=data,
    )


@router.get("/notes/{note_id}/attachments", response_model=list[AttachmentResponse])
async def list_attachments(note_id: int, db: AsyncSession = Depends(get_db)) -> list[Attachment]:
    return await attachment_service.list_note_attachments(db, note_id)


@router.get("/files/{attachment_id}")
async def serve_file(attachment_id: int, db: AsyncSession = Depends(get_db)) -> FileResponse:
    blob = await attachment_service.resolve_attachment(db, attachment_id)
    return FileResponse(
        blob.path,
        media_type=blob.mime_type,
        filename=blob.original_name,
        content_disposition_type="inline",
    )
