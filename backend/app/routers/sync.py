"""Device sync: health probe, reconciliation, attachment download."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.middleware.rate_limit import sync_limiter
from app.schemas.sync import SyncHealthResponse, SyncRequest, SyncResponse
from app.services import attachments as attachment_service
from app.services.sync import reconcile
from app.timestamps import utcnow

router = APIRouter(prefix="/sync", tags=["sync"])

SYNC_PROTOCOL_VERSION = "1.0"


@router.get("/health", response_model=SyncHealthResponse)
async def sync_health() -> SyncHealthResponse:
    return SyncHealthResponse(
        status="healthy",
        timestamp=utcnow(),
        message="Sync endpoint is ready",
        version=SYNC_PROTOCOL_VERSION,
    )


@router.post("", response_model=SyncResponse)
@sync_limiter
async def sync(
    request: Request,
    body: SyncRequest,
    db: AsyncSession = Depends(get_db),
) -> SyncResponse:
    result = await reconcile(
        db,
        device_id=body.device_id,
        last_sync=body.last_sync,
        local_folders=body.local_folders,
        local_notes=body.local_notes,
    )
    return SyncResponse(
        folders=result.folders,
        notes=result.notes,
        attachments=result.attachments,
        server_time=result.server_time,
        success=True,
        message=result.summary,
    )


@router.get("/attachment/{attachment_id}")
async def download_attachment(attachment_id: int, db: AsyncSession = Depends(get_db)) -> FileResponse:
    blob = await attachment_service.resolve_attachment(db, attachment_id)
    return FileResponse(
        blob.path,
        media_type="application/octet-stream",
        filename=blob.original_name,
    )
