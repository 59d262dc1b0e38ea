from pydantic import BaseModel, Field

from app.schemas.attachment import AttachmentResponse
from app.schemas.folder import FolderResponse
from app.schemas.note import NoteResponse
from app.schemas.types import UtcDatetime, UtcTimestamp


class SyncFolder(BaseModel):
    id: int
    name: str = Field(min_length=1)
    created_at: UtcDatetime


class SyncNote(BaseModel):
    id: int
    title: str
    content: str = ""
    folder_id: int | None = None
    order_index: int = 0
    created_at: UtcDatetime
    updated_at: UtcDatetime


class SyncRequest(BaseModel):
    device_id: str = Field(min_length=1)
    last_sync: UtcDatetime | None = None
    local_folders: list[SyncFolder] = []
    local_notes: list[SyncNote] = []


class SyncResponse(BaseModel):
    folders: list[FolderResponse] = []
    notes: list[NoteResponse] = []
    attachments: list[AttachmentResponse] = []
    server_time: UtcTimestamp
    success: bool = True
    message: str = ""


class SyncHealthResponse(BaseModel):
    status: str
    timestamp: UtcTimestamp
    message: str
    version: str
