from app.schemas.attachment import AttachmentResponse
from app.schemas.folder import FolderCreate, FolderResponse, FolderUpdate
from app.schemas.note import NoteCreate, NoteOrderItem, NoteReorderRequest, NoteResponse, NoteUpdate
from app.schemas.sync import SyncFolder, SyncHealthResponse, SyncNote, SyncRequest, SyncResponse

__all__ = [
    "AttachmentResponse",
    "FolderCreate",
    "FolderResponse",
    "FolderUpdate",
    "NoteCreate",
    "NoteOrderItem",
    "NoteReorderRequest",
    "NoteResponse",
    "NoteUpdate",
    "SyncFolder",
    "SyncHealthResponse",
    "SyncNote",
    "SyncRequest",
    "SyncResponse",
]
