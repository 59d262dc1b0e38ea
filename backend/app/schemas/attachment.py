from pydantic import BaseModel

from app.schemas.types import UtcTimestamp


class AttachmentResponse(BaseModel):
    id: int
    note_id: int
    filename: str
    original_name: str
    mime_type: str
    size: int
    created_at: UtcTimestamp

    model_config = {"from_attributes": True}
