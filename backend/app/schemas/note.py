
from pydantic import BaseModel, Field

from app.schemas.types import UtcTimestamp


class NoteCreate(BaseModel):
    title: str
    content: str = ""
    folder_id: int | None = None


class NoteUpdate(BaseModel):
    title: str | None = None
    content: str | None = None
    folder_id: int | None = None  # 0 moves the note out of its folder


class NoteResponse(BaseModel):
    id: int
    title: str
    content: str
    folder_id: int | None
    order_index: int
    created_at: UtcTimestamp
    updated_at: UtcTimestamp

    model_config = {"from_attributes": True}


class NoteOrderItem(BaseModel):
    id: int
    order: int


class NoteReorderRequest(BaseModel):
    # Web clients send camelCase
    note_order: list[NoteOrderItem] = Field(alias="noteOrder")

    model_config = {"populate_by_name": True}
