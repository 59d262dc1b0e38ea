from pydantic import BaseModel, field_validator

from app.schemas.types import UtcTimestamp


class FolderCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Folder name is required")
        return v


class FolderUpdate(FolderCreate):
    pass


class FolderResponse(BaseModel):
    id: int
    name: str
    created_at: UtcTimestamp

    model_config = {"from_attributes": True}
