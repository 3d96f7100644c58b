from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tryout.schemas.quiz import UtcDatetime


class FolderIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class FolderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[UtcDatetime] = None


class FileIn(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    # links only; uploads are not stored here
    url: str = Field(min_length=8, max_length=2048, pattern=r"^https?://\S+$")


class FileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    folder_id: int
    title: str
    description: Optional[str] = None
    url: str
    updated_at: Optional[UtcDatetime] = None
