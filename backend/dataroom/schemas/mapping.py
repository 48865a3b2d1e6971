from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FolderMappingCreate(BaseModel):
    library_folder_id: str = Field(min_length=1)
    library_folder_name: str
    vdr_folder_id: str = Field(min_length=1)
    vdr_folder_name: str
    project_id: str = Field(min_length=1)
    auto_sync: bool = False


class FolderMappingResponse(FolderMappingCreate):
    model_config = ConfigDict(from_attributes=True)

    created_at: datetime
    updated_at: datetime
