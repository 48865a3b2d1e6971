from __future__ import annotations

import enum
from datetime import datetime
from typing import Iterator, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UploadStatus(str, enum.Enum):
    PENDING = "pending"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    FAILED = "failed"


class UploadTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_id: str = Field(min_length=1)
    folder_id: str = Field(min_length=1)


class ChunkDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1)
    offset: int = Field(ge=0)
    length: int = Field(ge=0)

    @property
    def end(self) -> int:
        return self.offset + self.length


class ChunkPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_size: int = Field(ge=0)
    chunk_size: int = Field(gt=0)
    chunks: tuple[ChunkDescriptor, ...]

    @property
    def is_single_upload(self) -> bool:
        return len(self.chunks) == 1

    def __iter__(self) -> Iterator[ChunkDescriptor]:  # type: ignore[override]
        return iter(self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)


class UploadProgress(BaseModel):
    """Snapshot of one upload; a new instance is published for every change."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    document_id: str
    file_name: str
    total_size: int = Field(ge=0)
    uploaded_size: int = Field(default=0, ge=0)
    chunks_total: int = Field(ge=1)
    chunks_uploaded: int = Field(default=0, ge=0)
    status: UploadStatus = UploadStatus.PENDING
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in {UploadStatus.COMPLETED, UploadStatus.FAILED}


class UploadedDocument(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    size: int = Field(ge=0)
    parent_id: str | None = None
    parent_name: str | None = None
    index: str | None = None
    is_favorite: bool = False
    is_attachment: bool = False
    data_type: str = "File"
    created_at: datetime | None = None
    publication_status: str | None = None
    file_extension_type: str | None = None
    permissions: str | None = None


class ChunkUploadRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_id: str
    folder_id: str
    document_id: str
    file_name: str
    chunk_number: int = Field(ge=1)
    total_size: int = Field(ge=0)
    data: bytes


class SyncResult(BaseModel):
    success: bool = True
    documents_uploaded: int = 0
    documents_failed: int = 0
    errors: List[str] = Field(default_factory=list)
