from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from dataroom.db.base import Base


class FolderMapping(Base):
    """Links a folder of the document library to a folder inside a data room project."""

    __tablename__ = "folder_mappings"

    library_folder_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    library_folder_name: Mapped[str] = mapped_column(String(512), nullable=False)
    vdr_folder_id: Mapped[str] = mapped_column(String(255), nullable=False)
    vdr_folder_name: Mapped[str] = mapped_column(String(512), nullable=False)
    project_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    auto_sync: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc)
    )
