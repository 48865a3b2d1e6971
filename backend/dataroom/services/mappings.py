from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dataroom.core.errors import MappingNotFoundError
from dataroom.models.mapping import FolderMapping
from dataroom.schemas.mapping import FolderMappingCreate


async def add_mapping(db: AsyncSession, payload: FolderMappingCreate) -> FolderMapping:
    mapping = await db.get(FolderMapping, payload.library_folder_id)
    if mapping is None:
        mapping = FolderMapping(**payload.model_dump())
        db.add(mapping)
    else:
        for field, value in payload.model_dump(exclude={"library_folder_id"}).items():
            setattr(mapping, field, value)
    await db.commit()
    await db.refresh(mapping)
    return mapping


async def get_mapping(db: AsyncSession, library_folder_id: str) -> FolderMapping | None:
    return await db.get(FolderMapping, library_folder_id)


async def require_mapping(db: AsyncSession, library_folder_id: str) -> FolderMapping:
    mapping = await get_mapping(db, library_folder_id)
    if mapping is None:
        raise MappingNotFoundError(library_folder_id)
    return mapping


async def remove_mapping(db: AsyncSession, library_folder_id: str) -> bool:
    mapping = await get_mapping(db, library_folder_id)
    if mapping is None:
        return False
    await db.delete(mapping)
    await db.commit()
    return True


async def list_mappings(db: AsyncSession) -> list[FolderMapping]:
    result = await db.execute(select(FolderMapping).order_by(FolderMapping.created_at, FolderMapping.library_folder_id))
    return list(result.scalars())


async def list_mappings_for_project(db: AsyncSession, project_id: str) -> list[FolderMapping]:
    stmt = select(FolderMapping).where(FolderMapping.project_id == project_id).order_by(FolderMapping.created_at, FolderMapping.library_folder_id)
    result = await db.execute(stmt)
    return list(result.scalars())
