from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Iterable, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dataroom.core.errors import DataroomError
from dataroom.db.session import async_session_factory
from dataroom.schemas.upload import SyncResult, UploadedDocument, UploadProgress, UploadTarget
from dataroom.services import mappings as mapping_service
from dataroom.services.files import FileHandle
from dataroom.services.uploader import ChunkedUploader, ProgressCallback

logger = logging.getLogger(__name__)

FileProgressCallback = Callable[[str, UploadProgress], Union[None, Awaitable[None]]]


class DocumentSyncService:
    """Pushes library documents into the data room folders they are mapped to."""

    def __init__(
        self,
        uploader: ChunkedUploader,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        self._uploader = uploader
        self._session_factory = session_factory or async_session_factory

    async def resolve_target(self, library_folder_id: str) -> UploadTarget:
        async with self._session_factory() as db:
            mapping = await mapping_service.require_mapping(db, library_folder_id)
            return UploadTarget(project_id=mapping.project_id, folder_id=mapping.vdr_folder_id)

    async def sync_document(
        self,
        library_folder_id: str,
        file: FileHandle,
        on_progress: ProgressCallback | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> UploadedDocument:
        target = await self.resolve_target(library_folder_id)
        return await self._uploader.upload(file, target, on_progress, cancel_event=cancel_event)

    async def sync_documents(
        self,
        library_folder_id: str,
        files: Iterable[FileHandle],
        on_progress: FileProgressCallback | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> SyncResult:
        """Upload ``files`` one after another; a failed file is recorded and the batch goes on."""
        result = SyncResult()

        for file in files:
            callback = self._bind_progress(file.name, on_progress)
            try:
                await self.sync_document(library_folder_id, file, callback, cancel_event=cancel_event)
            except (DataroomError, SQLAlchemyError) as exc:
                logger.warning("Sync of %s into folder mapping %s failed: %s", file.name, library_folder_id, exc)
                result.documents_failed += 1
                result.errors.append(f"{file.name}: {exc}")
            else:
                result.documents_uploaded += 1

        result.success = result.documents_failed == 0
        return result

    @staticmethod
    def _bind_progress(file_name: str, on_progress: FileProgressCallback | None) -> ProgressCallback | None:
        if on_progress is None:
            return None

        async def _forward(progress: UploadProgress) -> None:
            outcome = on_progress(file_name, progress)
            if inspect.isawaitable(outcome):
                await outcome

        return _forward
