from __future__ import annotations

import asyncio
import inspect
import logging
import uuid
from typing import Awaitable, Callable, Union

import httpx
from pydantic import ValidationError

from dataroom.core.config import settings
from dataroom.core.errors import (
    CancellationError,
    DataroomAPIError,
    ServiceRejection,
    TransportError,
    UploadError,
)
from dataroom.schemas.upload import (
    ChunkUploadRequest,
    UploadedDocument,
    UploadProgress,
    UploadStatus,
    UploadTarget,
)
from dataroom.services.client import ChunkTransport
from dataroom.services.files import FileHandle
from dataroom.services.planner import plan_chunks

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[UploadProgress], Union[None, Awaitable[None]]]

NETWORK_ERRORS = (httpx.RequestError, ConnectionError, TimeoutError)


async def _publish(on_progress: ProgressCallback | None, progress: UploadProgress) -> None:
    if on_progress is None:
        return
    result = on_progress(progress)
    if inspect.isawaitable(result):
        await result


class ChunkedUploader:
    """Uploads one file at a time into the data room, chunk by chunk.

    Each :meth:`upload` call mints its own document id, sends the planned chunks
    strictly in order and stops at the first failure. There is no way to resume a
    failed upload: callers retry by calling :meth:`upload` again, which starts over
    from chunk 1 under a fresh document id.
    """

    def __init__(
        self,
        transport: ChunkTransport,
        *,
        chunk_size: int | None = None,
        single_upload_threshold: int | None = None,
    ) -> None:
        self._transport = transport
        self._chunk_size = chunk_size if chunk_size is not None else settings.chunk_size
        self._single_upload_threshold = (
            single_upload_threshold if single_upload_threshold is not None else settings.single_upload_threshold
        )

    async def upload(
        self,
        file: FileHandle,
        target: UploadTarget,
        on_progress: ProgressCallback | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> UploadedDocument:
        document_id = str(uuid.uuid4())
        total_size = file.total_size()
        plan = plan_chunks(total_size, self._chunk_size, self._single_upload_threshold)
        last_number = len(plan)

        progress = UploadProgress(
            document_id=document_id,
            file_name=file.name,
            total_size=total_size,
            chunks_total=last_number,
        )
        await _publish(on_progress, progress)
        logger.info(
            "Uploading %s (%s bytes) to folder %s as document %s in %s chunk(s)",
            file.name,
            total_size,
            target.folder_id,
            document_id,
            last_number,
        )

        for chunk in plan:
            if cancel_event is not None and cancel_event.is_set():
                message = f"Upload cancelled before chunk {chunk.number} of {last_number}"
                progress = await self._fail(progress, on_progress, message)
                raise CancellationError(message, chunk_number=chunk.number, progress=progress)

            progress = progress.model_copy(update={"status": UploadStatus.UPLOADING})

            try:
                data = await file.read_range(chunk.offset, chunk.length)
            except (OSError, ValueError) as exc:
                message = f"Could not read chunk {chunk.number} of {last_number}: {exc}"
                progress = await self._fail(progress, on_progress, message)
                raise UploadError(message, chunk_number=chunk.number, cause=exc, progress=progress) from exc

            request = ChunkUploadRequest(
                project_id=target.project_id,
                folder_id=target.folder_id,
                document_id=document_id,
                file_name=file.name,
                chunk_number=chunk.number,
                total_size=total_size,
                data=data,
            )
            logger.debug("Sending chunk %s/%s of document %s (%s bytes)", chunk.number, last_number, document_id, chunk.length)

            try:
                response = await self._transport.upload_chunk(request)
            except NETWORK_ERRORS as exc:
                message = f"Chunk {chunk.number} of {last_number} failed: {str(exc) or type(exc).__name__}"
                progress = await self._fail(progress, on_progress, message)
                raise TransportError(message, chunk_number=chunk.number, cause=exc, progress=progress) from exc
            except DataroomAPIError as exc:
                message = f"Chunk {chunk.number} of {last_number} rejected: {exc.message}"
                progress = await self._fail(progress, on_progress, message)
                raise ServiceRejection(message, chunk_number=chunk.number, cause=exc, progress=progress) from exc

            if chunk.number < last_number:
                progress = progress.model_copy(
                    update={
                        "uploaded_size": progress.uploaded_size + chunk.length,
                        "chunks_uploaded": progress.chunks_uploaded + 1,
                    }
                )
                await _publish(on_progress, progress)
                continue

            try:
                document = UploadedDocument.model_validate(response or {})
            except ValidationError as exc:
                message = f"Chunk {chunk.number} of {last_number} returned an invalid document record"
                progress = await self._fail(progress, on_progress, message)
                raise ServiceRejection(message, chunk_number=chunk.number, cause=exc, progress=progress) from exc

            progress = progress.model_copy(
                update={
                    "uploaded_size": progress.uploaded_size + chunk.length,
                    "chunks_uploaded": progress.chunks_uploaded + 1,
                    "status": UploadStatus.COMPLETED,
                }
            )
            await _publish(on_progress, progress)
            logger.info("Uploaded %s as data room document %s", file.name, document.id)
            return document

        raise UploadError("Chunk plan has no final chunk", chunk_number=last_number, progress=progress)

    @staticmethod
    async def _fail(
        progress: UploadProgress,
        on_progress: ProgressCallback | None,
        message: str,
    ) -> UploadProgress:
        failed = progress.model_copy(update={"status": UploadStatus.FAILED, "error": message})
        logger.error("Upload of %s (document %s) failed: %s", progress.file_name, progress.document_id, message)
        await _publish(on_progress, failed)
        return failed
