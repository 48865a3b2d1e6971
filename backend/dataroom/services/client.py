from __future__ import annotations

import logging
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from dataroom.core.config import settings
from dataroom.core.errors import DataroomAPIError
from dataroom.schemas.upload import ChunkUploadRequest

logger = logging.getLogger(__name__)


def _header_name(name: str) -> str:
    # non-ASCII names cannot travel in a header verbatim
    if name.isascii():
        return name
    return quote(name, safe="")


class ChunkTransport(Protocol):
    """Sends one chunk of a document and returns the decoded response body.

    Implementations raise :class:`DataroomAPIError` when the service rejects the
    chunk and let ``httpx.RequestError`` escape for network failures.
    """

    async def upload_chunk(self, request: ChunkUploadRequest) -> dict[str, Any] | None: ...


class DataroomClient:
    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        api_key = api_key or settings.vdr_api_key
        if not api_key:
            raise ValueError("A data room API key is required")
        self._api_key = api_key
        self._base_url = (base_url or settings.vdr_base_url).rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.request_timeout_seconds
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> DataroomClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def _upload_url(self, project_id: str) -> str:
        return f"{self._base_url}/projects/{quote(project_id, safe='')}/documents/upload"

    async def upload_chunk(self, request: ChunkUploadRequest) -> dict[str, Any] | None:
        headers = {
            "Authorization": self._api_key,
            "Content-Type": "application/octet-stream",
            "Folder-Id": request.folder_id,
            "Document-Name": _header_name(request.file_name),
            "Document-Id": request.document_id,
            "Chunk-Number": str(request.chunk_number),
            "Document-Size": str(request.total_size),
        }
        response = await self._http.post(
            self._upload_url(request.project_id),
            content=request.data,
            headers=headers,
        )
        if response.is_error:
            raise self._build_error(response, "Upload failed")

        logger.debug(
            "Chunk %s of document %s accepted with status %s",
            request.chunk_number,
            request.document_id,
            response.status_code,
        )
        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError as exc:
            raise DataroomAPIError("Response body is not valid JSON", response.status_code) from exc
        if not isinstance(body, dict):
            raise DataroomAPIError("Response body is not a JSON object", response.status_code)
        return body

    @staticmethod
    def _build_error(response: httpx.Response, fallback: str) -> DataroomAPIError:
        message: str | None = None
        code: str | None = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message") or None
            raw_code = body.get("code")
            code = str(raw_code) if raw_code is not None else None
        if not message:
            message = response.reason_phrase or f"{fallback}: {response.status_code}"
        return DataroomAPIError(message, response.status_code, code)
