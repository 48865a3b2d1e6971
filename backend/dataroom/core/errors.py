from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - for type checkers only
    from dataroom.schemas.upload import UploadProgress


class DataroomError(Exception):
    """Base class for every error raised by the dataroom client."""


class DataroomAPIError(DataroomError):
    """The data room answered a request with a non-success status."""

    def __init__(self, message: str, status_code: int, error_code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code


class UploadError(DataroomError):
    """Terminal failure of one upload call.

    ``chunk_number`` is the 1-based chunk that failed, ``cause`` the underlying
    exception and ``progress`` the last snapshot published before the call gave up.
    """

    def __init__(
        self,
        message: str,
        *,
        chunk_number: int,
        cause: BaseException | None = None,
        progress: UploadProgress | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.chunk_number = chunk_number
        self.cause = cause
        self.progress = progress


class TransportError(UploadError):
    """Connection, timeout or DNS failure while sending a chunk."""


class ServiceRejection(UploadError):
    """The service refused a chunk or returned an unusable document record."""

    @property
    def status_code(self) -> int | None:
        return getattr(self.cause, "status_code", None)

    @property
    def error_code(self) -> str | None:
        return getattr(self.cause, "error_code", None)


class CancellationError(UploadError):
    """The caller asked to stop before the next chunk started."""


class MappingNotFoundError(DataroomError):
    def __init__(self, library_folder_id: str) -> None:
        super().__init__(f"No data room mapping found for folder: {library_folder_id}")
        self.library_folder_id = library_folder_id
