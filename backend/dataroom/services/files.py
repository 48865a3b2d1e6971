from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileHandle(Protocol):
    """Read-only source of upload bytes."""

    @property
    def name(self) -> str: ...

    def total_size(self) -> int: ...

    async def read_range(self, offset: int, length: int) -> bytes: ...


class LocalFile:
    def __init__(self, path: Path | str, *, name: str | None = None) -> None:
        self._path = Path(path)
        self._name = name or self._path.name
        self._size = self._path.stat().st_size

    @property
    def name(self) -> str:
        return self._name

    def total_size(self) -> int:
        return self._size

    async def read_range(self, offset: int, length: int) -> bytes:
        if offset < 0 or length < 0:
            raise ValueError("offset and length must be non-negative")
        path = self._path

        def _read() -> bytes:
            with open(path, "rb") as handle:
                handle.seek(offset, os.SEEK_SET)
                data = handle.read(length)
            if len(data) != length:
                raise OSError(f"Short read from {path}: expected {length} bytes at {offset}, got {len(data)}")
            return data

        return await asyncio.to_thread(_read)


class BytesFile:
    def __init__(self, name: str, data: bytes) -> None:
        self._name = name
        self._data = bytes(data)

    @property
    def name(self) -> str:
        return self._name

    def total_size(self) -> int:
        return len(self._data)

    async def read_range(self, offset: int, length: int) -> bytes:
        if offset < 0 or length < 0 or offset + length > len(self._data):
            raise ValueError(f"Range [{offset}, {offset + length}) outside of {len(self._data)} bytes")
        return self._data[offset : offset + length]
