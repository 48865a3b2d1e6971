from __future__ import annotations

from dataroom.schemas.upload import ChunkDescriptor, ChunkPlan

CHUNK_SIZE = 20 * 1024 * 1024
SINGLE_UPLOAD_THRESHOLD = 20 * 1024 * 1024


def plan_chunks(
    total_size: int,
    chunk_size: int = CHUNK_SIZE,
    single_upload_threshold: int = SINGLE_UPLOAD_THRESHOLD,
) -> ChunkPlan:
    """Split ``total_size`` bytes into the numbered byte ranges the upload endpoint expects.

    Files at or below the single-upload threshold (including empty files) travel as
    one chunk numbered 1. Larger files are cut into ``chunk_size`` pieces from offset
    0, the last piece holding whatever remains.
    """
    if total_size < 0:
        raise ValueError("total_size must be non-negative")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if single_upload_threshold < 0:
        raise ValueError("single_upload_threshold must be non-negative")

    if total_size <= single_upload_threshold:
        chunks = (ChunkDescriptor(number=1, offset=0, length=total_size),)
    else:
        chunks = tuple(
            ChunkDescriptor(number=number, offset=offset, length=min(chunk_size, total_size - offset))
            for number, offset in enumerate(range(0, total_size, chunk_size), start=1)
        )
    return ChunkPlan(total_size=total_size, chunk_size=chunk_size, chunks=chunks)
