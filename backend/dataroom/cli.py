from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from dataroom.core.config import settings
from dataroom.core.errors import UploadError
from dataroom.core.logging_config import configure_logging
from dataroom.schemas.upload import UploadedDocument, UploadProgress, UploadTarget
from dataroom.services.client import DataroomClient
from dataroom.services.files import LocalFile
from dataroom.services.uploader import ChunkedUploader

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dataroom-upload", description="Upload a file into a data room folder")
    parser.add_argument("path", help="file to upload")
    parser.add_argument("--project", required=True, help="data room project id")
    parser.add_argument("--folder", required=True, help="destination folder id")
    parser.add_argument("--api-key", default=None, help="defaults to VDR_API_KEY")
    parser.add_argument("--base-url", default=None, help="defaults to VDR_BASE_URL")
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def _report(progress: UploadProgress) -> None:
    print(
        f"{progress.file_name}: {progress.status.value} "
        f"{progress.chunks_uploaded}/{progress.chunks_total} chunks, "
        f"{progress.uploaded_size}/{progress.total_size} bytes",
        file=sys.stderr,
    )


async def _run(args: argparse.Namespace) -> UploadedDocument:
    file = LocalFile(args.path)
    target = UploadTarget(project_id=args.project, folder_id=args.folder)
    async with DataroomClient(args.api_key, base_url=args.base_url) as client:
        uploader = ChunkedUploader(client)
        return await uploader.upload(file, target, _report)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        configure_logging(args.log_level)
        document = asyncio.run(_run(args))
    except UploadError as exc:
        logger.error("Upload failed at chunk %s: %s", exc.chunk_number, exc)
        return 1
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 2
    print(document.model_dump_json(by_alias=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
