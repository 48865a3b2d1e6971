from __future__ import annotations

import httpx
import pytest

from dataroom.db.session import build_engine, build_session_factory, init_models
from dataroom.schemas.upload import UploadTarget
from dataroom.services.client import DataroomClient
from fakes import API_PREFIX, FakeDataroom, RecordingTransport


@pytest.fixture
def target() -> UploadTarget:
    return UploadTarget(project_id="project-1", folder_id="folder-9")


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def fake_dataroom() -> FakeDataroom:
    return FakeDataroom()


@pytest.fixture
async def http_client(fake_dataroom):
    transport = httpx.ASGITransport(app=fake_dataroom.app)
    async with httpx.AsyncClient(transport=transport, base_url="http://vdr.test") as client:
        yield client


@pytest.fixture
def dataroom_client(http_client, fake_dataroom) -> DataroomClient:
    return DataroomClient(fake_dataroom.api_key, base_url=f"http://vdr.test{API_PREFIX}", http_client=http_client)


@pytest.fixture
async def session_factory(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'mappings.db'}")
    await init_models(engine)
    yield build_session_factory(engine)
    await engine.dispose()
