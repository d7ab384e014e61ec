"""Общие фикстуры тестов.

Приложение собирается фабрикой с временной SQLite-базой и временным
каталогом загрузок; сервисные тесты работают с той же схемой напрямую.
"""
from __future__ import annotations

from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from paper_review.core.config import Settings
from paper_review.core.db import create_engine, create_sessionmaker, init_models
from paper_review.core.errors import UpstreamFailure
from paper_review.main import create_app
from paper_review.storage.base import BlobStore, StoredBlob, UploadedFile
from paper_review.storage.local import LocalBlobStore

ADMIN_PASSWORD = "admin-secret"
JWT_SECRET = "test-jwt-secret"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=JWT_SECRET,
        admin_password=ADMIN_PASSWORD,
        storage_backend="local",
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def session(settings):
    engine = create_engine(settings)
    await init_models(engine)
    sessionmaker = create_sessionmaker(engine)
    async with sessionmaker() as s:
        yield s
    await engine.dispose()


@pytest.fixture
def blob_store(settings) -> LocalBlobStore:
    return LocalBlobStore(settings.upload_dir)


class RecordingBlobStore(BlobStore):
    """Хранилище в памяти, умеющее падать на заданных файлах"""

    def __init__(self, fail_put: Optional[set] = None, fail_delete: Optional[set] = None):
        self.blobs: Dict[str, bytes] = {}
        self.fail_put = fail_put or set()
        self.fail_delete = fail_delete or set()
        self.deleted: List[str] = []
        self._counter = 0

    async def put(self, file: UploadedFile) -> StoredBlob:
        if file.filename in self.fail_put:
            raise UpstreamFailure("Error storing file")
        locator = f"mem/{self._counter}-{file.filename}"
        self._counter += 1
        self.blobs[locator] = file.content
        return StoredBlob(locator=locator, remote_id=locator)

    async def delete(self, locator: str, remote_id: Optional[str] = None) -> None:
        if any(locator.endswith(name) for name in self.fail_delete):
            raise UpstreamFailure("Error deleting file")
        self.blobs.pop(locator, None)
        self.deleted.append(locator)


@pytest.fixture
def memory_store() -> RecordingBlobStore:
    return RecordingBlobStore()


@pytest.fixture
def store_factory():
    return RecordingBlobStore


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_token(client) -> str:
    resp = client.post("/admin/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


@pytest.fixture
def create_moderator(client, admin_token):
    """Создаёт модератора и возвращает (id, token)"""

    def _create(username: str, password: str = "pass-123"):
        resp = client.post(
            "/moderators",
            json={"username": username, "password": password},
            headers=auth(admin_token),
        )
        assert resp.status_code == 200, resp.text

        listed = client.get("/moderators", headers=auth(admin_token)).json()
        moderator_id = next(m["id"] for m in listed if m["username"] == username)

        login = client.post("/moderators/login", json={"username": username, "password": password})
        assert login.status_code == 200, login.text
        return moderator_id, login.json()["token"]

    return _create
