"""
Test configuration and fixtures
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from videoshare.core.config import Settings
from videoshare.main import create_app
from videoshare.models import User
from videoshare.store import MemoryStore

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"
TEST_PASSWORD = "testpassword"


class TickingClock:
    """Deterministic clock that advances one second per call"""

    def __init__(self):
        self.current = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def test_settings(upload_dir: Path) -> Settings:
    return Settings(
        _env_file=None,
        ENVIRONMENT="testing",
        UPLOADS_DIR=str(upload_dir),
        ADMIN_USERNAME=ADMIN_USERNAME,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        LOG_TO_FILE=False,
        LOG_LEVEL="WARNING"
    )


@pytest.fixture
def store() -> MemoryStore:
    """Fresh store seeded with the admin account and default categories"""
    store = MemoryStore(clock=TickingClock())
    store.seed(ADMIN_USERNAME, ADMIN_PASSWORD)
    return store


@pytest.fixture
def app(test_settings: Settings, store: MemoryStore):
    return create_app(settings=test_settings, store=store)


@pytest.fixture
def test_user(store: MemoryStore) -> User:
    return store.create_user(username="testuser", password=TEST_PASSWORD)


@pytest.fixture
def other_user(store: MemoryStore) -> User:
    return store.create_user(username="otheruser", password=TEST_PASSWORD)


@pytest.fixture
def admin_user(store: MemoryStore) -> User:
    return store.get_user_by_username(ADMIN_USERNAME)


@pytest.fixture
async def make_client(app):
    """Factory for clients with their own cookie jar, optionally logged in"""
    clients = []

    async def factory(username: str = None, password: str = TEST_PASSWORD) -> AsyncClient:
        ac = AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")
        clients.append(ac)
        if username:
            response = await ac.post("/api/auth/login", json={"username": username, "password": password})
            assert response.status_code == 200, response.text
        return ac

    yield factory

    for ac in clients:
        await ac.aclose()


@pytest.fixture
async def client(make_client) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous client"""
    yield await make_client()


@pytest.fixture
async def user_client(make_client, test_user: User) -> AsyncClient:
    return await make_client(test_user.username)


@pytest.fixture
async def other_user_client(make_client, other_user: User) -> AsyncClient:
    return await make_client(other_user.username)


@pytest.fixture
async def admin_client(make_client, admin_user: User) -> AsyncClient:
    return await make_client(admin_user.username, ADMIN_PASSWORD)


@pytest.fixture
def stored_video(store: MemoryStore, upload_dir: Path, test_user: User):
    """An uploaded video owned by test_user backed by a 1000-byte file"""
    upload_dir.mkdir(parents=True, exist_ok=True)
    file_path = upload_dir / "stored.mp4"
    file_path.write_bytes(bytes(range(256)) * 3 + bytes(range(232)))
    return store.create_video(
        title="Stored clip",
        description="A clip on disk",
        file_name="clip.mp4",
        file_path=str(file_path),
        category="Travel",
        uploader_id=test_user.id
    )


@pytest.fixture
def embedded_video(store: MemoryStore, test_user: User):
    return store.create_video(
        title="Hosted clip",
        embed_url="https://www.youtube.com/embed/abc123",
        is_embedded=True,
        category="Music",
        uploader_id=test_user.id
    )
