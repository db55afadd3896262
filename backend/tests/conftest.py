"""
Shared pytest fixtures.

Route tests run the ASGI app in-process through httpx. The store is an
in-memory SQLite database built from the ORM metadata; the Deepgram and
Supabase Storage clients are replaced with fakes via dependency overrides.
"""

import os
from collections.abc import AsyncGenerator
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

# Override settings BEFORE importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DEEPGRAM_API_KEY", "test-deepgram-key")
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-supabase-key")
os.environ.setdefault("SUPABASE_BUCKET", "recordings")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_TO_FILE", "false")

from audioscribe.api.deps import get_storage_service, get_transcription_service  # noqa: E402
from audioscribe.core.config import Settings, get_settings  # noqa: E402
from audioscribe.core.exceptions import StorageError, TranscriptionError  # noqa: E402
from audioscribe.db.init_db import create_tables  # noqa: E402
from audioscribe.db.session import create_session_factory  # noqa: E402


class FakeTranscriptionService:
    """Stands in for the Deepgram client, recording every call"""

    def __init__(self, transcript: str = "hello world", error: Optional[str] = None):
        self.transcript = transcript
        self.error = error
        self.calls = []

    async def transcribe(self, audio: bytes, mimetype: Optional[str] = None) -> str:
        self.calls.append((audio, mimetype))
        if self.error:
            raise TranscriptionError(self.error)
        return self.transcript


class FakeStorageService:
    """Stands in for the Supabase Storage client, recording every call"""

    def __init__(self, error: Optional[str] = None):
        self.error = error
        self.calls = []

    async def store(self, data: bytes, original_filename: str, mimetype: Optional[str] = None) -> str:
        self.calls.append((data, original_filename, mimetype))
        if self.error:
            raise StorageError(self.error)
        return f"https://project.supabase.co/storage/v1/object/public/recordings/audio/1_{original_filename}"


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Settings built from the test environment."""
    return get_settings()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine():
    """In-memory SQLite engine shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest_asyncio.fixture
async def db_session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with test_session_factory() as session:
        yield session


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def fake_transcriber() -> FakeTranscriptionService:
    return FakeTranscriptionService()


@pytest.fixture
def fake_storage() -> FakeStorageService:
    return FakeStorageService()


@pytest_asyncio.fixture
async def app(test_settings, test_session_factory, fake_transcriber, fake_storage):
    """Application wired to the test store and fake providers.

    The lifespan is not run, so the state it would build is set here.
    """
    from audioscribe.main import create_app

    app_instance = create_app(test_settings)
    app_instance.state.session_factory = test_session_factory
    app_instance.dependency_overrides[get_transcription_service] = lambda: fake_transcriber
    app_instance.dependency_overrides[get_storage_service] = lambda: fake_storage

    yield app_instance

    app_instance.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def test_user(async_client: AsyncClient) -> dict:
    """Sign up a user through the API."""
    payload = {"email": "ada@example.com", "password": "analytical-engine", "name": "Ada"}
    response = await async_client.post("/signup", json=payload)
    assert response.status_code == 200
    return {**payload, "id": response.json()["user"]["id"]}
