"""
Pytest fixtures and configuration
"""
import os
import sys
from typing import AsyncGenerator

# Settings are read at import time: the app refuses to start without a signing secret.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Add backend to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from blog.config import Settings
from blog.main import app
from blog.database import Base, get_db
from blog.services.users import CredentialService
from blog.services.posts import PostService


@pytest_asyncio.fixture(scope="function")
async def test_db(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """Create test database and session"""
    db_file = tmp_path / "test.db"
    test_db_url = f"sqlite+aiosqlite:///{db_file.as_posix()}"

    engine = create_async_engine(test_db_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(test_db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with test database"""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def auth_client(client: AsyncClient, test_user_data: dict) -> AsyncGenerator[tuple[AsyncClient, dict], None]:
    """Create authenticated test client"""
    response = await client.post("/api/v1/user/signup", json=test_user_data)
    assert response.status_code == 201

    response = await client.post("/api/v1/user/login", json={
        "username": test_user_data["username"],
        "password": test_user_data["password"],
    })
    assert response.status_code == 200

    auth_data = response.json()
    client.headers["Authorization"] = f"Bearer {auth_data['token']}"

    yield client, auth_data


@pytest.fixture
def config() -> Settings:
    """Settings the app under test was created with"""
    return app.state.settings


@pytest.fixture
def users(test_db: AsyncSession, config: Settings) -> CredentialService:
    return CredentialService(test_db, config)


@pytest.fixture
def posts(test_db: AsyncSession) -> PostService:
    return PostService(test_db)


@pytest_asyncio.fixture
async def author_id(users: CredentialService, test_user_data: dict) -> str:
    """Id of a freshly created post author"""
    user = await users.create_user(**test_user_data)
    return user.id


@pytest.fixture
def test_user_data() -> dict:
    """Test user data"""
    return {
        "username": "testuser",
        "email": "test@example.com",
        "password": "testpass123"
    }
