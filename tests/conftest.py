"""Pytest configuration and fixtures for mockapi tests."""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
from jose import jwt
from sqlalchemy.pool import StaticPool

from mockapi.core.config import settings
from mockapi.db.database import build_engine, build_sessionmaker, create_db_and_tables
from mockapi.main import create_app
from mockapi.models.api_key import AccessKey
from mockapi.models.endpoint import Endpoint
from mockapi.models.project import Project

OWNER_ID = "user-1"


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_db_and_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_sessionmaker(db_engine)


@pytest.fixture
def app(db_engine):
    return create_app(engine=db_engine)


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


def make_token(user_id: str = OWNER_ID) -> str:
    return jwt.encode({"sub": user_id}, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
async def test_project(session_factory):
    """Create a project owned by OWNER_ID."""
    async with session_factory() as session:
        project = Project(user_id=OWNER_ID, name="Test Project")
        session.add(project)
        await session.commit()
        await session.refresh(project)
        return project


@pytest.fixture
def add_endpoint(session_factory):
    async def _add_endpoint(project_id, method="GET", path="/api/users", response_body=None,
                            status_code=200, requires_key=False):
        async with session_factory() as session:
            endpoint = Endpoint(
                project_id=project_id,
                method=method,
                path=path,
                response_body=response_body,
                status_code=status_code,
                requires_key=requires_key,
            )
            session.add(endpoint)
            await session.commit()
            await session.refresh(endpoint)
            return endpoint

    return _add_endpoint


@pytest.fixture
def add_key(session_factory):
    async def _add_key(endpoint_id, key_value):
        async with session_factory() as session:
            key = AccessKey(endpoint_id=endpoint_id, key_value=key_value)
            session.add(key)
            await session.commit()
            await session.refresh(key)
            return key

    return _add_key
