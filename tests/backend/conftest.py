import os
import uuid

TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ["JWT_SECRET"] = "test-secret"
os.environ.pop("SENDGRID_API_KEY", None)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from taskmanager.config import Settings
from taskmanager.core import db as db_module
from taskmanager.core.security import hash_password
from taskmanager.main import app
from taskmanager.models.task import Task
from taskmanager.models.user import User
from taskmanager.services import sessions


db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest.fixture
def test_settings() -> Settings:
    """Settings used by the app under test: fixed secret, email disabled."""
    return Settings(jwt_secret="test-secret", sendgrid_api_key=None)


@pytest_asyncio.fixture
async def db():
    """Fresh database for tests that use services directly."""
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db, test_settings):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    original = app.state.settings
    app.state.settings = test_settings
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.state.settings = original


@pytest_asyncio.fixture
async def create_user(db, test_settings):
    """
    Factory fixture to create users directly via ORM, each with one session.
    Returns (user, plain password, token).
    """

    async def _create_user(
        name: str = "Mike",
        email: str | None = None,
        password: str = "56what!!",
    ) -> tuple[User, str, str]:
        user = await User.create(
            name=name,
            email=email or f"{uuid.uuid4().hex[:8]}@example.com",
            password_hash=hash_password(password),
        )
        token = await sessions.issue_token(user, test_settings)
        return user, password, token

    return _create_user


@pytest_asyncio.fixture
async def create_task():
    """Factory fixture to create tasks directly for a given owner."""

    async def _create_task(owner: User, **fields) -> Task:
        fields.setdefault("name", "Ronaldo")
        fields.setdefault("description", "Update navbar")
        return await Task.create(owner=owner, **fields)

    return _create_task
