"""Test fixtures — a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI + Strawberry:

1. Each test gets its own SQLite (aiosqlite) engine with the schema
   created from the ORM models. StaticPool keeps the single in-memory
   connection alive for the whole test.
2. The app's get_db and get_token_service dependencies are overridden,
   so requests use that database and a known signing secret.
3. After the test the engine is disposed — all test data vanishes.

bcrypt rounds are lowered so registering users stays fast.
"""

import os

os.environ.setdefault("UPTASK_BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from uptask.auth.dependencies import get_token_service  # noqa: E402
from uptask.auth.jwt import TokenService  # noqa: E402
from uptask.db.engine import get_db  # noqa: E402
from uptask.db.models import Base  # noqa: E402
from uptask.main import app  # noqa: E402

from helpers import AUTHENTICATE, REGISTER  # noqa: E402

TEST_SECRET = "test-secret-do-not-use"


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a brand-new in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret=TEST_SECRET)


@pytest_asyncio.fixture()
async def client(db_session, tokens):
    """HTTP client with the app's get_db and token service overridden."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: tokens

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def gql(client):
    """Run a GraphQL document, optionally as a signed-in user.

    Returns the decoded response body ({"data": ..., "errors": ...}).
    """

    async def run(query: str, variables: dict | None = None, token: str | None = None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        r = await client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        assert r.status_code == 200, r.text
        return r.json()

    return run


@pytest.fixture
def signup(gql):
    """Register a user and sign in. Returns the token."""

    async def run(email: str, name: str = "Test User", password: str = "password_123"):
        body = await gql(
            REGISTER,
            {"input": {"email": email, "name": name, "password": password}},
        )
        assert "errors" not in body, body
        body = await gql(
            AUTHENTICATE, {"input": {"email": email, "password": password}}
        )
        assert "errors" not in body, body
        return body["data"]["authenticate"]["token"]

    return run

