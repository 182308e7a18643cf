"""Test fixtures — an isolated app + in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI without Postgres:

1. Each test gets a fresh in-memory SQLite engine (aiosqlite). StaticPool
   keeps the single connection alive so every session sees the same
   database, and the tables are created from the ORM metadata.
2. Each test gets its own create_app() instance, so the connection
   registry on app.state starts empty and never leaks between tests.
3. Auth is NOT overridden: tests sign real JWTs (user_headers /
   admin_headers) so the same tokens work for HTTP and for /ws.
4. FakeConnection stands in for a WebSocket wherever a test needs to
   observe the frames an HTTP mutation pushes out.
"""

import json
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fastfood.auth.jwt import Identity, Role, create_access_token
from fastfood.db.engine import get_db
from fastfood.db.models import Base
from fastfood.main import create_app

USER_ID = "00000000-0000-0000-0000-000000000001"
ADMIN_ID = "00000000-0000-0000-0000-0000000000ad"


# ─── Fakes ──────────────────────────────────────────────


class FakeConnection:
    """In-memory Connection: records frames, close codes and handler calls."""

    def __init__(self, name: str = "conn", fail_on_send: bool = False):
        self.name = name
        self.fail_on_send = fail_on_send
        self.sent: list[str] = []
        self.open = True
        self.closed_with = None
        self._close_handlers = []
        self._error_handlers = []

    def __repr__(self):
        return f"<FakeConnection {self.name}>"

    @property
    def is_open(self) -> bool:
        return self.open

    async def send(self, text: str) -> None:
        if self.fail_on_send:
            raise ConnectionResetError("peer went away")
        self.sent.append(text)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        self.closed_with = (code, reason)
        self.open = False
        for handler in self._close_handlers:
            handler()

    def on_close(self, handler) -> None:
        self._close_handlers.append(handler)

    def on_error(self, handler) -> None:
        self._error_handlers.append(handler)

    def frames(self) -> list[dict]:
        return [json.loads(s) for s in self.sent]


@pytest.fixture()
def make_connection():
    """Factory for FakeConnection objects."""
    return FakeConnection


@pytest.fixture()
def user_identity() -> Identity:
    return Identity(subject_id=USER_ID, role=Role.USER)


@pytest.fixture()
def admin_identity() -> Identity:
    return Identity(subject_id=ADMIN_ID, role=Role.ADMIN)


# ─── Tokens ─────────────────────────────────────────────


@pytest.fixture()
def user_token() -> str:
    return create_access_token(USER_ID, Role.USER, name="Test Customer")


@pytest.fixture()
def admin_token() -> str:
    return create_access_token(ADMIN_ID, Role.ADMIN, name="Test Admin")


@pytest.fixture()
def user_headers(user_token) -> dict:
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture()
def admin_headers(admin_token) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


# ─── Database ───────────────────────────────────────────


@pytest_asyncio.fixture()
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


# ─── App + client ───────────────────────────────────────


@pytest.fixture()
def app():
    return create_app()


@pytest_asyncio.fixture()
async def client(app, db_session):
    """HTTP client with get_db pointed at the per-test database."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def registry(app):
    return app.state.registry


# ─── Catalog helpers ────────────────────────────────────


@pytest_asyncio.fixture()
async def menu_item(client, admin_headers) -> dict:
    """A burger created through the admin API."""
    r = await client.post(
        "/api/menu",
        json={
            "name": "Le Classic Burger",
            "description": "Steak, cheddar, salade",
            "price": 7.0,
            "category": "burgers",
            "option_types": ["sauceOptions"],
            "removable_ingredients": ["Oignons", "Cornichons"],
        },
        headers=admin_headers,
    )
    assert r.status_code == 201
    return r.json()


def order_body(item_id: str, **overrides) -> dict:
    body = {
        "items": [{"item_id": item_id, "quantity": 2, "item_options": ["Ketchup"]}],
        "total_amount": 14.0,
        "customer_name": "Alice",
        "order_type": "takeaway",
    }
    body.update(overrides)
    return body


@pytest.fixture()
def make_order_body():
    return order_body


def random_email() -> str:
    return f"test-{uuid.uuid4().hex[:8]}@example.com"


@pytest.fixture()
def email() -> str:
    return random_email()
