"""Test fixtures — fresh in-memory SQLite database per test.

Learn: core components are tested against the in-memory lookups below;
HTTP tests run the real auth pipeline with only get_db overridden.

Environment overrides are applied before pointage is imported so the
settings singleton (and the module-level engine) pick them up.
"""

import os

os.environ["POINTAGE_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["POINTAGE_JWT_SECRET"] = "test-secret"
os.environ["POINTAGE_BCRYPT_ROUNDS"] = "4"
os.environ["POINTAGE_ENVIRONMENT"] = "development"

from dataclasses import dataclass, field  # noqa: E402
from typing import Any, Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from pointage.auth.jwt import JWTService  # noqa: E402
from pointage.auth.password import hash_password  # noqa: E402
from pointage.db.engine import get_db  # noqa: E402
from pointage.db.models import Base, User  # noqa: E402
from pointage.main import app  # noqa: E402

SECRET = "test-secret"


# ─── In-memory lookups for unit tests ───────────────────


@dataclass
class InMemoryUsers:
    users: dict[int, User] = field(default_factory=dict)
    calls: int = 0

    def add(self, user: User) -> User:
        self.users[user.id] = user
        return user

    async def find_by_id(self, user_id: int) -> Optional[User]:
        self.calls += 1
        return self.users.get(user_id)

    async def find_by_login_or_email(self, login: str) -> Optional[User]:
        self.calls += 1
        for user in self.users.values():
            if user.login == login or (user.email and user.email.lower() == login.lower()):
                return user
        return None


@dataclass
class InMemoryEntities:
    rows: dict[tuple[str, int], Any] = field(default_factory=dict)
    calls: list[tuple[str, int]] = field(default_factory=list)

    async def find_by_id(self, resource_type: str, resource_id: int) -> Optional[Any]:
        self.calls.append((resource_type, resource_id))
        return self.rows.get((resource_type, resource_id))


def make_user(user_id: int = 1, login: str = "alice", email: Optional[str] = "Alice@Example.com",
              password: str = "s3cret-pass") -> User:
    return User(id=user_id, login=login, email=email, password=hash_password(password, rounds=4))


@pytest.fixture()
def token_service() -> JWTService:
    return JWTService(secret=SECRET, expires_in=3600)


@pytest.fixture()
def user_factory():
    return make_user


@pytest.fixture()
def users() -> InMemoryUsers:
    store = InMemoryUsers()
    store.add(make_user())
    return store


@pytest.fixture()
def entities() -> InMemoryEntities:
    return InMemoryEntities()


# ─── Database + HTTP client ─────────────────────────────


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()
    await engine.dispose()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client running the real auth pipeline against the test database."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def registered_user(db_session) -> User:
    user = User(
        login="bob",
        email="Bob@Example.com",
        password=hash_password("bob-password"),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture()
async def auth_headers(client, registered_user) -> dict[str, str]:
    """Log in as `bob` and return a Bearer header; the cookie jar is cleared."""
    r = await client.post(
        "/api/v1/users/login",
        json={"login": "bob", "password": "bob-password"},
    )
    assert r.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {r.json()['token']}"}
