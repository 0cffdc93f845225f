"""Shared test fixtures with in-memory SQLite."""
import uuid
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.ext.compiler import compiles

from account_monitor.models import Account, AccountStats, Base, User, UserRole
from account_monitor.main import app
from account_monitor.dependencies import get_db
from account_monitor.services.auth_service import create_access_token

# --- SQLite compatibility: compile PostgreSQL types for SQLite ---

@compiles(UUID, "sqlite")
def _compile_uuid_sqlite(type_, compiler, **kw):
    return "VARCHAR(36)"


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@event.listens_for(test_engine.sync_engine, "connect")
def _set_sqlite_pragma(dbapi_connection, _connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
async def setup_db(anyio_backend):
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _override_get_db():
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session():
    async with session_factory() as session:
        yield session


@pytest.fixture
def statement_counter():
    """Collect SQL statements executed on the test engine while active."""
    statements: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(test_engine.sync_engine, "before_cursor_execute", _record)
    yield statements
    event.remove(test_engine.sync_engine, "before_cursor_execute", _record)


async def _create_test_user(
    db: AsyncSession, role: UserRole = UserRole.ADMIN, email: str | None = None,
) -> tuple[User, str]:
    """Create a test user and return (user, access_token)."""
    user = User(
        id=uuid.uuid4(),
        email=email or f"{role.value}_{uuid.uuid4().hex[:8]}@test.com",
        name=f"Test {role.value.title()}",
        role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    token = create_access_token(str(user.id), role.value)
    return user, token


async def _create_account(db: AsyncSession, username: str | None = None, **kwargs) -> Account:
    account = Account(username=username or f"acc_{uuid.uuid4().hex[:8]}", **kwargs)
    db.add(account)
    await db.commit()
    await db.refresh(account)
    return account


async def _add_stats(
    db: AsyncSession,
    account: Account,
    created_at: datetime,
    followed_by: int = 0,
    follows: int = 0,
    media: int = 0,
    er: float = 0.0,
) -> AccountStats:
    stats = AccountStats(
        account_id=account.id,
        created_at=created_at,
        followed_by=followed_by,
        follows=follows,
        media=media,
        er=er,
    )
    db.add(stats)
    await db.commit()
    return stats


@pytest.fixture
async def admin_auth(db_session: AsyncSession) -> tuple[User, dict]:
    """Return (admin_user, auth_headers)."""
    user, token = await _create_test_user(db_session, UserRole.ADMIN)
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def manager_auth(db_session: AsyncSession) -> tuple[User, dict]:
    user, token = await _create_test_user(db_session, UserRole.MANAGER)
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def viewer_auth(db_session: AsyncSession) -> tuple[User, dict]:
    user, token = await _create_test_user(db_session, UserRole.VIEWER)
    return user, {"Authorization": f"Bearer {token}"}
