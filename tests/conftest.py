import os
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-key-not-for-production")
os.environ.setdefault("LOAD_DATA_ON_STARTUP", "false")
os.environ.setdefault("CREATE_SCHEMA_ON_STARTUP", "false")

from app.categorization.rules import Category  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")


@pytest.fixture
async def test_engine():
    """One fresh database per test.

    In-memory SQLite needs a single shared connection (StaticPool) so every
    session sees the same tables.
    """
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    else:
        engine = create_async_engine(TEST_DATABASE_URL)
    yield engine
    await engine.dispose()


@pytest.fixture
async def setup_database(test_engine):
    """Create tables for tests that need the database, and drop them after.

    This fixture is intentionally NOT autouse so pure unit tests (e.g. the
    categorizer) can run without a database.
    """
    from app.models.base import BaseModel

    async with test_engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)


@pytest.fixture
async def db_session(test_engine, setup_database):
    """Provide test database session."""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_customer(db_session: AsyncSession):
    """Factory creating a committed customer."""
    from app.models.customer import Customer
    from app.repositories.customer import CustomerRepository

    async def _make(name: str, email: str) -> Customer:
        return await CustomerRepository(db_session).create(Customer(name=name, email=email))

    return _make


@pytest.fixture
def make_transaction(db_session: AsyncSession):
    """Factory creating a committed transaction for a customer."""
    from app.models.transaction import Transaction
    from app.repositories.transaction import TransactionRepository

    async def _make(
        customer,
        amount: str,
        category: Category,
        timestamp: datetime = datetime(2024, 1, 15, 12, 0, 0),
        merchant: str = "Test Merchant",
    ) -> Transaction:
        return await TransactionRepository(db_session).create(
            Transaction(
                customer_id=customer.id,
                external_id=f"EXT-{merchant}-{amount}",
                timestamp=timestamp,
                description="test transaction",
                merchant=merchant,
                merchant_category_code="0000",
                amount=Decimal(amount),
                category=category,
            )
        )

    return _make


@pytest.fixture
async def test_customer(make_customer):
    return await make_customer("Alice Johnson", "alice@example.com")


@pytest.fixture
async def other_customer(make_customer):
    return await make_customer("Bob Smith", "bob@example.com")


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory creating a committed API user."""
    from app.core.security import hash_password
    from app.models.user import Role, User
    from app.repositories.user import UserRepository

    async def _make(username: str, role: Role = Role.USER, customer_id=None) -> User:
        return await UserRepository(db_session).create(
            User(
                username=username,
                password_hash=hash_password("password123"),
                role=role,
                customer_id=customer_id,
            )
        )

    return _make


@pytest.fixture
async def test_user(make_user, test_customer):
    """Regular user linked to test_customer."""
    return await make_user("alice", customer_id=test_customer.id)


@pytest.fixture
async def admin_user(make_user):
    from app.models.user import Role

    return await make_user("admin", role=Role.ADMIN)


def _bearer(user) -> dict:
    from app.core.security import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user_id=user.id)}"}


@pytest.fixture
async def auth_headers(test_user):
    """Authentication headers for the regular user."""
    return _bearer(test_user)


@pytest.fixture
async def admin_headers(admin_user):
    """Authentication headers for the admin user."""
    return _bearer(admin_user)


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
