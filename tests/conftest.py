"""
Test infrastructure for the Blog CMS API.

Strategy
--------
- SQLite in-memory via aiosqlite keeps the suite self-contained.
- StaticPool forces every async task to share the same in-memory database
  connection, which is required because SQLite in-memory databases are
  connection-scoped; a new connection would see an empty database.
- The app is built with ``create_app(database=test_db)`` so every
  request-time session comes from the test ``Database``; the lifespan is
  never run by ASGITransport, so nothing else is opened.
- All tables are created fresh before each test and dropped after, giving
  each test a clean isolated state without needing transactions or truncation.
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.database import Database
from app.main import create_app

# ---------------------------------------------------------------------------
# Test database — SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_db = Database(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

test_settings = Settings(DATABASE_URL=TEST_DATABASE_URL, ASSETS_DIR="/nonexistent-assets")

app = create_app(test_settings, database=test_db)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    await test_db.create_all()
    yield
    await test_db.drop_all()


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """
    Yield a live AsyncSession for tests that call the service layer
    directly.
    """
    async with test_db.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def database() -> Database:
    """The test ``Database``, for tests that build their own app."""
    return test_db
