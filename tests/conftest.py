"""Shared fixtures: in-memory database, app, client and credentials."""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from api.auth import create_access_token
from api.main import create_app
from core.database import Database
from patterns.domain_config import AuthConfig, BooksConfig
from verticals.books.models.db_models import Author, User

from helpers import seed


@pytest.fixture
def config():
    return BooksConfig(auth=AuthConfig(jwt_secret="test-secret"))


@pytest_asyncio.fixture
async def database():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db = Database(engine=engine)
    await db.init_db()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session(database):
    """An uncommitted session, discarded after the test."""
    async with database.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def author_id(database):
    (author_id,) = await seed(database, Author(name="Ursula K. Le Guin"))
    return author_id


@pytest_asyncio.fixture
async def other_author_id(database):
    (author_id,) = await seed(database, Author(name="Octavia E. Butler"))
    return author_id


@pytest_asyncio.fixture
async def user_id(database):
    (user_id,) = await seed(database, User(email="reader@example.com", role="user"))
    return user_id


@pytest_asyncio.fixture
async def admin_id(database):
    (admin_id,) = await seed(database, User(email="admin@example.com", role="admin"))
    return admin_id


@pytest.fixture
def app(config, database):
    return create_app(config, database=database, configure_logging=False)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(config, user_id):
    token = create_access_token(user_id, "user", config.auth)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def book_payload(author_id):
    return {"title": "The Dispossessed", "rating": 5, "price": 18.5, "authorId": author_id}
