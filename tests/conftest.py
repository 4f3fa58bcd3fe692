"""Pytest configuration and shared fixtures."""

import os

# Must be set before cookshare modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cookshare.database import Base, get_db
from cookshare.main import app
from cookshare.models import Recipe, User
from cookshare.shopping.repository import ShoppingListRepository
from cookshare.shopping.service import ShoppingListService

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require external services)"
    )
    config.addinivalue_line("markers", "slow: marks tests as slow running")


# =============================================================================
# Recipe Fixtures
# =============================================================================


@pytest.fixture
def pasta_ingredients():
    """Ingredient lines of a two-serving pasta recipe."""
    return [
        {"name": "Spaghetti", "amount": "200", "unit": "g"},
        {"name": "Fresh Tomatoes", "amount": "4", "unit": ""},
        {"name": "Garlic cloves", "amount": "2", "unit": ""},
        {"name": "olive oil", "amount": "2", "unit": "tbsp"},
        {"name": "Salt", "amount": "a pinch", "unit": ""},
        {"name": "   ", "amount": "", "unit": ""},
    ]


@pytest.fixture
def omelette_ingredients():
    """Ingredient lines of a one-serving omelette."""
    return [
        {"name": "Eggs", "amount": "3", "unit": ""},
        {"name": "Unsalted butter", "amount": "1", "unit": "tbsp"},
        {"name": "Black pepper", "amount": "", "unit": ""},
    ]


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_session, pasta_ingredients, omelette_ingredients):
    """
    Users and recipes shared by service and API tests.

    alice and bob have personal lists; carol and dave share family "fam-1".
    """
    users = {
        "alice": User(id="alice", name="Alice", email="alice@example.com"),
        "bob": User(id="bob", name="Bob", email="bob@example.com"),
        "carol": User(id="carol", name="Carol", email="carol@example.com", family_id="fam-1"),
        "dave": User(id="dave", name="Dave", email="dave@example.com", family_id="fam-1"),
    }
    recipes = {
        "pasta": Recipe(
            id="pasta",
            title="Pasta al Pomodoro",
            servings=2,
            ingredients=pasta_ingredients,
            created_by="alice",
        ),
        "omelette": Recipe(
            id="omelette",
            title="Omelette",
            servings=1,
            ingredients=omelette_ingredients,
            created_by="bob",
        ),
    }
    db_session.add_all(users.values())
    await db_session.flush()
    db_session.add_all(recipes.values())
    await db_session.commit()

    return {"users": users, "recipes": recipes}


@pytest_asyncio.fixture
async def service(db_session, seeded):
    return ShoppingListService(ShoppingListRepository(db_session))


# =============================================================================
# API Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def api_client(session_factory, seeded):
    """HTTP client against the app, bound to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

