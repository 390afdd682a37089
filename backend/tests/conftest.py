"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read once at import time; keep tests off Redis and off disk
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("PRICE_CACHE_BACKEND", "memory")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from costing_api.main import app
from costing_api.models import Base
from costing_api.repositories import IngredientRepository, RecipeRepository
from costing_api.routers.deps import get_price_cache
from costing_api.services import CostCalculator, IngredientService, PriceResolver, RecipeService
from shared.infrastructure.cache import InMemoryPriceCache
from shared.infrastructure.db import get_db


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_USER_ID = "11111111-1111-1111-1111-111111111111"
PRICE_CACHE_TTL = 300


def utc(year: int, month: int, day: int, hour: int = 0) -> datetime:
    """Aware UTC datetime shorthand."""
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced monotonic clock for cache expiry tests."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def price_cache(clock):
    return InMemoryPriceCache(clock=clock)


@pytest.fixture
def ingredient_repository(db_session):
    return IngredientRepository(db_session)


@pytest.fixture
def recipe_repository(db_session):
    return RecipeRepository(db_session)


@pytest.fixture
def price_resolver(ingredient_repository, price_cache):
    return PriceResolver(ingredient_repository, price_cache, ttl_seconds=PRICE_CACHE_TTL)


@pytest.fixture
def ingredient_service(ingredient_repository):
    return IngredientService(ingredient_repository)


@pytest.fixture
def recipe_service(recipe_repository, ingredient_repository, price_resolver):
    calculator = CostCalculator(ingredient_repository, price_resolver)
    return RecipeService(recipe_repository, calculator)


@pytest.fixture
def flour(ingredient_service):
    """Flour with two prices; 1.80 is the latest."""
    return ingredient_service.create_ingredient(
        "Flour",
        "Molino Sur",
        [("1.50", utc(2024, 1, 1)), ("1.80", utc(2024, 6, 1))],
        user_id=TEST_USER_ID,
    )


@pytest.fixture
def sugar(ingredient_service):
    """Sugar at a single price of 2.50."""
    return ingredient_service.create_ingredient(
        "Sugar",
        "Ingenio Norte",
        [("2.50", utc(2024, 3, 1))],
        user_id=TEST_USER_ID,
    )


@pytest.fixture(scope="function")
def client(db_session, price_cache):
    """
    Create a test client with database session and price cache overrides.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_price_cache] = lambda: price_cache

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def user_headers():
    return {"X-User-ID": TEST_USER_ID}
