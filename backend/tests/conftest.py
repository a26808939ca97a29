"""
Pytest configuration and fixtures for backend tests.
"""

import os
import tempfile

# Settings are read at import time: point the app at SQLite and a scratch
# upload directory before anything from rest_api/shared is imported.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="menu-uploads-")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import (
    Base,
    MenuCategory,
    MenuItem,
    ModifierGroup,
    ModifierOption,
)
from shared.config.settings import settings
from shared.infrastructure.db import enable_sqlite_foreign_keys, get_db
from shared.infrastructure.storage import PhotoStorage, get_photo_storage
from shared.security.rate_limit import limiter


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Small cap so oversized uploads are cheap to build in tests
TEST_MAX_FILE_SIZE = 4 * 1024


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    # Create all tables
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage(tmp_path):
    """Photo storage writing into the test's temporary directory."""
    return PhotoStorage(tmp_path / "uploads", "http://testserver", TEST_MAX_FILE_SIZE)


@pytest.fixture(scope="function")
def client(db_session, storage):
    """
    Create a test client with database session and storage overrides.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_photo_storage] = lambda: storage
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def restaurant_id():
    """Restaurant used when no X-Restaurant-ID header is sent."""
    return settings.default_restaurant_id


@pytest.fixture
def other_restaurant_id():
    """A second tenant, for isolation checks."""
    return "restaurant-b"


@pytest.fixture
def seed_category(db_session, restaurant_id):
    """Create a test category - shared fixture for all tests."""
    category = MenuCategory(
        restaurant_id=restaurant_id,
        name="Noodles",
        description="Soups and stir-fries",
        display_order=1,
    )
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def seed_item(db_session, seed_category, restaurant_id):
    """Create a test menu item in seed_category."""
    item = MenuItem(
        restaurant_id=restaurant_id,
        category_id=seed_category.id,
        name="Beef Pho",
        description="Slow-simmered broth",
        price=Decimal("65000"),
        prep_time_minutes=15,
    )
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item


@pytest.fixture
def seed_modifier_group(db_session, restaurant_id):
    """Create a single-choice "Size" group with two options."""
    group = ModifierGroup(
        restaurant_id=restaurant_id,
        name="Size",
        is_required=True,
        min_selections=1,
        max_selections=1,
        selection_type="single",
        display_order=1,
    )
    group.options = [
        ModifierOption(name="Regular", price_adjustment=Decimal("0"), is_default=True, display_order=0),
        ModifierOption(name="Large", price_adjustment=Decimal("10000"), display_order=1),
    ]
    db_session.add(group)
    db_session.commit()
    db_session.refresh(group)
    return group


def make_item(db_session, category, name, *, price="50000", restaurant_id=None, **fields):
    """Add one more menu item to ``category`` and return it."""
    item = MenuItem(
        restaurant_id=restaurant_id or category.restaurant_id,
        category_id=category.id,
        name=name,
        price=Decimal(price),
        **fields,
    )
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item


@pytest.fixture
def item_factory(db_session, seed_category):
    """Callable building extra items: item_factory("Spring Rolls", price="45000")."""
    def factory(name, *, category=None, **fields):
        return make_item(db_session, category or seed_category, name, **fields)
    return factory
