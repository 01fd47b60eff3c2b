"""
Test configuration and fixtures for Flare Food.

Implements the transaction rollback pattern:
- Session-scoped database engine
- Function-scoped transactional session with automatic rollback
- TestClient with database dependency override
"""

import os
from typing import Generator


def get_test_database_url() -> str:
    """
    Get the test database URL.

    Priority:
    1. TEST_DATABASE_URL environment variable
    2. In-memory SQLite

    Each test runs in a transaction that is rolled back afterwards, so no
    test data persists and tests are fully isolated.
    """
    return os.environ.get("TEST_DATABASE_URL", "sqlite://")


# Settings are read at import time, so point the app at the test database first
os.environ["DATABASE_URL"] = get_test_database_url()

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from flarefood.database import Base, get_db  # noqa: E402
from flarefood.main import app  # noqa: E402


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def test_engine():
    """
    Create test database engine once per session.

    SQLite in-memory databases live on a single connection, so the pool is
    static and shared across the TestClient's worker threads.
    """
    database_url = get_test_database_url()

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url)

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(test_engine) -> Generator[Session, None, None]:
    """
    Provide a transactional database session that rolls back after each test.

    This pattern ensures:
    - Complete test isolation (tests can't affect each other)
    - No cleanup queries needed
    - Fast execution (just rollback, no actual deletion)
    """
    # Start a connection and transaction
    connection = test_engine.connect()
    transaction = connection.begin()

    # Create a session bound to this connection
    TestingSessionLocal = sessionmaker(bind=connection)
    session = TestingSessionLocal()

    # Handle nested transactions (for savepoints within tests)
    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(session, transaction):
        if transaction.nested and not transaction._parent.nested:
            session.begin_nested()

    yield session

    # Cleanup: rollback and close
    session.close()
    transaction.rollback()
    connection.close()


# =============================================================================
# TestClient Fixtures
# =============================================================================


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    TestClient with database dependency override.

    The database session is injected into the app's get_db dependency.
    """

    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close - managed by db fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# In-memory data source
# =============================================================================


@pytest.fixture
def memory_source():
    """Empty in-memory data source; tests fill meals, symptoms and foods."""
    from tests.fixtures.mocks import InMemoryDataSource

    return InMemoryDataSource()


# =============================================================================
# pytest markers
# =============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m not slow')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
