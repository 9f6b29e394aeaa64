"""Pytest configuration and fixtures."""

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import sessionmaker

from picturebook.database import Base, build_engine, init_db
from picturebook.models.user import User
from picturebook.services import new_gallery_service, new_user_service

TEST_PEPPER = "test-pepper"
TEST_HMAC_KEY = "test-hmac-key"

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/picturebook", "/picturebook_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    init_db(bind=engine)
    yield


@pytest.fixture(scope="function")
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite only enforces foreign keys when asked to, per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def enforcing_db(db):
    """Session on a database that enforces foreign keys.

    Server databases always do, so the regular test session is reused. SQLite
    gets a private in-memory database with enforcement switched on.
    """
    if db.bind.dialect.name != "sqlite":
        yield db
        return

    engine = build_engine("sqlite://")
    event.listen(engine, "connect", enable_sqlite_foreign_keys)
    init_db(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()

    yield session

    session.close()
    engine.dispose()


@pytest.fixture
def user_service(db):
    """User service wired to the test session with test secrets."""
    return new_user_service(db, TEST_PEPPER, TEST_HMAC_KEY)


@pytest.fixture
def gallery_service(db):
    """Gallery service wired to the test session."""
    return new_gallery_service(db)


@pytest.fixture
def user(user_service):
    """Create and return a persisted user whose password is 'testpass123'."""
    new_user = User(name="Test User", email="test@example.com", password="testpass123")
    user_service.create(new_user)
    return new_user
