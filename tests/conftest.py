"""Pytest configuration and fixtures."""

import os

# The app must not seed or create tables in the real database during tests
os.environ.setdefault("SEED_DEFAULT_ATTRIBUTES", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src import models  # noqa: E402, F401
from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.models.enums import DataType  # noqa: E402
from src.schemas.attribute import AttributeCreate  # noqa: E402
from src.schemas.user import UserCreate  # noqa: E402
from src.services.attribute_service import AttributeService  # noqa: E402
from src.services.user_service import UserService  # noqa: E402

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/user_attributes", "/user_attributes_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
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


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def attributes(db):
    """Create the Age and Department attributes. Returns them keyed by name."""
    service = AttributeService(db)
    age = service.create(
        AttributeCreate(attribute_name="Age", data_type=DataType.NUMBER, display_order=1)
    )
    dept = service.create(
        AttributeCreate(
            attribute_name="Dept", data_type=DataType.TEXT, display_order=2, is_required=True
        )
    )
    return {"Age": age, "Dept": dept}


@pytest.fixture
def alice(db):
    """Create the user Alice."""
    return UserService(db).create(UserCreate(name="Alice", email="a@x.com"))
