"""
Test configuration for the hospital admin backend.
"""
import json
import os

# Point the app at the test database and keep real side effects off
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["BOOTSTRAP_ADMIN_PASSWORD"] = ""
os.environ["MAIL_SERVER"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.auth.models import AccountStatus, User, UserRole
from src.core.security import create_access_token, hash_password, token_claims_for
from src.database import Base, get_db
from src.main import app
from src.realtime.dispatcher import EventDispatcher
from src.realtime.registry import ConnectionRegistry

# Test database URL
TEST_DATABASE_URL = "sqlite:///./test.db"

TEST_PASSWORD = "Password123!"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingChannel:
    """
    Stand-in for an EventChannel that keeps every message it accepts.

    ``fail=True`` makes it behave like a connection that already went away.
    """

    def __init__(self, fail=False):
        self.messages = []
        self.closed = False
        self.fail = fail

    def try_send(self, message):
        if self.closed or self.fail:
            return False
        self.messages.append(message)
        return True

    def close(self):
        self.closed = True

    def events(self):
        return [message["event"] for message in self.messages]

    def payloads(self, name):
        return [json.loads(message["data"]) for message in self.messages if message["event"] == name]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    # Override the get_db dependency
    app.dependency_overrides[get_db] = override_get_db

    # Create test client
    with TestClient(app) as client:
        yield client

    # Remove dependency override
    app.dependency_overrides = {}


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def dispatcher(registry):
    return EventDispatcher(registry)


@pytest.fixture
def make_channel():
    return RecordingChannel


@pytest.fixture
def make_user(db):
    """
    Factory inserting a user straight into the database.
    """
    def _make_user(username, role=UserRole.STAFF, status=AccountStatus.PENDING, email=None, full_name=None):
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            password=hash_password(TEST_PASSWORD),
            full_name=full_name or username.title(),
            role=role,
            status=status,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def admin_user(make_user):
    return make_user("admin", role=UserRole.ADMIN, status=AccountStatus.APPROVED, full_name="Ada Admin")


@pytest.fixture
def pending_user(make_user):
    return make_user("nurse.joy", role=UserRole.NURSE, full_name="Joy Nurse")


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(token_claims_for(admin_user))
    return {"Authorization": f"Bearer {token}"}
