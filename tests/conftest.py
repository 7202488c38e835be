# /tests/conftest.py

import os

# Settings are read at import time, so the test environment must be in place
# before anything from lab_allocation is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_USERNAME"] = "labadmin"
os.environ["ADMIN_PASSWORD"] = "correct-horse"
os.environ["JWT_SECRET_KEY"] = "test-signing-key"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lab_allocation.db.database import enable_sqlite_foreign_keys, get_db, init_db
from lab_allocation.main import app
from lab_allocation.services.database_service import DatabaseService

ADMIN_USERNAME = "labadmin"
ADMIN_PASSWORD = "correct-horse"


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database for each test."""
    test_engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    enable_sqlite_foreign_keys(test_engine)
    init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_service(session_factory):
    session = session_factory()
    yield DatabaseService(db_session=session)
    session.close()


@pytest.fixture
def client(session_factory):
    """A TestClient whose requests use the per-test database."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/auth/token", data={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
