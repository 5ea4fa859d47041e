"""Pytest configuration and shared fixtures.

Every test gets its own SQLite database file, so tests that exercise
concurrent sessions see real locking and constraint behaviour.
"""

import os

# Must be set before the application modules read their configuration.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["AUTO_ENROLL_OWNER"] = "true"

from typing import Callable, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app import app
from config import AuthSettings
from core.credentials import CredentialCodec
from core.database import create_db_engine, get_db, init_db
from core.dependencies import get_credential_codec
from schemas.course import CreateCourseRequest
from utils.course_manager import CourseManager
from utils.user_manager import UserManager


@pytest.fixture
def engine(tmp_path):
    """Create an engine on a fresh database file with all tables."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Create a new database session for a test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def codec() -> CredentialCodec:
    return CredentialCodec(AuthSettings(secret_key="test-secret-key-for-testing-only"))


@pytest.fixture
def client(session_factory, codec):
    """TestClient wired to the per-test database and codec."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_credential_codec] = lambda: codec
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db) -> Callable[..., str]:
    """Create a user directly and return its ID."""

    def _make_user(username: str, role: str = "student", password: str = "secret") -> str:
        return UserManager(db).create_user(username, password, role).user_id

    return _make_user


@pytest.fixture
def make_course(db) -> Callable[..., str]:
    """Create a course directly and return its ID."""

    def _make_course(
        owner_id: str,
        code: str = "CS101",
        name: str = "Intro",
        auto_enroll_owner: bool = True,
    ) -> str:
        req = CreateCourseRequest(course_id=code, course_name=name, instructor="Dr. Smith")
        return CourseManager(db, auto_enroll_owner=auto_enroll_owner).create_course(req, owner_id).id

    return _make_course


@pytest.fixture
def login(client) -> Callable[..., Tuple[dict, str]]:
    """Register a user through the API, log in, and return (headers, user_id)."""

    def _login(username: str, role: str = "student", password: str = "secret"):
        response = client.post(
            "/api/users", json={"username": username, "password": password, "role": role}
        )
        assert response.status_code == 201
        response = client.post("/api/auth", json={"username": username, "password": password})
        assert response.status_code == 200
        body = response.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["subjectId"]

    return _login
