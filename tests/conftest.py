"""Shared fixtures: an in-memory database behind the real app, and a few users."""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import taskhub.models  # noqa: F401
from taskhub.core.security import create_access_token, get_password_hash
from taskhub.core.timeutil import utcnow
from taskhub.db.session import get_db
from taskhub.main import app
from taskhub.models.user import User, UserRole

API = "/api/v1"
PASSWORD = "secret123"


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(engine):
    def get_db_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = get_db_override
    # Not used as a context manager, so the lifespan never touches the real database
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def _make_user(session: Session, email: str, name: str, role: UserRole) -> User:
    user = User(email=email, name=name, role=role, password=get_password_hash(PASSWORD))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def manager(session):
    return _make_user(session, "manager@taskhub.io", "Maria Manager", UserRole.PROJECT_MANAGER)


@pytest.fixture
def other_manager(session):
    return _make_user(session, "other.manager@taskhub.io", "Oscar Manager", UserRole.PROJECT_MANAGER)


@pytest.fixture
def employee(session):
    return _make_user(session, "employee@taskhub.io", "Eve Employee", UserRole.EMPLOYEE)


@pytest.fixture
def other_employee(session):
    return _make_user(session, "other.employee@taskhub.io", "Ed Employee", UserRole.EMPLOYEE)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject=user.id)}"}


def future(days: int = 7) -> str:
    return (utcnow() + timedelta(days=days)).isoformat()


def create_project(client, owner: User, **overrides) -> dict:
    body = {
        "name": "Website relaunch",
        "description": "Rebuild the marketing site",
        "tags": ["web", "marketing"],
        "project_manager": owner.id,
        "deadline": future(30),
        "priority": "high",
    }
    body.update(overrides)
    response = client.post(f"{API}/projects", json=body, headers=auth_headers(owner))
    assert response.status_code == 201, response.text
    return response.json()


def create_task(client, creator: User, assignee: User, **overrides) -> dict:
    body = {
        "name": "Write copy",
        "description": "Landing page copy",
        "assignee": assignee.id,
        "tags": ["content"],
        "deadline": future(7),
    }
    body.update(overrides)
    response = client.post(f"{API}/tasks", json=body, headers=auth_headers(creator))
    assert response.status_code == 201, response.text
    return response.json()
