"""Shared fixtures.

Each test gets its own in-memory SQLite database. ``projectbook.database`` is
rebound to it, so request sessions, background-task sessions and the ``db``
fixture all talk to the same store.
"""

import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from projectbook import database
from projectbook.main import app
from projectbook.routers.auth import create_access_token
from projectbook.services import project_service, user_service

PASSWORD = "dottle-nouveau-pavilion-tights-furze"
JSON = {"Accept": "application/json"}


@pytest.fixture()
def engine():
    test_engine = database._create_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(bind=test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine, monkeypatch):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(database, "SessionLocal", factory)
    return factory


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def user_factory(db):
    counter = itertools.count(1)

    def create(**overrides):
        n = next(counter)
        attrs = {
            "first_name": "Aaron",
            "last_name": "Sumner",
            "email": f"tester{n}@example.com",
            "password": PASSWORD,
        }
        attrs.update(overrides)
        return user_service.register_user(db, attrs)

    return create


@pytest.fixture()
def project_factory(db, user_factory):
    counter = itertools.count(1)

    def create(owner=None, **overrides):
        owner = owner or user_factory()
        attrs = {"name": f"Project {next(counter)}", "description": "A test project"}
        attrs.update(overrides)
        return project_service.create_project(db, owner, attrs)

    return create


@pytest.fixture()
def user(user_factory):
    return user_factory()


@pytest.fixture()
def project(project_factory, user):
    return project_factory(owner=user)


def auth_headers(user, **extra):
    token = create_access_token(data={"sub": user.email})
    headers = {"Authorization": f"Bearer {token}"}
    headers.update(extra)
    return headers
