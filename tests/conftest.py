"""Shared fixtures: in-memory SQLite database and an app/client bound to it."""

import re

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  registers the tables on Base.metadata
from app.config import Settings
from app.db import Base, Database
from app.main import create_app

pytest_plugins = ["tests.fixtures.historico_fixtures"]

ADMIN_LOGIN = "admin"
ADMIN_PASSWORD = "s3cret"


def _regexp_replace(value, pattern, replacement, flags=None):
    """PostgreSQL regexp_replace for SQLite connections."""
    if value is None:
        return None
    count = 0 if "g" in (flags or "") else 1
    return re.sub(pattern, replacement, str(value), count=count)


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _register_functions(dbapi_connection, connection_record):
        dbapi_connection.create_function("regexp_replace", 4, _regexp_replace)

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def database(engine):
    return Database(engine)


@pytest.fixture(scope="function")
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


def make_settings(**overrides) -> Settings:
    values = {
        "environment": "test",
        "database_url": "sqlite://",
        "admin_login": ADMIN_LOGIN,
        "admin_password": ADMIN_PASSWORD,
        "session_secret": "test-session-secret",
        "disable_auth": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(scope="function")
def settings():
    return make_settings()


@pytest.fixture(scope="function")
def client(settings, database):
    """Client against the SQLite database; not logged in."""
    app = create_app(testing=True, settings=settings, database=database)
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def auth_client(client):
    """Client with an admin session."""
    r = client.post(
        "/api/login", json={"login": ADMIN_LOGIN, "password": ADMIN_PASSWORD}
    )
    assert r.status_code == 200
    return client
