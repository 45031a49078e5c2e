"""
tests/conftest.py -- Shared test fixtures for the Employee API tests.

This module provides:
  - _make_test_engine(): an isolated named shared-memory SQLite engine
  - _patch_lifespan(): wires stores built on that engine into app.state,
    bypassing the real startup
  - make_client(): context manager yielding a TestClient on a fresh database
  - api_client: (client, token, user_id) for API integration tests
  - client_factory: make_client() as a fixture, for custom clients
  - memory_engine: a plain in-memory engine for store unit tests

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker
thread.

DEBUG must be set before any app import so get_settings() auto-generates
JWT_SECRET instead of raising. The public-route rate limit is raised so
tests that log in repeatedly are not throttled.
"""

from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from contextlib import asynccontextmanager, contextmanager

# CRITICAL: must run before any api/auth/core import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOGIN_RATE_LIMIT", "1000/minute")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from api.main import app
from auth.models import User
from auth.store import UserStore
from auth.tokens import create_access_token, hash_password
from core.database import create_db_engine
from employees.store import EmployeeStore

ADMIN_USERNAME = "testadmin"
ADMIN_PASSWORD = "testpass123"


def _make_test_engine(db_suffix: str) -> Engine:
    """Create a named shared-memory SQLite engine unique to db_suffix."""
    return create_db_engine(f"sqlite:///file:test_{db_suffix}?mode=memory&cache=shared&uri=true")


def _patch_lifespan(engine: Engine, user_store: UserStore, employee_store: EmployeeStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.engine = engine
        app.state.user_store = user_store
        app.state.employee_store = employee_store
        yield

    return test_lifespan


@contextmanager
def make_client(db_suffix: str, raise_server_exceptions: bool = True) -> Iterator[TestClient]:
    """Yield a TestClient whose stores live in a fresh shared-memory database."""
    engine = _make_test_engine(db_suffix)
    user_store = UserStore(engine)
    employee_store = EmployeeStore(engine)
    app.router.lifespan_context = _patch_lifespan(engine, user_store, employee_store)
    with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
        yield client
    engine.dispose()


@pytest.fixture(scope="module")
def api_client(request) -> Generator[tuple[TestClient, str, int], None, None]:
    """Yield (client, token, user_id) for API integration tests.

    Each test module gets its own database (named after the module) with one
    pre-registered user and a valid token for that user.
    """
    suffix = request.module.__name__.replace(".", "_")
    with make_client(suffix) as client:
        uid = client.app.state.user_store.create_user(
            User(username=ADMIN_USERNAME, hashed_password=hash_password(ADMIN_PASSWORD))
        )
        token = create_access_token(uid)
        yield client, token, uid


@pytest.fixture
def client_factory():
    """Expose make_client() to tests that need a non-default TestClient."""
    return make_client


@pytest.fixture
def memory_engine() -> Generator[Engine, None, None]:
    engine = create_db_engine("sqlite:///:memory:")
    yield engine
    engine.dispose()
