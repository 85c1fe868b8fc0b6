"""
Pytest Configuration and Shared Fixtures

This module contains shared test fixtures and configuration for all test modules.
"""

import os
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient


os.environ["ENVIRONMENT"] = "test"
os.environ["USER_STORE_BACKEND"] = "memory"
os.environ["DATABASE_URL"] = "sqlite://"

from cpf_registry.api.dependencies import get_id_generator, get_user_store
from cpf_registry.db.database import create_db_engine, create_session_factory, init_db
from cpf_registry.domain.user import User
from cpf_registry.infrastructure.ids import UuidGenerator
from cpf_registry.main import app
from cpf_registry.repositories import InMemoryUserStore, SqlUserStore

FIXED_NOW = datetime(2024, 7, 1, 12, 0, 0)


class FixedClock:
    """Deterministic clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock():
    """Clock frozen at FIXED_NOW"""
    return FixedClock(FIXED_NOW)


@pytest.fixture()
def id_generator():
    return UuidGenerator()


@pytest.fixture()
def memory_store(clock):
    """Empty in-memory user store sharing the fixed clock"""
    return InMemoryUserStore(clock=clock)


@pytest.fixture()
def sql_engine():
    """
    In-memory SQLite engine with the users table created.

    The engine uses a single shared connection, so every session opened
    by the store sees the same database.
    """
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def sql_session_factory(sql_engine):
    return create_session_factory(sql_engine)


@pytest.fixture()
def sql_store(sql_session_factory, clock):
    """SQLAlchemy user store backed by in-memory SQLite"""
    return SqlUserStore(sql_session_factory, clock=clock)


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Each test using this fixture runs once per store backend"""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture()
def sample_user_data():
    """Sample user fields for testing"""
    return {
        "name": "Maria Souza",
        "email": "maria.souza@email.com",
        "cpf": "48472338088",
    }


@pytest.fixture()
def build_user(clock, id_generator, sample_user_data):
    """Factory building complete, not yet persisted, users"""
    def _build(store, **overrides):
        fields = {**sample_user_data, **overrides}
        return User.build(store, id_generator=id_generator, clock=clock, **fields)
    return _build


@pytest.fixture()
def create_user(build_user):
    """Factory persisting a user through the aggregate"""
    def _create(store, **overrides):
        user = build_user(store, **overrides)
        user.create()
        return user
    return _create


@pytest.fixture()
def client(memory_store):
    """
    HTTP client bound to a fresh in-memory store.

    Dependency overrides are cleared after each test so the next one
    starts from an empty registry.
    """
    app.dependency_overrides[get_user_store] = lambda: memory_store
    app.dependency_overrides[get_id_generator] = lambda: UuidGenerator()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
