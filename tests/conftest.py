"""
Test configuration and fixtures for the shortlink service.
This centralizes all test setup, making individual tests clean.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from main import app
from shortlink_app.constants import ALPHABET
from shortlink_app.database.connection import Base, get_db
from shortlink_app.services.short_code import CodeGenerator, UniquenessResolver
from shortlink_app.storage.url_store import UrlStore


class TickingClock:
    """Deterministic clock: every call is one second after the previous one"""

    def __init__(self, start=datetime(2025, 1, 1, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        self.current += timedelta(seconds=1)
        return self.current


def source_for(*codes):
    """
    Random source that makes CodeGenerator emit the given codes in order.
    Each code is turned back into the byte indices that map onto it.
    """
    pending = [bytes(ALPHABET.index(ch) for ch in code) for code in codes]

    def random_source(n):
        chunk = pending.pop(0)
        assert len(chunk) == n
        return chunk

    return random_source


@pytest.fixture(scope="function")
def engine(tmp_path):
    """
    File-backed SQLite database per test, so that several threads can each
    open their own connection to it.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """
    Create a fresh database session for each test.
    """
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store(db_session, clock):
    return UrlStore(db_session, clock=clock)


@pytest.fixture
def resolver():
    return UniquenessResolver(CodeGenerator(default_length=6), max_attempts=50)


@pytest.fixture(scope="function")
def client(session_factory):
    """
    Create a test client with the database dependency overridden.
    Each request gets its own session, as it would in production.
    """
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    # Override the database dependency
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
