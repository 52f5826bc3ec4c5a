"""
Pytest configuration and shared fixtures.

Database tests run against in-memory SQLite; no external services are
needed for the suite.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from database.database import build_session_factory, init_db
from tests import TEST_DB_URL, make_candidate, make_job


def pytest_configure(config):
    config.addinivalue_line("markers", "db: tests that use a SQLite database")


@pytest.fixture
def sqlite_engine():
    """Fresh in-memory database with match tables created."""
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine):
    return build_session_factory(sqlite_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def frontend_job():
    return make_job("job-1", required=["React", "JavaScript"], preferred=["TypeScript"])


@pytest.fixture
def candidate_pool():
    return [
        make_candidate("c1", ["React"]),
        make_candidate("c2", ["React", "JavaScript", "TypeScript"]),
        make_candidate("c3", []),
    ]
