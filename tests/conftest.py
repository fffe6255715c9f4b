from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import taskboard.models  # noqa: F401  registers Todo on Base.metadata
from taskboard.core.database import Base, get_db
from taskboard.main import app
from taskboard.schemas import TodoCreate
from taskboard.services.todo_crud import create_todo

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def engine():
    # one shared in-memory database per test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def api(session_factory):
    """
    TestClient wired to the in-memory database.

    Not used as a context manager, so the lifespan (init_db/seed_db against
    the configured DATABASE_URL) never runs.
    """

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_todo(session):
    def _make(**overrides):
        data = {
            "name": "Buy milk",
            "short_description": "Two litres",
            "date_time": NOW + timedelta(days=1),
        }
        data.update(overrides)
        return create_todo(session, TodoCreate(**data))

    return _make
