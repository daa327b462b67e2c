from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from taskgen.config import Settings
from taskgen.database import create_db_engine, create_session_factory, create_tables
from taskgen.main import create_app
from taskgen.store import TaskStore

from .fakes import FakeModelClient


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        gemini_api_key="test-key",
        database_url=f"sqlite:///{tmp_path / 'tasks.db'}",
    )


@pytest.fixture()
def model_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture()
def app(settings: Settings, model_client: FakeModelClient):
    return create_app(settings, model_client=model_client)


@pytest.fixture()
def client(app):
    # Context manager runs the lifespan, which creates the tables.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def session(settings: Settings):
    engine = create_db_engine(settings.database_url)
    create_tables(engine)
    db = create_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture()
def store(session: Session) -> TaskStore:
    return TaskStore(session)
