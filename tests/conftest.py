"""Shared test fixtures."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shared_quests.db.database import get_db
from shared_quests.db.models import Base
from shared_quests.main import app
from shared_quests.services.description_service import DescriptionService
from shared_quests.services.profile_source import ProfileDirectorySource
from shared_quests.services.status_service import StatusService
from shared_quests.services.visibility_service import VisibilityService
from tests.game_data import PROFILES, QUESTS, write_json

TEST_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = sessionmaker(bind=TEST_ENGINE, autocommit=False, autoflush=False)


def _override_get_db():
    db = TestSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture()
def quests_path(tmp_path: Path) -> Path:
    """quests.json in the game's {id: template} layout."""
    return write_json(tmp_path / "quests.json", QUESTS)


@pytest.fixture()
def profiles_dir(tmp_path: Path) -> Path:
    """Profile folder with Alice, Bob and a headless profile."""
    directory = tmp_path / "profiles"
    for file_name, data in PROFILES.items():
        write_json(directory / file_name, data)
    return directory


@pytest.fixture()
def db_session() -> Session:
    """Fresh in-memory database session."""
    Base.metadata.drop_all(TEST_ENGINE)
    Base.metadata.create_all(TEST_ENGINE)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def status_service(quests_path, profiles_dir) -> StatusService:
    return StatusService.from_paths(
        str(quests_path), ProfileDirectorySource(profiles_dir)
    )


@pytest.fixture()
def visibility_service(db_session) -> VisibilityService:
    return VisibilityService(db_session)


@pytest.fixture()
def client(status_service, db_session) -> TestClient:
    """TestClient with services wired over temporary game data.

    Requests get their own sessions on the same fresh in-memory database.
    """
    app.state.status_service = status_service
    app.state.description_service = DescriptionService()
    app.state.locales = {
        "en": {"q_intro description": "Talk to the trader.", "q_intro name": "Intro"}
    }
    return TestClient(app)
