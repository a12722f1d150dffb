"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from shared_quests.api.health import router as health_router
from shared_quests.api.sharedquests import router as sharedquests_router
from shared_quests.config import settings
from shared_quests.core.logging import get_logger, setup_logging
from shared_quests.core.quest.errors import CatalogError
from shared_quests.db.database import SessionLocal, engine as db_engine
from shared_quests.db.models import Base
from shared_quests.services.description_service import (
    DescriptionService,
    load_locales,
)
from shared_quests.services.profile_source import ProfileDirectorySource
from shared_quests.services.status_service import StatusService
from shared_quests.services.visibility_service import VisibilityService

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


def _quest_names_locale() -> Optional[str]:
    if not settings.LOCALES_DIR:
        return None
    path = Path(settings.LOCALES_DIR) / f"{settings.LOCALE}.json"
    return str(path) if path.is_file() else None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    logger.info("Loading quest status for all profiles...")
    status_service = StatusService.from_paths(
        settings.QUESTS_PATH,
        ProfileDirectorySource(settings.PROFILES_DIR),
        locale_path=_quest_names_locale(),
    )
    app.state.status_service = status_service

    app.state.description_service = DescriptionService()
    app.state.locales = (
        load_locales(settings.LOCALES_DIR) if settings.LOCALES_DIR else {}
    )

    db_session = SessionLocal()
    try:
        table = status_service.get_status_table()
        VisibilityService(db_session).register_profiles(table.profile_names())
        if table.is_empty():
            logger.warning("No profiles found yet, statuses will show as loading.")
        else:
            logger.info(
                "Found %d profiles, %d quests in catalog",
                len(table),
                len(status_service.catalog),
            )
    except CatalogError:
        logger.error("Quest catalog missing, status endpoints will return 503.")
    finally:
        db_session.close()

    yield

    logger.info("Shutting down...")


app = FastAPI(title="SharedQuests", lifespan=lifespan)

app.include_router(health_router)
app.include_router(sharedquests_router)
