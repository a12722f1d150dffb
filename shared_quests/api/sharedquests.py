"""Shared quest status endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from shared_quests.api.schemas import (
    DescriptionRequest,
    DescriptionResponse,
    ErrorResponse,
    ProfileVisibility,
    QuestStatusesPayload,
    SettingsResponse,
    SettingsUpdate,
    StatusTablePayload,
    VisibilityUpdate,
)
from shared_quests.core.quest.errors import CatalogError
from shared_quests.core.quest.models import StatusTable
from shared_quests.db.database import get_db
from shared_quests.services.description_service import (
    DescriptionService,
    description_key,
)
from shared_quests.services.status_service import StatusService
from shared_quests.services.visibility_service import VisibilityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sharedquests", tags=["sharedquests"])

NO_CATALOG = {503: {"model": ErrorResponse, "description": "Quest catalog not loaded"}}


def get_status_service(request: Request) -> StatusService:
    """Return the StatusService from app state."""
    service: StatusService = request.app.state.status_service
    return service


def get_visibility_service(db: Session = Depends(get_db)) -> VisibilityService:
    """VisibilityService bound to this request's session."""
    return VisibilityService(db)


def get_description_service(request: Request) -> DescriptionService:
    """Return the DescriptionService from app state."""
    service: DescriptionService = request.app.state.description_service
    return service


def _load_table(request: Request, visibility: VisibilityService) -> StatusTable:
    """Fresh table; newly seen profiles are recorded as visible."""
    try:
        table = get_status_service(request).get_status_table()
    except CatalogError as e:
        logger.warning("Status request without catalog: %s", e)
        raise HTTPException(status_code=503, detail="no catalog")
    visibility.register_profiles(table.profile_names())
    return table


# === Statuses ===


@router.get("/statuses", response_model=StatusTablePayload, responses=NO_CATALOG)
def get_statuses(
    request: Request,
    visibility: VisibilityService = Depends(get_visibility_service),
) -> dict:
    """All profiles' status for every quest, read fresh from disk."""
    table = _load_table(request, visibility)
    return table.to_payload()


@router.get(
    "/statuses/{quest_id}", response_model=QuestStatusesPayload, responses=NO_CATALOG
)
def get_quest_statuses(
    quest_id: str,
    request: Request,
    visibility: VisibilityService = Depends(get_visibility_service),
) -> dict:
    """All profiles' status for one quest."""
    table = _load_table(request, visibility)
    if not get_status_service(request).catalog.get(quest_id):
        raise HTTPException(status_code=404, detail=f"Quest not found: {quest_id}")
    return {name: info.to_payload() for name, info in table.project(quest_id).items()}


# === Descriptions ===


@router.post(
    "/description/{quest_id}",
    response_model=DescriptionResponse,
    responses=NO_CATALOG,
)
def merge_description(
    quest_id: str,
    body: DescriptionRequest,
    request: Request,
    visibility: VisibilityService = Depends(get_visibility_service),
) -> DescriptionResponse:
    """Merge a fresh status block into the given description text."""
    table = _load_table(request, visibility)
    try:
        text = get_description_service(request).describe(
            quest_id,
            body.text,
            table,
            visible=visibility.visibility_predicate(),
            enabled=visibility.is_enabled(),
        )
    except Exception as e:
        logger.error("Failed to merge description for %s: %s", quest_id, e)
        raise HTTPException(status_code=500, detail=str(e))
    return DescriptionResponse(quest_id=quest_id, text=text)


@router.get(
    "/description/{quest_id}",
    response_model=DescriptionResponse,
    responses=NO_CATALOG,
)
def get_description(
    quest_id: str,
    request: Request,
    lang: str = "en",
    visibility: VisibilityService = Depends(get_visibility_service),
) -> DescriptionResponse:
    """Locale description for a quest with the status block prepended."""
    locales: dict = getattr(request.app.state, "locales", {}) or {}
    entries = locales.get(lang)
    if entries is None:
        raise HTTPException(status_code=404, detail=f"Locale not found: {lang}")
    original = entries.get(description_key(quest_id))
    if original is None:
        raise HTTPException(
            status_code=404, detail=f"No description for quest: {quest_id}"
        )

    table = _load_table(request, visibility)
    try:
        text = get_description_service(request).describe(
            quest_id,
            original,
            table,
            visible=visibility.visibility_predicate(),
            enabled=visibility.is_enabled(),
        )
    except Exception as e:
        logger.error("Failed to merge description for %s: %s", quest_id, e)
        raise HTTPException(status_code=500, detail=str(e))
    return DescriptionResponse(quest_id=quest_id, text=text)


# === Settings ===


@router.get("/settings", response_model=SettingsResponse)
def get_settings(
    visibility: VisibilityService = Depends(get_visibility_service),
) -> SettingsResponse:
    return SettingsResponse(
        enabled=visibility.is_enabled(),
        excluded_profiles=sorted(visibility.excluded_profiles()),
    )


@router.put("/settings", response_model=SettingsResponse)
def update_settings(
    body: SettingsUpdate,
    visibility: VisibilityService = Depends(get_visibility_service),
) -> SettingsResponse:
    visibility.set_enabled(body.enabled)
    return SettingsResponse(
        enabled=visibility.is_enabled(),
        excluded_profiles=sorted(visibility.excluded_profiles()),
    )


@router.get("/profiles", response_model=list[ProfileVisibility])
def list_profiles(
    visibility: VisibilityService = Depends(get_visibility_service),
) -> list[ProfileVisibility]:
    """Profiles seen so far with their visibility."""
    return [
        ProfileVisibility(profile_name=name, visible=visible)
        for name, visible in visibility.list_profiles()
    ]


@router.put("/profiles/{profile_name}", response_model=ProfileVisibility)
def set_profile_visibility(
    profile_name: str,
    body: VisibilityUpdate,
    visibility: VisibilityService = Depends(get_visibility_service),
) -> ProfileVisibility:
    visibility.set_profile_visible(profile_name, body.visible)
    return ProfileVisibility(profile_name=profile_name, visible=body.visible)
