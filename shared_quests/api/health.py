"""Health check endpoint."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.orm import Session

from shared_quests.db.database import get_db

router = APIRouter()


@router.get("/health")
def health_check(request: Request, db: Session = Depends(get_db)) -> dict[str, str]:
    """Return application, database and quest catalog status."""
    status_service = getattr(request.app.state, "status_service", None)
    catalog = (
        "loaded"
        if status_service is not None and status_service.has_catalog
        else "missing"
    )
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "connected", "catalog": catalog}
    except Exception:
        return {"status": "error", "database": "disconnected", "catalog": catalog}
