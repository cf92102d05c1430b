from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from shelytics.database import get_db
from shelytics.models.incident import Incident
from shelytics.models.user import Profile
from shelytics.schemas.dashboard import DashboardResponse, DashboardStats
from shelytics.schemas.incident import IncidentStatus
from shelytics.services import store, zone_source

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard/", response_model=DashboardResponse)
async def get_dashboard(db: Session = Depends(get_db)):
    """Admin overview: counts, all zones and the latest incidents."""
    total_incidents = db.scalar(select(func.count()).select_from(Incident)) or 0
    active_incidents = db.scalar(
        select(func.count()).select_from(Incident)
        .where(Incident.status == IncidentStatus.ACTIVE.value)
    ) or 0
    total_users = db.scalar(select(func.count()).select_from(Profile)) or 0

    stats = DashboardStats(
        total_incidents=total_incidents,
        active_incidents=active_incidents,
        total_users=total_users,
        risk_zones=zone_source.count_zones(db),
    )

    return DashboardResponse(
        as_of=datetime.now(timezone.utc),
        stats=stats,
        zones=zone_source.load_zones(db),
        recent_incidents=store.list_incidents(db, limit=10),
    )
