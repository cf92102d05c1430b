from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from shelytics.database import get_db
from shelytics.schemas.incident import IncidentSchema, IncidentStatus
from shelytics.services import store

router = APIRouter(prefix="/incidents", tags=["incidents"])


@router.get("/", response_model=list[IncidentSchema])
async def list_incidents(
    user_id: str | None = None,
    status: IncidentStatus | None = None,
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return store.list_incidents(db, user_id=user_id, status=status, limit=limit)


@router.post("/{incident_id}/resolve", response_model=IncidentSchema)
async def resolve_incident(incident_id: str, db: Session = Depends(get_db)):
    incident = store.resolve_incident(db, incident_id)
    if incident is None:
        raise HTTPException(status_code=404, detail=f"Incident {incident_id} not found")
    return incident
