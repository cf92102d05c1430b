from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shelytics.database import get_db
from shelytics.schemas.risk import RiskZoneCreate, RiskZoneSchema
from shelytics.services import zone_source

router = APIRouter(prefix="/zones", tags=["zones"])


@router.get("/", response_model=list[RiskZoneSchema])
async def list_zones(db: Session = Depends(get_db)):
    """All risk zones, or the default zones when the server is configured for them."""
    return zone_source.load_zones(db, fallback=zone_source.server_fallback())


@router.post("/", response_model=RiskZoneSchema, status_code=201)
async def create_zone(body: RiskZoneCreate, db: Session = Depends(get_db)):
    return zone_source.create_zone(db, body)


@router.get("/{zone_id}", response_model=RiskZoneSchema)
async def get_zone(zone_id: str, db: Session = Depends(get_db)):
    zone = zone_source.get_zone(db, zone_id)
    if not zone:
        raise HTTPException(status_code=404, detail=f"Zone {zone_id} not found")
    return zone
