import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shelytics.database import get_db
from shelytics.schemas.risk import RiskCheckRequest, RiskCheckResponse
from shelytics.services import auto_alert, risk_engine
from shelytics.services.time_weighting import system_clock
from shelytics.services.zone_source import load_zones, server_fallback

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/risk", tags=["risk"])


@router.post("/check", response_model=RiskCheckResponse)
async def check_risk(body: RiskCheckRequest, db: Session = Depends(get_db)):
    """Evaluate a location against all zones; may raise an auto-alert incident."""
    logger.info("Risk check for location: (%s, %s)", body.latitude, body.longitude)
    try:
        zones = load_zones(db, fallback=server_fallback())
        now = system_clock()
        result = risk_engine.evaluate(body.latitude, body.longitude, zones, now=now)
        auto_alert.maybe_auto_alert(
            db, result, body.user_id, body.latitude, body.longitude, now=now,
        )
    except Exception as e:
        logger.error("Risk check error: %s", e)
        raise HTTPException(status_code=500, detail=str(e) or "Unknown error")

    return RiskCheckResponse(
        risk_level=result.level,
        risk_score=result.score,
        in_risk_zone=result.inside,
        zone_name=result.zone.name if result.zone else None,
        zone_description=result.zone.description if result.zone else None,
        nearby_zones=len(zones),
    )
