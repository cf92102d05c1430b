import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shelytics.database import get_db
from shelytics.schemas.incident import SOSRequest, SOSResponse
from shelytics.services.sos import trigger_sos

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sos"])


@router.post("/sos", response_model=SOSResponse)
async def send_sos(body: SOSRequest, db: Session = Depends(get_db)):
    try:
        incident, alerts = trigger_sos(
            db,
            body.user_id,
            body.latitude,
            body.longitude,
            user_name=body.user_name,
            risk_level=body.risk_level,
        )
    except Exception as e:
        logger.error("SOS processing error: %s", e)
        raise HTTPException(status_code=500, detail=str(e) or "Unknown error")

    return SOSResponse(incident_id=incident.id, alerts_sent=len(alerts))
