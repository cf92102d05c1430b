"""Server-side SOS: incident, contact alerts and an authorities alert."""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from shelytics.schemas.incident import AlertSchema, AlertType, IncidentCreate, IncidentSchema, IncidentStatus
from shelytics.schemas.risk import RiskLevel
from shelytics.services import alert_fanout, store

logger = logging.getLogger(__name__)


def trigger_sos(
    db: Session,
    user_id: str,
    latitude: float,
    longitude: float,
    user_name: str | None = None,
    risk_level: RiskLevel = RiskLevel.SAFE,
    now: datetime | None = None,
) -> tuple[IncidentSchema, list[AlertSchema]]:
    logger.info("SOS received from user %s at (%s, %s)", user_id, latitude, longitude)

    sender = user_name or store.get_profile_name(db, user_id)
    contacts = store.get_contacts(db, user_id)

    incident, alerts = store.create_incident_with_alerts(
        db,
        IncidentCreate(
            user_id=user_id,
            latitude=latitude,
            longitude=longitude,
            alert_type=AlertType.SOS,
            status=IncidentStatus.ACTIVE,
            risk_level=risk_level,
        ),
        lambda incident: alert_fanout.build_alerts(incident, contacts, sender_name=sender, now=now),
    )

    logger.info("SOS processed: %d alerts created for incident %s", len(alerts), incident.id)
    return incident, alerts
