"""Automatic incident creation when a user is inside an emergency zone."""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from shelytics.schemas.incident import AlertSchema, AlertType, IncidentCreate, IncidentSchema, IncidentStatus
from shelytics.schemas.risk import EvaluationResult, RiskLevel
from shelytics.services import alert_fanout, store

logger = logging.getLogger(__name__)


def should_auto_alert(result: EvaluationResult, auto_alert_enabled: bool) -> bool:
    return (
        result.inside
        and result.level == RiskLevel.EMERGENCY
        and auto_alert_enabled
    )


def maybe_auto_alert(
    db: Session,
    result: EvaluationResult,
    user_id: str | None,
    latitude: float,
    longitude: float,
    now: datetime | None = None,
) -> tuple[IncidentSchema, list[AlertSchema]] | None:
    """Create a pending risk_zone_entry incident and alert contacts, if gated in.

    Returns None without side effects when the gate is closed, including for
    users who never saved preferences. Two requests for the same entry can
    each create an incident; there is no dedup.
    """
    if not user_id or not (result.inside and result.level == RiskLevel.EMERGENCY):
        return None

    prefs = store.get_preferences(db, user_id)
    enabled = prefs is not None and prefs.auto_alert_on_risk_zone
    if not should_auto_alert(result, enabled):
        logger.debug("Auto-alert disabled or unset for user %s", user_id)
        return None

    zone_name = result.zone.name if result.zone else None
    contacts = store.get_contacts(db, user_id)
    sender_name = store.get_profile_name(db, user_id)

    incident, alerts = store.create_incident_with_alerts(
        db,
        IncidentCreate(
            user_id=user_id,
            latitude=latitude,
            longitude=longitude,
            alert_type=AlertType.RISK_ZONE_ENTRY,
            status=IncidentStatus.PENDING,
            risk_level=result.level,
            description=f"Auto-alert: Entered {zone_name or 'high-risk zone'}",
        ),
        lambda incident: alert_fanout.build_alerts(
            incident, contacts, sender_name=sender_name, zone_name=zone_name, now=now,
        ),
    )

    logger.info("Auto-alert incident %s: %d contacts notified for zone %s",
                incident.id, len(alerts), zone_name)
    return incident, alerts
