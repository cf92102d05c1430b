"""Alert fan-out: turns an incident and a contact list into alert records.

Pure transformation; persistence happens in services.store.
  SOS incidents:        one alert per contact + one authorities alert
  Risk-zone incidents:  one alert per contact only
"""

from collections.abc import Sequence
from datetime import datetime, timezone

from shelytics.config import settings
from shelytics.schemas.incident import AlertCreate, AlertType, IncidentSchema
from shelytics.schemas.user import EmergencyContactSchema

SOS_CONTACT_TEMPLATE = (
    "🚨 EMERGENCY ALERT from {sender}!\n\n"
    "I need help! My live location: {map_url}\n\n"
    "Risk Level: {risk_level_upper}\n"
    "Timestamp: {timestamp}\n\n"
    "Sent via {app_name} Safety App"
)

AUTHORITIES_TEMPLATE = (
    "EMERGENCY ALERT\n\n"
    "User: {sender}\n"
    "Location: {latitude}, {longitude}\n"
    "Maps: {map_url}\n"
    "Risk Level: {risk_level}\n"
    "Time: {timestamp}\n\n"
    "Immediate assistance required."
)

ZONE_ENTRY_TEMPLATE = (
    "⚠️ Safety Alert: {sender} has entered a high-risk area.\n\n"
    "Zone: {zone_name}\n"
    "Location: {map_url}\n"
    "Time: {timestamp}\n\n"
    "This is an automatic safety notification from {app_name}."
)


def map_url(latitude: float, longitude: float) -> str:
    return f"{settings.maps_base_url}{latitude},{longitude}"


def render_messages(
    incident: IncidentSchema,
    sender_name: str | None,
    zone_name: str | None = None,
    now: datetime | None = None,
) -> tuple[str, str | None]:
    """Return (contact message, authorities message or None)."""
    now = now or datetime.now(timezone.utc)
    risk_level = incident.risk_level.value if incident.risk_level else "unknown"
    fields = {
        "map_url": map_url(incident.latitude, incident.longitude),
        "latitude": incident.latitude,
        "longitude": incident.longitude,
        "risk_level": risk_level,
        "risk_level_upper": risk_level.upper(),
        "timestamp": now.isoformat(),
        "app_name": settings.app_name,
    }

    if incident.alert_type == AlertType.SOS:
        sender = sender_name or f"{settings.app_name} User"
        return (
            SOS_CONTACT_TEMPLATE.format(sender=sender, **fields),
            AUTHORITIES_TEMPLATE.format(sender=sender, **fields),
        )

    contact_message = ZONE_ENTRY_TEMPLATE.format(
        sender=sender_name or "Your contact",
        zone_name=zone_name or "Unknown",
        **fields,
    )
    return contact_message, None


def build_alerts(
    incident: IncidentSchema,
    contacts: Sequence[EmergencyContactSchema],
    sender_name: str | None,
    zone_name: str | None = None,
    now: datetime | None = None,
) -> list[AlertCreate]:
    contact_message, authorities_message = render_messages(
        incident, sender_name, zone_name=zone_name, now=now,
    )

    alerts = [
        AlertCreate(
            incident_id=incident.id,
            contact_id=contact.id,
            sent_to_police=False,
            message=contact_message,
            latitude=incident.latitude,
            longitude=incident.longitude,
        )
        for contact in contacts
    ]

    if authorities_message is not None:
        alerts.append(AlertCreate(
            incident_id=incident.id,
            contact_id=None,
            sent_to_police=True,
            message=authorities_message,
            latitude=incident.latitude,
            longitude=incident.longitude,
        ))

    return alerts
