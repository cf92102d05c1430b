"""Database access for profiles, preferences, contacts, incidents, alerts and location logs.

Every write is attempted once. Failures roll the session back, are logged,
and re-raised to the caller.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shelytics.models.incident import Alert, Incident
from shelytics.models.user import EmergencyContact, LocationLog, Profile, UserPreferences
from shelytics.schemas.incident import AlertCreate, AlertSchema, IncidentCreate, IncidentSchema, IncidentStatus
from shelytics.schemas.user import (
    EmergencyContactCreate,
    EmergencyContactSchema,
    LocationState,
    ProfileCreate,
    ProfileSchema,
    UserPreferencesSchema,
    UserPreferencesUpdate,
)

logger = logging.getLogger(__name__)


def _commit(db: Session, what: str, user_id: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to save %s for user %s: %s", what, user_id, e)
        raise


def get_profile(db: Session, user_id: str) -> ProfileSchema | None:
    row = db.scalars(select(Profile).where(Profile.user_id == user_id)).first()
    return ProfileSchema.model_validate(row) if row else None


def upsert_profile(db: Session, user_id: str, fields: ProfileCreate) -> ProfileSchema:
    row = db.scalars(select(Profile).where(Profile.user_id == user_id)).first()
    if row is None:
        row = Profile(user_id=user_id)
        db.add(row)
    for key, value in fields.model_dump().items():
        setattr(row, key, value)
    _commit(db, "profile", user_id)
    db.refresh(row)
    return ProfileSchema.model_validate(row)


def get_profile_name(db: Session, user_id: str) -> str | None:
    return db.scalars(
        select(Profile.name).where(Profile.user_id == user_id)
    ).first()


def get_preferences(db: Session, user_id: str) -> UserPreferencesSchema | None:
    """Stored preferences, or None when the user never saved any."""
    row = db.scalars(
        select(UserPreferences).where(UserPreferences.user_id == user_id)
    ).first()
    if row is None:
        return None
    return UserPreferencesSchema.model_validate(row)


def update_preferences(
    db: Session, user_id: str, changes: UserPreferencesUpdate,
) -> UserPreferencesSchema:
    """Apply the fields that were sent; a first save starts from the column defaults."""
    row = db.scalars(
        select(UserPreferences).where(UserPreferences.user_id == user_id)
    ).first()
    if row is None:
        row = UserPreferences(user_id=user_id)
        db.add(row)
    for key, value in changes.model_dump(exclude_none=True).items():
        setattr(row, key, value)
    _commit(db, "preferences", user_id)
    db.refresh(row)
    return UserPreferencesSchema.model_validate(row)


def get_contacts(db: Session, user_id: str) -> list[EmergencyContactSchema]:
    rows = db.scalars(
        select(EmergencyContact)
        .where(EmergencyContact.user_id == user_id)
        .order_by(EmergencyContact.is_primary.desc(), EmergencyContact.created_at)
    ).all()
    return [EmergencyContactSchema.model_validate(r) for r in rows]


def create_contact(
    db: Session, user_id: str, fields: EmergencyContactCreate,
) -> EmergencyContactSchema:
    row = EmergencyContact(user_id=user_id, **fields.model_dump())
    db.add(row)
    _commit(db, "emergency contact", user_id)
    db.refresh(row)
    return EmergencyContactSchema.model_validate(row)


def create_incident_with_alerts(
    db: Session,
    fields: IncidentCreate,
    build_batch: Callable[[IncidentSchema], list[AlertCreate]],
) -> tuple[IncidentSchema, list[AlertSchema]]:
    """Insert an incident and the alerts built for it in one transaction.

    The incident is flushed first so `build_batch` sees its id. Nothing is
    kept when any insert fails.
    """
    incident = Incident(**fields.model_dump(mode="json"))
    rows: list[Alert] = []
    try:
        db.add(incident)
        db.flush()
        batch = build_batch(IncidentSchema.model_validate(incident))
        rows = [Alert(**a.model_dump()) for a in batch]
        db.add_all(rows)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Failed to create %s incident with %d alerts for user %s: %s",
                     fields.alert_type.value, len(rows), fields.user_id, e)
        raise
    db.refresh(incident)
    for row in rows:
        db.refresh(row)
    return (
        IncidentSchema.model_validate(incident),
        [AlertSchema.model_validate(r) for r in rows],
    )


def log_location(db: Session, user_id: str, state: LocationState) -> None:
    log = LocationLog(
        user_id=user_id,
        latitude=state.latitude,
        longitude=state.longitude,
        speed=state.speed_kmh,
        accuracy=state.accuracy,
        timestamp=state.timestamp,
    )
    try:
        db.add(log)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def list_incidents(
    db: Session,
    user_id: str | None = None,
    status: IncidentStatus | None = None,
    limit: int = 50,
) -> list[IncidentSchema]:
    query = select(Incident).order_by(Incident.created_at.desc()).limit(limit)
    if user_id:
        query = query.where(Incident.user_id == user_id)
    if status:
        query = query.where(Incident.status == status.value)
    return [IncidentSchema.model_validate(r) for r in db.scalars(query).all()]


def resolve_incident(
    db: Session, incident_id: str, now: datetime | None = None,
) -> IncidentSchema | None:
    incident = db.get(Incident, incident_id)
    if incident is None:
        return None
    incident.status = IncidentStatus.RESOLVED.value
    incident.resolved_at = now or datetime.now(timezone.utc)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to resolve incident %s: %s", incident_id, e)
        raise
    db.refresh(incident)
    return IncidentSchema.model_validate(incident)
