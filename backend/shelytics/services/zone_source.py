"""Risk zone source: database rows as schemas, with an optional default provider."""

import logging
from collections.abc import Callable

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shelytics.config import settings
from shelytics.models.risk_zone import RiskZone
from shelytics.schemas.risk import RiskZoneCreate, RiskZoneSchema
from shelytics.zones.samples import sample_zones

logger = logging.getLogger(__name__)

ZoneProvider = Callable[[], list[RiskZoneSchema]]


def load_zones(db: Session, fallback: ZoneProvider | None = None) -> list[RiskZoneSchema]:
    """All zones in the store; the fallback's zones when the store is empty.

    Query errors propagate.
    """
    rows = db.scalars(select(RiskZone).order_by(RiskZone.created_at)).all()
    zones = [RiskZoneSchema.model_validate(r) for r in rows]
    if not zones and fallback is not None:
        zones = fallback()
        logger.info("risk_zones is empty, using %d default zones", len(zones))
    return zones


def server_fallback() -> ZoneProvider | None:
    return sample_zones if settings.use_sample_zones else None


def count_zones(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(RiskZone)) or 0


def get_zone(db: Session, zone_id: str) -> RiskZoneSchema | None:
    row = db.get(RiskZone, zone_id)
    return RiskZoneSchema.model_validate(row) if row is not None else None


def create_zone(db: Session, data: RiskZoneCreate) -> RiskZoneSchema:
    zone = RiskZone(**data.model_dump(mode="json"))
    try:
        db.add(zone)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to create risk zone %r: %s", data.name, e)
        raise
    db.refresh(zone)
    return RiskZoneSchema.model_validate(zone)
