import uuid

from sqlalchemy import Column, DateTime, Float, Integer, String, Text, JSON
from sqlalchemy.sql import func

from shelytics.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class RiskZone(Base):
    """Circular geofence with a risk classification. Maintained by admins."""
    __tablename__ = "risk_zones"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(200))
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    radius_meters = Column(Float, nullable=False, default=500.0)
    risk_score = Column(Float, nullable=False, default=0.5)
    risk_level = Column(String(20), nullable=False, default="at_risk")  # safe, at_risk, emergency
    incident_count = Column(Integer, default=0)
    time_of_day_risk = Column(JSON, default=dict)  # {"day": 0.4, "night": 0.8}
    description = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
