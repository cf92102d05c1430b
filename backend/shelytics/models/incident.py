from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from shelytics.database import Base
from shelytics.models.risk_zone import _new_id


class Incident(Base):
    __tablename__ = "incidents"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    alert_type = Column(String(20), nullable=False)  # sos, risk_zone_entry, auto_alert
    status = Column(String(20), nullable=False, default="active")  # active, resolved, pending
    risk_level = Column(String(20))
    description = Column(Text)
    audio_url = Column(Text)
    created_at = Column(DateTime, server_default=func.now(), index=True)
    resolved_at = Column(DateTime)

    alerts = relationship("Alert", back_populates="incident", cascade="all, delete-orphan")


class Alert(Base):
    """One notification per recipient; contact_id is null for authorities."""
    __tablename__ = "alerts"

    id = Column(String(36), primary_key=True, default=_new_id)
    incident_id = Column(String(36), ForeignKey("incidents.id", ondelete="CASCADE"), nullable=False, index=True)
    contact_id = Column(String(36), ForeignKey("emergency_contacts.id", ondelete="SET NULL"))
    sent_to_police = Column(Boolean, default=False)
    message = Column(Text, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    sent_at = Column(DateTime, server_default=func.now())
    delivered = Column(Boolean, default=False)

    incident = relationship("Incident", back_populates="alerts")
