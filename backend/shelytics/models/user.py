from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.sql import func

from shelytics.database import Base
from shelytics.models.risk_zone import _new_id


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False)
    age = Column(Integer)
    address = Column(Text)
    phone = Column(String(40))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class EmergencyContact(Base):
    __tablename__ = "emergency_contacts"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    phone = Column(String(40), nullable=False)
    relationship = Column(String(100))
    is_primary = Column(Boolean, default=False)
    created_at = Column(DateTime, server_default=func.now())


class UserPreferences(Base):
    __tablename__ = "user_preferences"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False, unique=True, index=True)
    notifications_enabled = Column(Boolean, default=True)
    gps_enabled = Column(Boolean, default=True)
    background_tracking = Column(Boolean, default=True)
    auto_alert_on_risk_zone = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class LocationLog(Base):
    """Append-only trail of device fixes."""
    __tablename__ = "location_logs"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), nullable=False, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    speed = Column(Float)  # km/h
    accuracy = Column(Float)  # meters
    timestamp = Column(DateTime, server_default=func.now())
