from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileCreate(BaseModel):
    name: str = Field(min_length=1)
    age: int | None = Field(default=None, ge=0)
    address: str | None = None
    phone: str | None = None


class ProfileSchema(ProfileCreate):
    model_config = ConfigDict(from_attributes=True)

    user_id: str


class EmergencyContactCreate(BaseModel):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    relationship: str | None = None
    is_primary: bool = False


class EmergencyContactSchema(EmergencyContactCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str


class UserPreferencesSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    notifications_enabled: bool = True
    gps_enabled: bool = True
    background_tracking: bool = True
    auto_alert_on_risk_zone: bool = True


class UserPreferencesUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""
    notifications_enabled: bool | None = None
    gps_enabled: bool | None = None
    background_tracking: bool | None = None
    auto_alert_on_risk_zone: bool | None = None


class LocationUpdate(BaseModel):
    """A device fix as reported by the platform geolocation API."""
    latitude: float
    longitude: float
    timestamp: datetime
    speed_mps: float | None = None  # device-reported, may be absent or negative
    accuracy: float | None = None


class LocationState(BaseModel):
    latitude: float
    longitude: float
    timestamp: datetime
    speed_kmh: float = 0.0
    accuracy: float | None = None
