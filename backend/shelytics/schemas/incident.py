from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from shelytics.schemas.risk import RiskLevel


class AlertType(str, Enum):
    SOS = "sos"
    RISK_ZONE_ENTRY = "risk_zone_entry"
    AUTO_ALERT = "auto_alert"


class IncidentStatus(str, Enum):
    ACTIVE = "active"
    RESOLVED = "resolved"
    PENDING = "pending"


class IncidentCreate(BaseModel):
    user_id: str
    latitude: float
    longitude: float
    alert_type: AlertType
    status: IncidentStatus = IncidentStatus.ACTIVE
    risk_level: RiskLevel | None = None
    description: str | None = None


class IncidentSchema(IncidentCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    audio_url: str | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None


class AlertCreate(BaseModel):
    incident_id: str
    contact_id: str | None = None
    sent_to_police: bool = False
    message: str
    latitude: float
    longitude: float


class AlertSchema(AlertCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    sent_at: datetime | None = None
    delivered: bool = False


class SOSRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str
    latitude: float
    longitude: float
    user_name: str | None = None
    risk_level: RiskLevel = RiskLevel.SAFE


class SOSResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    incident_id: str
    alerts_sent: int
    message: str = "Emergency alerts dispatched successfully"
