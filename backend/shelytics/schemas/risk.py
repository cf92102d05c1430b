from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RiskLevel(str, Enum):
    SAFE = "safe"
    AT_RISK = "at_risk"
    EMERGENCY = "emergency"


class RiskZoneSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str | None = None
    description: str | None = None
    latitude: float
    longitude: float
    radius_meters: float = 500.0
    risk_score: float = 0.5  # conventionally 0-1, never clamped
    risk_level: RiskLevel = RiskLevel.AT_RISK
    time_of_day_risk: dict[str, float | None] = {}  # "day"/"night" overrides
    incident_count: int = 0

    @field_validator("time_of_day_risk", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or {}

    @field_validator("incident_count", mode="before")
    @classmethod
    def _none_to_zero(cls, v):
        return v or 0


class RiskZoneCreate(BaseModel):
    name: str | None = None
    description: str | None = None
    latitude: float
    longitude: float
    radius_meters: float = Field(default=500.0, gt=0)
    risk_score: float = 0.5
    risk_level: RiskLevel = RiskLevel.AT_RISK
    time_of_day_risk: dict[str, float | None] = {}
    incident_count: int = 0


class EvaluationResult(BaseModel):
    level: RiskLevel = RiskLevel.SAFE
    score: float = 0.0
    zone: RiskZoneSchema | None = None  # one of the evaluated zones, not a copy
    inside: bool = False


class RiskCheckRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    latitude: float
    longitude: float
    user_id: str | None = None


class RiskCheckResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    risk_level: RiskLevel
    risk_score: float
    in_risk_zone: bool
    zone_name: str | None = None
    zone_description: str | None = None
    nearby_zones: int = 0
