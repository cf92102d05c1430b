from datetime import datetime

from pydantic import BaseModel

from shelytics.schemas.incident import IncidentSchema
from shelytics.schemas.risk import RiskZoneSchema


class DashboardStats(BaseModel):
    total_incidents: int = 0
    active_incidents: int = 0
    total_users: int = 0
    risk_zones: int = 0


class DashboardResponse(BaseModel):
    as_of: datetime
    stats: DashboardStats
    zones: list[RiskZoneSchema] = []
    recent_incidents: list[IncidentSchema] = []
