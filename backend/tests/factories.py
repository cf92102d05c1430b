import math

from shelytics.schemas.risk import RiskLevel, RiskZoneSchema
from shelytics.services.geo import EARTH_RADIUS_M


def make_zone(**kwargs) -> RiskZoneSchema:
    defaults = {
        "id": "zone-1",
        "name": "Test Zone",
        "latitude": 0.0,
        "longitude": 0.0,
        "radius_meters": 1000.0,
        "risk_score": 0.7,
        "risk_level": RiskLevel.AT_RISK,
    }
    defaults.update(kwargs)
    return RiskZoneSchema(**defaults)


def north_of(lat: float, lon: float, meters: float) -> tuple[float, float]:
    """Point `meters` due north along the meridian (negative goes south)."""
    return lat + math.degrees(meters / EARTH_RADIUS_M), lon
