"""Demo zones for installs whose risk_zones table is still empty (central Delhi)."""

from shelytics.schemas.risk import RiskLevel, RiskZoneSchema

SAMPLE_ZONES: tuple[RiskZoneSchema, ...] = (
    RiskZoneSchema(
        id="sample-downtown",
        name="Downtown Area",
        description="Moderate risk area - stay alert",
        latitude=28.6139,
        longitude=77.2090,
        radius_meters=1000,
        risk_score=0.7,
        risk_level=RiskLevel.AT_RISK,
        incident_count=15,
        time_of_day_risk={"night": 0.8, "day": 0.4},
    ),
    RiskZoneSchema(
        id="sample-industrial",
        name="Industrial Zone",
        description="High risk area - avoid if possible",
        latitude=28.6200,
        longitude=77.2150,
        radius_meters=800,
        risk_score=0.85,
        risk_level=RiskLevel.EMERGENCY,
        incident_count=25,
        time_of_day_risk={"night": 0.95, "day": 0.6},
    ),
)


def sample_zones() -> list[RiskZoneSchema]:
    return list(SAMPLE_ZONES)
