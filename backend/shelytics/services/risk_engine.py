"""Zone risk evaluation for a single point.

For each zone the distance d from the point to the zone centre decides:
  Inside:      d <= radius                 -> time-weighted zone score, zone level
  Approaching: radius < d <= 1.5 * radius  -> 0.5 * base score, level at_risk

Selection:
- The highest weighted score among contained zones wins (first zone to reach
  a score keeps it on ties).
- An approach only applies while the result is still safe, and only when it
  beats the current score. The strongest approach candidate is the one used.

Both the /risk/check endpoint and the live tracker call evaluate(), so a
point and zone set give the same answer on either side.
"""

from collections.abc import Iterable
from datetime import datetime

from shelytics.schemas.risk import EvaluationResult, RiskLevel, RiskZoneSchema
from shelytics.services.geo import haversine_m
from shelytics.services.time_weighting import Clock, system_clock, time_bucket, weighted_score

APPROACH_RADIUS_FACTOR = 1.5
APPROACH_SCORE_FACTOR = 0.5


def evaluate(
    latitude: float,
    longitude: float,
    zones: Iterable[RiskZoneSchema],
    now: datetime | None = None,
    clock: Clock = system_clock,
) -> EvaluationResult:
    bucket = time_bucket(now if now is not None else clock())

    result = EvaluationResult()
    approach: tuple[float, RiskZoneSchema] | None = None

    for zone in zones:
        distance = haversine_m(latitude, longitude, zone.latitude, zone.longitude)

        if distance <= zone.radius_meters:
            score = weighted_score(zone, bucket)
            if score > result.score:
                result = EvaluationResult(
                    level=zone.risk_level, score=score, zone=zone, inside=True,
                )
        elif distance <= zone.radius_meters * APPROACH_RADIUS_FACTOR:
            score = zone.risk_score * APPROACH_SCORE_FACTOR
            if approach is None or score > approach[0]:
                approach = (score, zone)

    if approach is not None:
        score, zone = approach
        if score > result.score and result.level == RiskLevel.SAFE:
            result = EvaluationResult(
                level=RiskLevel.AT_RISK, score=score, zone=zone, inside=False,
            )

    return result

