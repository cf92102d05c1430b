"""Day/night bucketing and per-bucket zone score resolution."""

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

from shelytics.config import settings
from shelytics.schemas.risk import RiskZoneSchema

DAY = "day"
NIGHT = "night"

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Wall-clock now, in ``settings.timezone`` when set, else host local time."""
    if settings.timezone:
        return datetime.now(ZoneInfo(settings.timezone))
    return datetime.now()


def time_bucket(
    moment: datetime,
    night_start: int | None = None,
    night_end: int | None = None,
) -> str:
    """Night covers hours >= night_start or < night_end of the wall clock."""
    start = settings.night_start_hour if night_start is None else night_start
    end = settings.night_end_hour if night_end is None else night_end
    hour = moment.hour
    if hour >= start or hour < end:
        return NIGHT
    return DAY


def weighted_score(zone: RiskZoneSchema, bucket: str) -> float:
    override = zone.time_of_day_risk.get(bucket)
    if override is None:
        return zone.risk_score
    return override
