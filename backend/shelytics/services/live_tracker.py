"""Live risk tracking on the device side.

Each accepted location update re-runs the shared evaluator against the
loaded zone set and replaces the previous result. Nothing here raises into
the caller: zone load failures fall back to the default zones, evaluation
failures degrade to a safe result, and location logging is best-effort.
"""

import logging
from collections.abc import Awaitable, Callable

from shelytics.database import SessionLocal
from shelytics.schemas.risk import EvaluationResult, RiskZoneSchema
from shelytics.schemas.user import LocationState, LocationUpdate
from shelytics.services import risk_engine, store
from shelytics.services.geo import haversine_m
from shelytics.services.time_weighting import Clock, system_clock
from shelytics.services.zone_source import ZoneProvider
from shelytics.zones.samples import sample_zones

logger = logging.getLogger(__name__)

ZoneLoader = Callable[[], Awaitable[list[RiskZoneSchema]]]
LocationLogger = Callable[[str, LocationState], None]


def db_location_logger(user_id: str, state: LocationState) -> None:
    db = SessionLocal()
    try:
        store.log_location(db, user_id, state)
    finally:
        db.close()


def derive_speed_kmh(update: LocationUpdate, previous: LocationState | None) -> float:
    """Device speed when reported, else distance over time since the last fix."""
    if update.speed_mps is not None and update.speed_mps >= 0:
        return update.speed_mps * 3.6
    if previous is not None:
        elapsed = (update.timestamp - previous.timestamp).total_seconds()
        if elapsed > 0:
            meters = haversine_m(
                previous.latitude, previous.longitude, update.latitude, update.longitude,
            )
            return meters / elapsed * 3.6
    return 0.0


class LiveRiskTracker:
    def __init__(
        self,
        user_id: str | None = None,
        zone_loader: ZoneLoader | None = None,
        fallback: ZoneProvider = sample_zones,
        clock: Clock = system_clock,
        location_logger: LocationLogger = db_location_logger,
    ):
        self.user_id = user_id
        self.zone_loader = zone_loader
        self.fallback = fallback
        self.clock = clock
        self.location_logger = location_logger

        self.zones: list[RiskZoneSchema] = []
        self.location: LocationState | None = None
        self.result = EvaluationResult()

    async def refresh_zones(self) -> list[RiskZoneSchema]:
        zones: list[RiskZoneSchema] = []
        if self.zone_loader is not None:
            try:
                zones = await self.zone_loader()
            except Exception as e:
                logger.warning("Zone load failed, using default zones: %s", e)
        self.zones = zones or self.fallback()
        if self.location is not None:
            self._evaluate()
        return self.zones

    def update(self, update: LocationUpdate) -> EvaluationResult:
        self.location = LocationState(
            latitude=update.latitude,
            longitude=update.longitude,
            timestamp=update.timestamp,
            speed_kmh=derive_speed_kmh(update, self.location),
            accuracy=update.accuracy,
        )
        return self._evaluate()

    def _evaluate(self) -> EvaluationResult:
        try:
            self.result = risk_engine.evaluate(
                self.location.latitude,
                self.location.longitude,
                self.zones,
                now=self.clock(),
            )
        except Exception as e:
            logger.error("Risk evaluation failed, showing safe: %s", e)
            self.result = EvaluationResult()
        return self.result

    def log_location(self) -> bool:
        """Write the latest fix. Returns False when skipped or failed."""
        if self.user_id is None or self.location is None:
            return False
        try:
            self.location_logger(self.user_id, self.location)
        except Exception as e:
            logger.warning("Location log failed for user %s: %s", self.user_id, e)
            return False
        return True
