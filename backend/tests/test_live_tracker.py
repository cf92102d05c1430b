from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from shelytics.schemas.risk import EvaluationResult, RiskLevel
from shelytics.schemas.user import LocationState, LocationUpdate
from shelytics.services import live_tracker
from shelytics.services.live_tracker import LiveRiskTracker, derive_speed_kmh
from factories import make_zone, north_of

NIGHT = datetime(2026, 3, 14, 22, 0)
NOON = datetime(2026, 3, 14, 12, 0)


def _make_update(**kwargs) -> LocationUpdate:
    defaults = {"latitude": 0.0, "longitude": 0.0, "timestamp": NOON}
    defaults.update(kwargs)
    return LocationUpdate(**defaults)


def _loader(zones):
    async def load():
        return zones
    return load


def test_device_speed_is_converted_to_kmh():
    assert derive_speed_kmh(_make_update(speed_mps=10.0), None) == pytest.approx(36.0)


def test_speed_from_previous_fix():
    previous = LocationState(latitude=0.0, longitude=0.0, timestamp=NOON)
    lat, lon = north_of(0.0, 0.0, 100)
    update = _make_update(latitude=lat, longitude=lon, timestamp=NOON + timedelta(seconds=10))
    assert derive_speed_kmh(update, previous) == pytest.approx(36.0)


def test_negative_device_speed_is_ignored():
    assert derive_speed_kmh(_make_update(speed_mps=-1.0), None) == 0.0


def test_speed_without_elapsed_time():
    previous = LocationState(latitude=0.0, longitude=0.0, timestamp=NOON)
    assert derive_speed_kmh(_make_update(latitude=1.0), previous) == 0.0


@pytest.mark.asyncio
async def test_update_evaluates_against_loaded_zones():
    zone = make_zone(risk_score=0.5, time_of_day_risk={"night": 0.9}, risk_level=RiskLevel.EMERGENCY)
    tracker = LiveRiskTracker(zone_loader=_loader([zone]), clock=lambda: NIGHT)
    await tracker.refresh_zones()

    result = tracker.update(_make_update())
    assert result.level == RiskLevel.EMERGENCY
    assert result.score == 0.9
    assert result.zone is zone
    assert result.inside is True
    assert tracker.result is result


@pytest.mark.asyncio
async def test_each_update_supersedes_the_last():
    zone = make_zone(risk_score=0.6)
    tracker = LiveRiskTracker(zone_loader=_loader([zone]), clock=lambda: NOON)
    await tracker.refresh_zones()

    assert tracker.update(_make_update()).inside is True
    lat, lon = north_of(0.0, 0.0, 5000)
    assert tracker.update(_make_update(latitude=lat, longitude=lon)) == EvaluationResult()
    assert tracker.result == EvaluationResult()


@pytest.mark.asyncio
async def test_failed_zone_load_uses_fallback():
    async def broken():
        raise ConnectionError("offline")

    fallback_zone = make_zone(id="fallback")
    tracker = LiveRiskTracker(zone_loader=broken, fallback=lambda: [fallback_zone], clock=lambda: NOON)
    zones = await tracker.refresh_zones()
    assert zones == [fallback_zone]


@pytest.mark.asyncio
async def test_empty_zone_load_uses_sample_zones():
    tracker = LiveRiskTracker(zone_loader=_loader([]), clock=lambda: NOON)
    zones = await tracker.refresh_zones()
    assert {z.name for z in zones} == {"Downtown Area", "Industrial Zone"}


@pytest.mark.asyncio
async def test_refresh_re_evaluates_current_location():
    tracker = LiveRiskTracker(zone_loader=_loader([]), fallback=lambda: [], clock=lambda: NOON)
    await tracker.refresh_zones()
    assert tracker.update(_make_update()).level == RiskLevel.SAFE

    tracker.zone_loader = _loader([make_zone(risk_score=0.7)])
    await tracker.refresh_zones()
    assert tracker.result.level == RiskLevel.AT_RISK


def test_evaluation_failure_degrades_to_safe(monkeypatch):
    def broken(*args, **kwargs):
        raise ValueError("bad zone")

    monkeypatch.setattr(live_tracker.risk_engine, "evaluate", broken)
    tracker = LiveRiskTracker(clock=lambda: NOON)
    tracker.zones = [make_zone()]
    assert tracker.update(_make_update()) == EvaluationResult()


def test_log_location_calls_logger():
    sink = MagicMock()
    tracker = LiveRiskTracker(user_id="user-1", clock=lambda: NOON, location_logger=sink)
    tracker.update(_make_update(speed_mps=2.0, accuracy=5.0))

    assert tracker.log_location() is True
    user_id, state = sink.call_args.args
    assert user_id == "user-1"
    assert state.speed_kmh == pytest.approx(7.2)
    assert state.accuracy == 5.0


def test_log_location_failure_is_swallowed():
    sink = MagicMock(side_effect=RuntimeError("db down"))
    tracker = LiveRiskTracker(user_id="user-1", clock=lambda: NOON, location_logger=sink)
    tracker.update(_make_update())
    assert tracker.log_location() is False


def test_log_location_skipped_without_fix_or_user():
    sink = MagicMock()
    assert LiveRiskTracker(user_id="user-1", location_logger=sink).log_location() is False
    tracker = LiveRiskTracker(location_logger=sink, clock=lambda: NOON)
    tracker.update(_make_update())
    assert tracker.log_location() is False
    sink.assert_not_called()
