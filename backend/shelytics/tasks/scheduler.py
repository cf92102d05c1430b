"""APScheduler setup for periodic location logging from a live tracker."""

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from shelytics.config import settings
from shelytics.services.live_tracker import LiveRiskTracker

logger = logging.getLogger(__name__)

_scheduler: BackgroundScheduler | None = None


def _run_location_log(tracker: LiveRiskTracker):
    # log_location swallows its own failures; this guards the job thread only
    try:
        tracker.log_location()
    except Exception as e:
        logger.error("Location log job failed: %s", e)


def start_location_logging(
    tracker: LiveRiskTracker, interval_seconds: int | None = None,
) -> BackgroundScheduler:
    global _scheduler
    interval = interval_seconds or settings.location_log_interval_seconds
    if _scheduler is not None:
        stop_location_logging()

    _scheduler = BackgroundScheduler()
    _scheduler.add_job(
        _run_location_log,
        "interval",
        seconds=interval,
        args=[tracker],
        id="location_log",
        name="Live location logging",
        max_instances=1,
    )
    _scheduler.start()
    logger.info("Scheduler started: location log every %d s", interval)
    return _scheduler


def stop_location_logging():
    global _scheduler
    if _scheduler:
        _scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
        _scheduler = None
