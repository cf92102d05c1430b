from unittest.mock import MagicMock

from shelytics.tasks import scheduler


def test_location_logging_job_lifecycle():
    tracker = MagicMock()
    sched = scheduler.start_location_logging(tracker, interval_seconds=3600)
    try:
        job = sched.get_job("location_log")
        assert job is not None
        assert job.name == "Live location logging"
        assert job.args == (tracker,)
    finally:
        scheduler.stop_location_logging()
    assert scheduler._scheduler is None


def test_job_runs_tracker_log():
    tracker = MagicMock()
    scheduler._run_location_log(tracker)
    tracker.log_location.assert_called_once_with()


def test_job_survives_tracker_errors():
    tracker = MagicMock()
    tracker.log_location.side_effect = RuntimeError("boom")
    scheduler._run_location_log(tracker)
