import logging

from affiliate_calc.services.tracking import UsageTracker

LOGGER = "affiliate_calc.services.tracking"


def test_record_logs_event_with_metadata(caplog):
    tracker = UsageTracker(enabled=True, tracking_id="G-123")

    with caplog.at_level(logging.INFO, logger=LOGGER):
        tracker.record("app_opened", {"userId": "user_1"})

    assert "Tracking usage: app_opened" in caplog.text
    assert '"userId": "user_1"' in caplog.text
    assert '"tracking_id": "G-123"' in caplog.text
    assert '"timestamp"' in caplog.text


def test_disabled_tracker_does_not_log_at_info(caplog):
    tracker = UsageTracker(enabled=False)

    with caplog.at_level(logging.INFO, logger=LOGGER):
        tracker.record("app_opened", {"userId": "user_1"})

    assert caplog.records == []


def test_record_never_raises(caplog):
    class Unfriendly:
        def keys(self):
            raise RuntimeError("boom")

    tracker = UsageTracker(enabled=True)

    with caplog.at_level(logging.ERROR, logger=LOGGER):
        tracker.record("calculation_completed", Unfriendly())

    assert "Error tracking usage calculation_completed" in caplog.text
