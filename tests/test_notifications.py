"""Tests for the notification feed and its background jobs."""

import threading
from unittest.mock import MagicMock, patch

from stockmaster.scheduler import _make_low_stock_job, _make_purge_job, create_background_scheduler
from stockmaster.services.notifications import NotificationCenter


class TestNotificationCenter:

    def test_newest_first(self, clock):
        center = NotificationCenter(clock=clock)

        center.add("info", "first")
        clock.advance(1)
        center.add("success", "second")

        assert [n.message for n in center.active()] == ["second", "first"]
        assert center.latest().message == "second"

    def test_expiry(self, clock):
        center = NotificationCenter(ttl_seconds=5.0, clock=clock)
        center.add("info", "old")
        clock.advance(3)
        center.add("info", "new")

        clock.advance(2)

        assert [n.message for n in center.active()] == ["new"]
        assert len(center) == 2

        assert center.purge_expired() == 1
        assert len(center) == 1

    def test_remove(self, clock):
        center = NotificationCenter(clock=clock)
        notification = center.add("error", "boom")

        assert center.remove(notification.id)
        assert not center.remove(notification.id)
        assert center.latest() is None

    def test_purge_keeps_concurrent_adds(self, clock):
        center = NotificationCenter(ttl_seconds=5.0, clock=clock)

        def add_many():
            for i in range(500):
                center.add("info", f"n{i}")

        def purge_many():
            for _ in range(500):
                center.purge_expired()

        threads = [threading.Thread(target=add_many), threading.Thread(target=purge_many)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(center) == 500

    def test_ids_are_unique(self, clock):
        center = NotificationCenter(clock=clock)

        ids = {center.add("info", "x").id for _ in range(20)}

        assert len(ids) == 20


class TestBackgroundJobs:

    def test_purge_job(self, service, clock):
        service.notifications.add("info", "stale")
        clock.advance(10)

        _make_purge_job(service)()

        assert len(service.notifications) == 0

    def test_low_stock_job_logs_products(self, service):
        with patch("stockmaster.scheduler.get_inventory_logger") as mock_logger_factory:
            logger = MagicMock()
            mock_logger_factory.return_value = logger

            _make_low_stock_job(service)()

        messages = [call.args[0] for call in logger.warning.call_args_list]
        assert "1 product(s)" in messages[0]
        assert "FG-001 Office Chair" in messages[1]

    def test_scheduler_jobs(self, service):
        scheduler = create_background_scheduler(service)

        job_ids = {job.id for job in scheduler.get_jobs()}

        assert job_ids == {"notification_purge", "low_stock_report"}
        assert not scheduler.running
