"""Tests for logging setup."""

import logging

from stockmaster.utils.logger import DetailsFormatter, get_error_logger, setup_logger


def make_record(**extra):
    record = logging.LogRecord("inventory", logging.WARNING, __file__, 1, "op2 rejected", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestDetailsFormatter:

    def test_plain_message(self):
        formatter = DetailsFormatter("%(levelname)s %(message)s")

        assert formatter.format(make_record()) == "WARNING op2 rejected"

    def test_details_appended(self):
        formatter = DetailsFormatter("%(message)s")

        line = formatter.format(make_record(details={"product_id": "p3", "available": 8}))

        assert line == "op2 rejected [product_id='p3', available=8]"


class TestSetupLogger:

    def test_handlers_added_once(self):
        first = setup_logger("stockmaster-test")
        second = setup_logger("stockmaster-test")

        assert first is second
        assert len(second.handlers) == 1

    def test_error_logger_level(self):
        assert get_error_logger().level == logging.ERROR
