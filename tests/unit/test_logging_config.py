"""Tests for logging_config.py module."""

import logging
from unittest.mock import patch

from ircconnector.logging_config import (
    ErrorAggregator,
    LoggerConfigurator,
    error_aggregator,
    log_structured_error,
)


class TestErrorAggregator:
    def test_records_and_summarises(self):
        agg = ErrorAggregator()

        agg.record_error("tls", "first", {"server": "a"})
        agg.record_error("tls", "second")

        summary = agg.get_error_summary()
        assert summary["tls"]["total_count"] == 2
        assert summary["tls"]["recent_count"] == 2
        assert summary["tls"]["last_occurrence"]["message"] == "second"

    def test_keeps_bounded_history(self):
        agg = ErrorAggregator()

        for i in range(1005):
            agg.record_error("network", f"e{i}")

        assert len(agg.errors["network"]) == 1000
        assert agg.errors["network"][0]["message"] == "e5"

    def test_summary_report_without_errors(self, caplog):
        caplog.set_level(logging.INFO)

        ErrorAggregator().log_summary_report()

        assert "No errors recorded" in caplog.text


class TestLogStructuredError:
    def test_message_contains_type_exception_and_context(self, caplog):
        caplog.set_level(logging.ERROR)

        log_structured_error(
            "tls", "Upgrade failed", exception=ValueError("bad"), context={"server": "x"}
        )

        assert "[TLS] Upgrade failed | Exception: ValueError: bad | Context: server=x" in caplog.text
        assert error_aggregator.get_error_summary()["tls"]["total_count"] == 1


class TestLoggerConfigurator:
    def test_configure_sets_debug_level_from_env(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "yes")
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            with patch("ircconnector.logging_config.atexit.register") as register:
                LoggerConfigurator().configure()
            assert root.level == logging.DEBUG
            register.assert_called_once()
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_summary_on_exit_can_be_disabled(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            with patch("ircconnector.logging_config.atexit.register") as register:
                LoggerConfigurator({"summary_on_exit": False}).configure()
            register.assert_not_called()
            assert root.level == logging.INFO
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_formatter_colors_levels(self):
        formatter = LoggerConfigurator().build_formatter()
        record = logging.LogRecord(
            name="t", level=logging.ERROR, pathname="", lineno=0, msg="oops", args=(), exc_info=None
        )

        formatted = formatter.format(record)

        assert "\033[31m" in formatted
        assert "oops" in formatted
