"""Tests for logging helpers."""

import logging

import pytest

from ynab_query.utils.logging_config import LogContext, get_logger, setup_logging


class TestLogging:
    """Tests for logger setup and LogContext."""

    def test_get_logger_namespaced(self) -> None:
        """Test that module loggers live under the package logger."""
        assert get_logger("client").name == "ynab_query.client"
        assert get_logger("ynab_query.client").name == "ynab_query.client"

    def test_setup_logging_level(self) -> None:
        """Test that setup_logging applies the level and console handler."""
        logger = setup_logging(level="debug", console_output=True)
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_log_context_masks_token(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that sensitive context values are masked."""
        logger = logging.getLogger("ynab_query.test")
        with caplog.at_level(logging.DEBUG, logger="ynab_query.test"):
            with LogContext(logger, "fetch", budget_id="b1", token="s3cret"):
                pass

        assert "budget_id=b1" in caplog.text
        assert "s3cret" not in caplog.text
        assert "fetch completed in" in caplog.text

    def test_log_context_records_outcome_and_timing(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that recorded fields and elapsed time reach the completion line."""
        logger = logging.getLogger("ynab_query.test")
        with caplog.at_level(logging.INFO, logger="ynab_query.test"):
            with LogContext(logger, "fetch", budget_id="b1") as log:
                log.record(transactions=3)

        assert log.elapsed_ms is not None and log.elapsed_ms >= 0
        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.INFO
        assert caplog.records[0].getMessage().endswith("(budget_id=b1, transactions=3)")

    def test_log_context_failure_logged_and_propagated(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that failures are logged with their cause and not suppressed."""
        logger = logging.getLogger("ynab_query.test")
        with caplog.at_level(logging.INFO, logger="ynab_query.test"):
            with pytest.raises(RuntimeError):
                with LogContext(logger, "fetch", budget_id="b1"):
                    raise RuntimeError("boom")

        assert caplog.records[-1].levelno == logging.ERROR
        assert "fetch failed after" in caplog.text
        assert "RuntimeError: boom" in caplog.text
        # No traceback outside debug level
        assert not caplog.records[-1].exc_info
