"""Tests for core/logging.py - Logging configuration."""
import logging

import pytest


@pytest.fixture(autouse=True)
def restore_logging():
    """Put the default configuration back after each test."""
    from philsearch.core.logging import setup_logging

    yield
    setup_logging()


class TestLogging:
    """Test the logging module."""

    def test_get_logger_uses_module_name(self):
        """get_logger should return the named stdlib logger."""
        from philsearch.core.logging import get_logger

        logger = get_logger("philsearch.services.sources.crossref")

        assert isinstance(logger, logging.Logger)
        assert logger is logging.getLogger("philsearch.services.sources.crossref")

    def test_setup_logging_sets_level(self):
        """setup_logging should configure the root log level."""
        from philsearch.core.logging import setup_logging

        setup_logging(level="WARNING")

        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        from philsearch.core.logging import setup_logging

        setup_logging(level="LOUD")

        assert logging.getLogger().level == logging.INFO

    def test_repeated_setup_keeps_one_handler(self):
        """Calling setup_logging twice must not duplicate output."""
        from philsearch.core.logging import setup_logging

        setup_logging("DEBUG")
        setup_logging("DEBUG")

        assert len(logging.getLogger().handlers) == 1

    def test_http_client_loggers_quieted(self):
        """Per-request httpx logs stay below the application's level."""
        from philsearch.core.logging import setup_logging

        setup_logging("DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
