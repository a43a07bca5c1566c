"""Tests for core/exceptions.py - Custom exception hierarchy."""
import pytest


class TestBaseExceptions:
    """Test the base exception classes."""

    def test_base_error_is_exception(self):
        """Base error should inherit from Exception."""
        from philsearch.core.exceptions import PhilSearchError

        assert issubclass(PhilSearchError, Exception)

    def test_base_error_message(self):
        """Base error should store message."""
        from philsearch.core.exceptions import PhilSearchError

        error = PhilSearchError("Test error message")
        assert str(error) == "Test error message"


class TestSourceExceptions:
    """Test source-related exceptions."""

    def test_source_error_includes_source_name(self):
        """SourceError should include source name in message."""
        from philsearch.core.exceptions import SourceError

        error = SourceError("CrossRef", "Connection failed")
        assert "CrossRef" in str(error)
        assert "Connection failed" in str(error)
        assert error.source_name == "CrossRef"

    def test_source_timeout_error(self):
        """SourceTimeoutError should include timeout duration."""
        from philsearch.core.exceptions import SourceTimeoutError

        error = SourceTimeoutError("Semantic Scholar", 10.0)
        assert "Semantic Scholar" in str(error)
        assert "10" in str(error)
        assert error.timeout_seconds == 10.0

    def test_source_rate_limit_error(self):
        """SourceRateLimitError should include retry_after."""
        from philsearch.core.exceptions import SourceRateLimitError

        error = SourceRateLimitError("Semantic Scholar", 60)
        assert "60" in str(error)
        assert error.retry_after == 60

    def test_source_http_error(self):
        from philsearch.core.exceptions import SourceHTTPError

        error = SourceHTTPError("CORE", 503, "Service Unavailable")
        assert "HTTP 503" in str(error)
        assert error.status_code == 503

    def test_source_credentials_error(self):
        from philsearch.core.exceptions import SourceCredentialsError

        error = SourceCredentialsError("CORE")
        assert "credentials" in str(error)

    def test_source_error_hierarchy(self):
        """All source errors should inherit from SourceError."""
        from philsearch.core.exceptions import (
            SourceCredentialsError,
            SourceError,
            SourceHTTPError,
            SourceParseError,
            SourceRateLimitError,
            SourceTimeoutError,
        )

        for error_class in (
            SourceTimeoutError,
            SourceRateLimitError,
            SourceHTTPError,
            SourceParseError,
            SourceCredentialsError,
        ):
            assert issubclass(error_class, SourceError)


class TestSynthesisExceptions:
    """Test synthesis-related exceptions."""

    def test_llm_error(self):
        """LLMError should carry its detail."""
        from philsearch.core.exceptions import LLMError, SynthesisError

        error = LLMError("empty response")
        assert "empty response" in str(error)
        assert error.detail == "empty response"
        assert isinstance(error, SynthesisError)

    def test_llm_error_without_detail(self):
        from philsearch.core.exceptions import LLMError

        assert str(LLMError()) == "Language model call failed"
