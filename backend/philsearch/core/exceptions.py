"""
Custom Exceptions

Source errors are raised inside adapters and by the orchestrator's
per-source timeout. They are turned into fallback or empty results at
the adapter boundary and never reach callers of the retrieval pipeline.
Synthesis errors are turned into the fallback answer.
"""
from typing import Optional


class PhilSearchError(Exception):
    """Base exception for all application errors."""
    pass


# === Data Source Errors ===

class SourceError(PhilSearchError):
    """A source could not produce results. Message is prefixed with the source name."""
    def __init__(self, source_name: str, message: str):
        self.source_name = source_name
        self.message = message
        super().__init__(f"{source_name}: {message}")


class SourceTimeoutError(SourceError):
    def __init__(self, source_name: str, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(source_name, f"no response within {timeout_seconds}s")


class SourceRateLimitError(SourceError):
    """HTTP 429. `retry_after` comes from the Retry-After header when present."""
    def __init__(self, source_name: str, retry_after: Optional[int] = None):
        self.retry_after = retry_after
        suffix = f" (retry after {retry_after}s)" if retry_after else ""
        super().__init__(source_name, f"rate limited{suffix}")


class SourceHTTPError(SourceError):
    def __init__(self, source_name: str, status_code: int, detail: Optional[str] = None):
        self.status_code = status_code
        message = f"HTTP {status_code}"
        if detail:
            message = f"{message} {detail}"
        super().__init__(source_name, message)


class SourceParseError(SourceError):
    """Response was not JSON or not shaped as expected."""
    def __init__(self, source_name: str, detail: Optional[str] = None):
        super().__init__(source_name, f"malformed response: {detail}" if detail else "malformed response")


class SourceCredentialsError(SourceError):
    def __init__(self, source_name: str):
        super().__init__(source_name, "API credentials not configured")


# === Synthesis Errors ===

class SynthesisError(PhilSearchError):
    """Base exception for answer synthesis errors."""
    pass


class LLMError(SynthesisError):
    """Language model unavailable, failed, or returned nothing usable."""
    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(f"Language model call failed: {detail}" if detail else "Language model call failed")
