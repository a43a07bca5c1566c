"""
Common types and utilities for the retrieval pipeline.
"""
from typing import Callable, Optional
from philsearch.schemas.events import ProgressStep

# Type alias for progress callbacks
ProgressCallback = Callable[[ProgressStep, str, Optional[str]], None]

# Papers requested from each source, as a multiple of the final limit
OVERFETCH_FACTOR = 2


def _noop_callback(step: ProgressStep, message: str, detail: Optional[str] = None):
    """Default no-op callback when none provided."""
    pass
