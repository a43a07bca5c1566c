"""
Progress Event Schemas

Steps reported by the retrieval pipeline through the on_progress
callback passed in by the caller.
"""
from enum import Enum


class ProgressStep(str, Enum):
    """All possible steps in the retrieval pipeline."""
    DETECTING_SUBFIELD = "detecting_subfield"
    SEARCHING_SOURCES = "searching_sources"
    DEDUPLICATING = "deduplicating"
    COMPLETE = "complete"

