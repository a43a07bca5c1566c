"""
Multi-Source Retrieval

This package provides paper retrieval functionality by:
1. Detecting the philosophy subfield of the question
2. Fetching from multiple academic sources in parallel
3. Deduplicating near-identical titles and merging in source priority order

Package Structure:
- pipeline.py: search_multi_source / retrieve orchestration
- merge.py: Title similarity, deduplication and merging
- types.py: Progress callback type and constants
"""

# Main pipeline functions - primary public interface
from .pipeline import retrieve, run_retrieval, search_multi_source

# Individual components for advanced usage
from .merge import (
    calculate_title_similarity,
    deduplicate_results,
    merge_results,
    normalize_title,
)

# Types for callers
from .types import ProgressCallback, _noop_callback

__all__ = [
    # Main pipeline
    "retrieve",
    "run_retrieval",
    "search_multi_source",

    # Components
    "calculate_title_similarity",
    "deduplicate_results",
    "merge_results",
    "normalize_title",

    # Types
    "ProgressCallback",
]
