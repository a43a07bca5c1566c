"""
Data sources for philosophy paper retrieval.

Each source is implemented in its own module for maintainability.
All searches are async for parallel execution and never raise.

To add a new source:
1. Create a new file (e.g., new_source.py) with a BaseSource subclass
2. Add a SourceTag value for it
3. Register the class in registry.SOURCE_CLASSES
4. Enable it through ENABLED_SOURCES
"""
from .base import BaseSource, build_scoped_query, format_authors
from .core import CoreSource
from .crossref import CrossRefSource
from .openalex import OpenAlexSource
from .registry import SOURCE_CLASSES, build_sources
from .semantic_scholar import SemanticScholarSource

__all__ = [
    "BaseSource",
    "build_scoped_query",
    "format_authors",
    "CoreSource",
    "CrossRefSource",
    "OpenAlexSource",
    "SemanticScholarSource",
    "SOURCE_CLASSES",
    "build_sources",
]
