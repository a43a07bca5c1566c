"""
Paper Schemas

Unified paper record produced by every source adapter and the
result container handed from adapters to the orchestrator and on
to answer synthesis.
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .subfields import Subfield


UNTITLED = "Untitled"
UNKNOWN_AUTHOR = "Unknown Author"
NO_URL = "#"


class SourceTag(str, Enum):
    """Which adapter (or merge step) produced a record or result."""
    SEMANTIC_SCHOLAR = "semantic-scholar"
    CROSSREF = "crossref"
    CORE = "core"
    OPENALEX = "openalex"
    MULTI_SOURCE = "multi-source"


class PaperRecord(BaseModel):
    """
    Standard paper format used across all sources.

    Records are frozen: the merge engine builds new lists out of
    existing records and never edits them. Authors are a single
    display string ("A, B, C et al.").
    """
    model_config = ConfigDict(frozen=True)

    title: str = UNTITLED
    authors: str = UNKNOWN_AUTHOR
    abstract: Optional[str] = None
    url: str = NO_URL
    year: Optional[int] = None
    categories: Optional[List[str]] = None
    source: SourceTag

    # Quality signals, carried for display only
    citation_count: Optional[int] = None
    venue: Optional[str] = None
    external_id: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_placeholder(cls, value):
        if value is None or not str(value).strip():
            return UNTITLED
        return str(value).strip()

    @field_validator("authors", mode="before")
    @classmethod
    def _authors_placeholder(cls, value):
        if value is None or not str(value).strip():
            return UNKNOWN_AUTHOR
        return value

    @field_validator("url", mode="before")
    @classmethod
    def _url_placeholder(cls, value):
        if value is None or not str(value).strip():
            return NO_URL
        return value


class SourceStats(BaseModel):
    """Per-adapter outcome of one multi-source search."""
    count: int = Field(default=0, ge=0, description="Raw papers returned before deduplication")
    elapsed_ms: Optional[float] = Field(default=None, description="Wall time, None if the adapter failed")


class SearchResult(BaseModel):
    """Search result container with metadata."""
    papers: List[PaperRecord] = Field(default_factory=list)
    total: int = 0
    source: SourceTag = SourceTag.MULTI_SOURCE

    # Filled in by the orchestrator only
    detected_subfield: Optional[Subfield] = None
    source_stats: Dict[str, SourceStats] = Field(default_factory=dict)

    @classmethod
    def empty(cls, source: SourceTag = SourceTag.MULTI_SOURCE) -> "SearchResult":
        return cls(papers=[], total=0, source=source)
