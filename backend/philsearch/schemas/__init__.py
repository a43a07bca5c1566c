"""
Schemas Module

Contains all Pydantic models (DTOs) for:
- Paper records and search results shared by sources and the pipeline
- Subfield detection results
- API request/response validation
- Pipeline progress events
"""
from .subfields import Subfield, SubfieldDetection, CORE_SUBFIELDS
from .papers import PaperRecord, SearchResult, SourceStats, SourceTag
from .ask import AskRequest, AnswerResponse, SourceCitation
from .events import ProgressStep

__all__ = [
    "Subfield",
    "SubfieldDetection",
    "CORE_SUBFIELDS",
    "PaperRecord",
    "SearchResult",
    "SourceStats",
    "SourceTag",
    "AskRequest",
    "AnswerResponse",
    "SourceCitation",
    "ProgressStep",
]
