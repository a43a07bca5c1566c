"""
Ask API Schemas

Request/response models for the question answering endpoint.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .subfields import Subfield


class AskRequest(BaseModel):
    """Request to answer a philosophical question"""
    question: str = Field(..., description="The question to answer (10-500 characters)")
    limit: Optional[int] = Field(default=None, ge=1, le=20, description="Maximum number of sources to cite (default from settings)")

    @field_validator("question")
    @classmethod
    def _question_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 10:
            raise ValueError("Question too short (minimum 10 characters)")
        if len(value) > 500:
            raise ValueError("Question too long (maximum 500 characters)")
        return value


class SourceCitation(BaseModel):
    """A paper cited in an answer"""
    title: str
    authors: str
    url: str
    year: Optional[int] = None


class AnswerResponse(BaseModel):
    """Synthesized answer with the papers it was grounded on"""
    question: str
    answer: str
    sources: List[SourceCitation] = Field(default_factory=list)
    subfield: Optional[Subfield] = None
    total_candidates: int = Field(default=0, description="Raw papers retrieved before deduplication")
    model: str = Field(description="Model that produced the answer, or 'fallback'")
