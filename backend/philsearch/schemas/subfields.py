"""
Subfield Schemas

Philosophy subfield identifiers and the classifier's result record.
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Subfield(str, Enum):
    """
    Philosophy subfields supported by keyword detection.

    Declaration order is the keyword table order, which decides
    ties between equally scored subfields.
    """
    EPISTEMOLOGY = "epistemology"
    METAPHYSICS = "metaphysics"
    ETHICS = "ethics"
    PHILOSOPHY_OF_MIND = "philosophy-of-mind"
    POLITICAL_PHILOSOPHY = "political-philosophy"
    AESTHETICS = "aesthetics"
    LOGIC = "logic"
    PHILOSOPHY_OF_SCIENCE = "philosophy-of-science"
    EXISTENTIALISM = "existentialism"


CORE_SUBFIELDS = (Subfield.EPISTEMOLOGY, Subfield.METAPHYSICS)


class SubfieldDetection(BaseModel):
    """Result of subfield detection for one question."""
    primary_subfield: Optional[Subfield] = None
    confidence: float = Field(default=0.0, ge=0.0, description="matched keywords / 5, not capped at 1")
    matched_keywords: List[str] = Field(default_factory=list)
    all_matches: Dict[str, int] = Field(default_factory=dict, description="subfield -> distinct keyword matches")

    @classmethod
    def none(cls, all_matches: Optional[Dict[str, int]] = None) -> "SubfieldDetection":
        """Detection that settled on no subfield."""
        return cls(primary_subfield=None, confidence=0.0, matched_keywords=[], all_matches=all_matches or {})
