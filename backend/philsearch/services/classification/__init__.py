"""
Philosophy subfield classification.

Maps a question to a subfield with keyword tables and fuzzy matching.
The detected subfield scopes the queries sent to academic sources.
"""
from .detector import (
    detect_subfield,
    extract_search_terms,
    normalize_text,
    tokenize,
)
from .keywords import (
    SUBFIELD_KEYWORDS,
    SUBFIELD_SEARCH_TERMS,
    SubfieldKeywords,
    get_subfield_search_terms,
)

__all__ = [
    "detect_subfield",
    "extract_search_terms",
    "normalize_text",
    "tokenize",
    "SUBFIELD_KEYWORDS",
    "SUBFIELD_SEARCH_TERMS",
    "SubfieldKeywords",
    "get_subfield_search_terms",
]
