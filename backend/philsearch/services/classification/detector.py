"""
Philosophy subfield detection.

Classifies a free-text question into one of the nine philosophy
subfields by counting distinct keyword hits per subfield.

Matching rules:
- Single-word keywords match a question token exactly or within
  Levenshtein distance 1 (one typo or variant).
- Multi-word keywords match only by substring containment against
  the whole normalized question.
- Each keyword counts at most once per subfield.
"""
import re
from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from philsearch.core.logging import get_logger
from philsearch.schemas.subfields import CORE_SUBFIELDS, Subfield, SubfieldDetection
from philsearch.tools.text_processing import levenshtein_distance

from .keywords import SUBFIELD_KEYWORDS, SubfieldKeywords

logger = get_logger(__name__)

STOP_WORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
    "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
    "to", "was", "will", "with", "what", "when", "where", "who", "why",
    "how", "can", "could", "should", "would", "do", "does", "did",
})

MIN_QUESTION_LENGTH = 3

# Match count that maps to confidence 1.0
CONFIDENCE_SCALE = 5


class _SubfieldScore(NamedTuple):
    subfield: Subfield
    match_count: int
    matched: List[str]
    score: float


def normalize_text(text: str) -> str:
    """Lowercase, turn punctuation (except hyphens) into spaces, collapse whitespace."""
    text = re.sub(r"[^\w\s-]", " ", text.lower())
    return re.sub(r"\s+", " ", text).strip()


def tokenize(text: str) -> List[str]:
    """Split normalized text into words, dropping stop words."""
    return [word for word in normalize_text(text).split(" ") if word and word not in STOP_WORDS]


def fuzzy_match(keyword: str, token: str) -> bool:
    """Exact match, or edit distance <= 1 for single-word keywords."""
    if keyword == token:
        return True
    if " " in keyword:
        return False
    return levenshtein_distance(keyword, token, max_distance=1) <= 1


def count_keyword_matches(
    tokens: Sequence[str],
    keywords: Sequence[str],
    normalized_text: str,
) -> Tuple[int, List[str]]:
    """
    Count distinct keywords found in a question.

    Returns the count and the matched keywords in table order.
    """
    matched: List[str] = []

    for keyword in keywords:
        normalized_keyword = normalize_text(keyword)

        if " " in normalized_keyword:
            if normalized_keyword in normalized_text:
                matched.append(keyword)
            continue

        if any(fuzzy_match(normalized_keyword, token) for token in tokens):
            matched.append(keyword)

    return len(matched), matched


def _accept(entry: _SubfieldScore, all_matches: Dict[str, int]) -> SubfieldDetection:
    return SubfieldDetection(
        primary_subfield=entry.subfield,
        confidence=entry.match_count / CONFIDENCE_SCALE,
        matched_keywords=entry.matched,
        all_matches=all_matches,
    )


def detect_subfield(
    question: str,
    table: Mapping[Subfield, SubfieldKeywords] = SUBFIELD_KEYWORDS,
) -> SubfieldDetection:
    """
    Detect the primary philosophy subfield of a question.

    Subfields are scored by distinct keyword matches times their
    weight. A single match is accepted when the runner-up has no
    match or is tied on one match; two or more matches always win.
    On an exact tie in match count a core subfield (epistemology,
    metaphysics) beats a non-core one.

    Example:
        detect_subfield("What is knowledge and justification?")
        # primary_subfield=epistemology, confidence=0.4
    """
    normalized = normalize_text(question)
    tokens = tokenize(question)

    if len(normalized) < MIN_QUESTION_LENGTH or not tokens:
        return SubfieldDetection.none()

    scores: List[_SubfieldScore] = []
    all_matches: Dict[str, int] = {}

    for subfield, entry in table.items():
        count, matched = count_keyword_matches(tokens, entry.keywords, normalized)
        all_matches[subfield.value] = count
        scores.append(_SubfieldScore(subfield, count, matched, count * entry.weight))

    # sorted() is stable, so equal scores keep table order
    ranked = sorted(scores, key=lambda s: s.score, reverse=True)
    top = ranked[0]
    runner_up: Optional[_SubfieldScore] = ranked[1] if len(ranked) > 1 else None
    runner_up_count = runner_up.match_count if runner_up else 0

    if top.score <= 0 or top.match_count == 0:
        return SubfieldDetection.none(all_matches)

    if top.match_count == 1:
        if runner_up_count == 0:
            detection = SubfieldDetection(
                primary_subfield=top.subfield,
                confidence=min(1.0, top.match_count / CONFIDENCE_SCALE),
                matched_keywords=top.matched,
                all_matches=all_matches,
            )
        elif runner_up_count == 1:
            # Overlapping keywords such as "justice" land here; table order decides
            detection = _accept(top, all_matches)
        else:
            detection = SubfieldDetection.none(all_matches)
        logger.debug(f"Subfield detection (single match): {detection.primary_subfield}")
        return detection

    if (
        runner_up is not None
        and top.match_count == runner_up.match_count
        and runner_up.subfield in CORE_SUBFIELDS
        and top.subfield not in CORE_SUBFIELDS
    ):
        return _accept(runner_up, all_matches)

    return _accept(top, all_matches)


def extract_search_terms(detection: SubfieldDetection, max_terms: int = 3) -> List[str]:
    """Matched keywords worth adding to a search query, at most `max_terms`."""
    if detection.primary_subfield is None:
        return []
    return detection.matched_keywords[:max_terms]
