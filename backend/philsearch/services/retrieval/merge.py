"""
Paper deduplication and merging.

The same paper often comes back from several sources with slightly
different titles ("The Nature of Truth" vs "the nature of truth!").
Titles are compared by normalized edit distance and anything above the
threshold is treated as a duplicate of the paper already kept.

Deduplication is greedy and order-preserving: papers from earlier
lists (higher priority sources) always survive over later ones.
"""
import re
from collections import Counter
from typing import List, NamedTuple, Optional, Sequence

from philsearch.core.logging import get_logger
from philsearch.schemas.papers import PaperRecord
from philsearch.tools.text_processing import levenshtein_distance

logger = get_logger(__name__)

DUPLICATE_THRESHOLD = 0.8


def normalize_title(title: str) -> str:
    """Lowercase, drop punctuation, collapse whitespace."""
    title = re.sub(r"[^\w\s]", "", (title or "").lower())
    return re.sub(r"\s+", " ", title).strip()


def calculate_title_similarity(title1: str, title2: str) -> float:
    """
    Similarity between two titles from 0.0 (different) to 1.0 (identical).

    1 - levenshtein / longer length, computed on normalized titles.
    Two titles that normalize to nothing score 0.0.
    """
    normalized1 = normalize_title(title1)
    normalized2 = normalize_title(title2)

    max_length = max(len(normalized1), len(normalized2))
    if max_length == 0:
        return 0.0

    if normalized1 == normalized2:
        return 1.0

    distance = levenshtein_distance(normalized1, normalized2)
    return 1 - (distance / max_length)


class _TitleKey(NamedTuple):
    """Normalized title plus its character counts, computed once per paper."""
    text: str
    counts: Counter


def _title_key(title: str) -> _TitleKey:
    text = normalize_title(title)
    return _TitleKey(text, Counter(text))


def _similarity_above(first: _TitleKey, second: _TitleKey, threshold: float) -> Optional[float]:
    """
    Same result as `calculate_title_similarity(...) > threshold`, but
    pairs that cannot reach the threshold are rejected before the full
    edit distance is computed.

    Returns the similarity when the pair is a duplicate, else None.
    """
    max_length = max(len(first.text), len(second.text))
    if max_length == 0:
        return 0.0 if 0.0 > threshold else None
    if first.text == second.text:
        return 1.0 if 1.0 > threshold else None

    # Largest distance that can still be a duplicate, plus one for float rounding
    bound = max(int((1 - threshold) * max_length) + 1, 0)
    if abs(len(first.text) - len(second.text)) > bound:
        return None
    # Characters present in one title but not the other each cost at least one edit
    missing = max(sum((first.counts - second.counts).values()), sum((second.counts - first.counts).values()))
    if missing > bound:
        return None

    distance = levenshtein_distance(first.text, second.text, max_distance=bound)
    if distance > bound:
        return None
    similarity = 1 - (distance / max_length)
    return similarity if similarity > threshold else None


def deduplicate_results(
    papers: Sequence[PaperRecord],
    threshold: float = DUPLICATE_THRESHOLD,
) -> List[PaperRecord]:
    """
    Remove papers whose title is more than `threshold` similar to one
    already kept. First seen wins.

    Args:
        papers: Papers in priority order (possibly with duplicates)
        threshold: Similarity above which two titles are duplicates

    Returns:
        New list of unique papers; the input is not modified
    """
    unique_papers: List[PaperRecord] = []
    unique_keys: List[_TitleKey] = []

    for paper in papers:
        key = _title_key(paper.title)
        duplicate_of = None
        similarity = None

        for existing, existing_key in zip(unique_papers, unique_keys):
            similarity = _similarity_above(key, existing_key, threshold)
            if similarity is not None:
                duplicate_of = existing
                break

        if duplicate_of is not None:
            # TODO: prefer the higher citation_count once ranking by citations is agreed on
            logger.debug(
                f"Duplicate detected: \"{paper.title[:60]}\" ~= \"{duplicate_of.title[:60]}\" "
                f"({similarity:.0%} similar)"
            )
            continue

        unique_papers.append(paper)
        unique_keys.append(key)

    removed = len(papers) - len(unique_papers)
    logger.info(f"Deduplication: {len(papers)} -> {len(unique_papers)} papers ({removed} duplicates removed)")

    return unique_papers


def merge_results(
    paper_lists: Sequence[Sequence[PaperRecord]],
    limit: int,
    threshold: float = DUPLICATE_THRESHOLD,
) -> List[PaperRecord]:
    """
    Merge result lists from several sources.

    Lists are concatenated in the given priority order, deduplicated,
    and only then cut to `limit`.
    """
    all_papers = [paper for papers in paper_lists for paper in papers]
    unique_papers = deduplicate_results(all_papers, threshold=threshold)
    return unique_papers[:max(limit, 0)]
