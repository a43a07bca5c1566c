import re
from typing import List, Optional


MAX_QUESTION_LENGTH = 500

# Question words dropped before building a plain search string
_QUERY_STOP_WORDS = {
    'what', 'is', 'are', 'the', 'a', 'an', 'how', 'why', 'when', 'where',
    'who', 'which', 'can', 'could', 'would', 'should', 'do', 'does',
    'did', 'will', 'was', 'were', 'been', 'being', 'have', 'has', 'had',
    'about', 'according', 'to', 'of', 'for', 'in', 'on', 'at', 'by',
}


def levenshtein_distance(first: str, second: str, max_distance: Optional[int] = None) -> int:
    """
    Minimum number of single-character insertions, deletions or
    substitutions needed to turn `first` into `second`.

    With `max_distance` only the diagonal band of that width is
    computed. Distances up to `max_distance` are exact; anything larger
    comes back as `max_distance + 1`.
    """
    if first == second:
        return 0
    if max_distance is None:
        max_distance = max(len(first), len(second))
    over = max_distance + 1
    if abs(len(first) - len(second)) > max_distance:
        return over
    if not first:
        return len(second)
    if not second:
        return len(first)

    width = len(second)
    previous = [j if j <= max_distance else over for j in range(width + 1)]
    for i, a in enumerate(first, 1):
        low = max(1, i - max_distance)
        high = min(width, i + max_distance)
        current = [over] * (width + 1)
        if i <= max_distance:
            current[0] = i
        for j in range(low, high + 1):
            cost = 0 if a == second[j - 1] else 1
            current[j] = min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
                over,
            )
        if min(current[low - 1:high + 1]) > max_distance:
            return over
        previous = current
    return previous[-1]


def sanitize_question(question: str) -> str:
    """Trim, collapse whitespace and cap a question at 500 characters."""
    return re.sub(r'\s+', ' ', question.strip())[:MAX_QUESTION_LENGTH]


def extract_query_terms(question: str, max_terms: int = 5) -> str:
    """
    Reduce a question to a short keyword query.

    Drops question words and anything of three letters or fewer,
    then keeps the first `max_terms` words.
    """
    words = re.sub(r'[^\w\s]', ' ', question.lower()).split()
    terms: List[str] = [w for w in words if len(w) > 3 and w not in _QUERY_STOP_WORDS]
    return ' '.join(terms[:max_terms])
