# catalog_search/distance.py
"""
Edit-distance helpers used for typo tolerance.

The distance itself comes from RapidFuzz (linear memory, C implementation),
which keeps fuzzy matching cheap enough to run on every keystroke across
every title word of the catalog.

Functions:
    levenshtein: Levenshtein distance between two strings.
    max_title_distance: allowed distance for fuzzy title-word matches.
    max_category_distance: allowed distance for fuzzy category matches.
"""

from rapidfuzz.distance import Levenshtein


def levenshtein(a: str, b: str) -> int:
    """
    Minimum number of single-character insertions, deletions or substitutions
    turning ``a`` into ``b``.

    Comparison is case-sensitive; callers lower-case both sides first.

    Args:
        a (str): source string.
        b (str): target string.

    Returns:
        int: non-negative edit distance.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)
    return int(Levenshtein.distance(a, b))


def max_title_distance(term: str) -> int:
    """Typo budget for matching a query term against a title word."""
    if len(term) <= 4:
        return 1
    if len(term) <= 7:
        return 2
    return 3


def max_category_distance(term: str) -> int:
    """Typo budget for matching a query term against a whole category name."""
    return 1 if len(term) <= 4 else 2
