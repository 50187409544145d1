# catalog_search/suggest.py
"""
"Did you mean?" suggestions for queries that found nothing.

The vocabulary is every title word longer than two characters plus every
category name, lower-cased. Words within edit distance 3 of the whole query
are proposed, closest first.
"""

import logging
from typing import List, Sequence

from .distance import levenshtein
from .expand import tokenize_query
from .models import CatalogCategory, CatalogItem

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DEFAULT_MAX_SUGGESTIONS = 3
MAX_SUGGESTION_DISTANCE = 3
MIN_WORD_LENGTH = 3


def build_vocabulary(
    items: Sequence[CatalogItem], categories: Sequence[CatalogCategory]
) -> List[str]:
    """
    Collect candidate correction words from the catalog.

    Args:
        items: catalog items (titles are split on whitespace).
        categories: category list (names are taken whole).

    Returns:
        List[str]: unique lower-cased words in first-seen order.
    """
    words = {}
    for item in items:
        for word in tokenize_query(item.title):
            if len(word) >= MIN_WORD_LENGTH:
                words.setdefault(word, None)
    for category in categories:
        name = (category.name or "").lower()
        if len(name) >= MIN_WORD_LENGTH:
            words.setdefault(name, None)
    return list(words)


def generate_suggestions(
    query: str,
    items: Sequence[CatalogItem],
    categories: Sequence[CatalogCategory],
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
) -> List[str]:
    """
    Suggest spelling corrections for ``query``.

    Args:
        query: user query (compared as a whole, lower-cased).
        items: catalog items.
        categories: catalog categories.
        max_suggestions: maximum suggestions to return.

    Returns:
        List of distinct words with 0 < distance <= 3, closest first.
        Empty when nothing in the vocabulary is close enough.
    """
    lower = (query or "").strip().lower()
    if not lower or max_suggestions <= 0:
        return []

    scored = []
    for word in build_vocabulary(items, categories):
        dist = levenshtein(lower, word)
        if 0 < dist <= MAX_SUGGESTION_DISTANCE:
            scored.append((dist, word))

    # sorted() is stable: equal distances keep vocabulary order
    scored = sorted(scored, key=lambda pair: pair[0])
    suggestions = [word for _, word in scored[:max_suggestions]]
    logger.debug("Suggestions for %r: %s", lower, suggestions)
    return suggestions
