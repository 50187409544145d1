# catalog_search/expand.py
"""
Query expansion utilities for catalog search.

This module broadens a user query with domain synonyms so that, for example,
"veg" also finds items titled "Veggie Wrap" and "drink" also finds "Iced Tea".
Expansion is exact-token only: a token either belongs to a synonym group or
is passed through untouched.

Functions:
    tokenize_query: Lower-case, whitespace-split tokenizer.
    expand_synonyms: Expand one token with its synonym group(s).
    expand_query_terms: Flatten the expansion of several raw tokens.
"""

import logging
import re
from types import MappingProxyType
from typing import Iterable, List, Mapping, Tuple

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# Synonym groups keyed by their head term. Tuned for short menu/product names.
SYNONYM_GROUPS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "veg": ("vegetarian", "veggie", "plant-based"),
        "non-veg": ("nonveg", "meat", "chicken", "fish", "egg"),
        "spicy": ("hot", "chili", "chilli"),
        "drink": ("beverage", "juice", "shake", "smoothie", "tea", "coffee"),
        "sweet": ("dessert", "cake", "pastry", "ice cream"),
        "snack": ("starter", "appetizer", "finger food"),
        "combo": ("meal", "platter", "thali"),
        "pizza": ("pie",),
        "burger": ("sandwich",),
        "rice": ("biryani", "pulao", "fried rice"),
        "bread": ("naan", "roti", "paratha", "chapati"),
        "new": ("latest", "recent"),
        "bestseller": ("popular", "best", "top", "trending", "best seller"),
        "featured": ("special", "recommended", "chef"),
    }
)

_WHITESPACE = re.compile(r"\s+")


def tokenize_query(text: str) -> List[str]:
    """
    Split a query into lower-cased tokens.

    Args:
        text (str): raw query text.

    Returns:
        List[str]: non-empty tokens in query order (duplicates kept).
    """
    if not text:
        return []
    return [t for t in _WHITESPACE.split(text.lower()) if t]


def expand_synonyms(
    token: str, groups: Mapping[str, Tuple[str, ...]] = SYNONYM_GROUPS
) -> List[str]:
    """
    Expand a single token with every synonym group it belongs to.

    The token may match a group through its head term or any member. The
    token itself always comes first.

    Args:
        token (str): query token (case-insensitive).
        groups: synonym table, head term -> members.

    Returns:
        List[str]: lower-cased terms, unique, token first.
    """
    lower = token.lower()
    expanded: List[str] = [lower]

    for head, members in groups.items():
        if lower == head or lower in members:
            expanded.append(head)
            expanded.extend(members)

    # dict.fromkeys keeps first-seen order
    return list(dict.fromkeys(expanded))


def expand_query_terms(
    raw_terms: Iterable[str], groups: Mapping[str, Tuple[str, ...]] = SYNONYM_GROUPS
) -> List[str]:
    """
    High-level query expansion.

    Args:
        raw_terms: tokens produced by :func:`tokenize_query`.
        groups: synonym table.

    Returns:
        List[str]: every raw term followed by its synonyms. Terms shared by
        several raw tokens appear more than once.
    """
    terms: List[str] = []
    for raw in raw_terms:
        terms.extend(expand_synonyms(raw, groups))
    logger.debug("Expanded query terms: %s", terms)
    return terms
