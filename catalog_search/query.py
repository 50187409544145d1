# catalog_search/query.py
"""
Main search pipeline for the catalog search engine.

Pipeline steps:
  1. Tokenize the (trimmed, lower-cased) query on whitespace
  2. Expand every token with its synonym group
  3. Score every catalog item (phrase pass + per-term pass)
  4. Keep the hits and sort them by score, catalog order on ties
  5. Derive category facets (matched categories, per-category counts)
  6. "Did you mean?" suggestions when nothing matched

Returned structure: an immutable SearchOutcome
  (query, results, scored, matched_categories, result_count_by_category, suggestions)

The pipeline is a pure function of (query, items, categories); callers can
memoize on those inputs.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from .expand import SYNONYM_GROUPS, expand_query_terms, tokenize_query
from .models import CatalogCategory, CatalogItem, ScoredItem, SearchOutcome
from .scorer import score_item
from .suggest import DEFAULT_MAX_SUGGESTIONS, generate_suggestions

# Module-level logger
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DEFAULT_POPULAR_LIMIT = 4


def search_catalog(
    query: str,
    items: Sequence[CatalogItem],
    categories: Sequence[CatalogCategory],
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    synonyms: Mapping[str, Tuple[str, ...]] = SYNONYM_GROUPS,
) -> SearchOutcome:
    """
    Run the full catalog search pipeline.

    Args:
        query: the user's query; surrounding whitespace is ignored.
        items: catalog items to rank.
        categories: category list (facets and category matching).
        max_suggestions: cap on "did you mean" suggestions.
        synonyms: synonym table for query expansion.

    Returns:
        SearchOutcome. A blank query yields the empty outcome (no results,
        no facets, no suggestions).
    """
    trimmed = (query or "").strip()
    if not trimmed:
        return SearchOutcome()

    # ---------------------------
    # 1) + 2) Tokenize and expand
    # ---------------------------
    raw_query = trimmed.lower()
    raw_terms = tokenize_query(raw_query)
    query_terms = expand_query_terms(raw_terms, synonyms)

    # ---------------------------
    # 3) Score every item
    # ---------------------------
    scored: List[ScoredItem] = []
    for item in items:
        hit = score_item(item, query_terms, categories, raw_query, synonyms)
        if hit is not None:
            scored.append(hit)

    # ---------------------------
    # 4) Sort (stable, descending)
    # ---------------------------
    scored.sort(key=lambda s: s.score, reverse=True)
    results = tuple(s.item for s in scored)
    logger.debug("Query %r matched %d/%d items", trimmed, len(results), len(items))

    # ---------------------------
    # 5) Category facets
    # ---------------------------
    counts = Counter(item.category_id for item in results)
    matched = tuple(c for c in categories if c.id in counts)

    # ---------------------------
    # 6) Suggestions (only when nothing matched)
    # ---------------------------
    suggestions: Tuple[str, ...] = ()
    if not results:
        suggestions = tuple(
            generate_suggestions(trimmed, items, categories, max_suggestions=max_suggestions)
        )

    return SearchOutcome(
        query=trimmed,
        results=results,
        scored=tuple(scored),
        matched_categories=matched,
        result_count_by_category=MappingProxyType(dict(counts)),
        suggestions=suggestions,
    )


def popular_categories(
    items: Sequence[CatalogItem],
    categories: Sequence[CatalogCategory],
    limit: int = DEFAULT_POPULAR_LIMIT,
) -> Tuple[CatalogCategory, ...]:
    """
    Categories with the most items, regardless of any search.

    Ties keep the category list order; empty categories may still appear
    when fewer than ``limit`` categories have items.
    """
    counts = Counter(item.category_id for item in items)
    ranked = sorted(categories, key=lambda c: counts.get(c.id, 0), reverse=True)
    return tuple(ranked[: max(limit, 0)])


def items_in_category(
    items: Sequence[CatalogItem], category_id: Optional[str]
) -> Tuple[CatalogItem, ...]:
    """Browse filter: items of one category, or every item when no category is selected."""
    if category_id is None:
        return tuple(items)
    return tuple(item for item in items if item.category_id == category_id)


def highlight_matches(text: str, terms: Sequence[str], marker: str = "**") -> str:
    """
    Wrap query terms found in ``text`` with ``marker`` (Markdown bold by default).
    Longer terms are applied first so multi-word synonyms win over their parts.

    Args:
        text: original item text (title or description)
        terms: query terms, typically the expanded query terms

    Returns:
        Text with every case-insensitive occurrence of a term wrapped.
    """
    if not text:
        return ""

    unique_terms = sorted({t for t in terms if t and t.strip()}, key=lambda s: -len(s))
    if not unique_terms:
        return text

    # A single alternation avoids re-highlighting text inside earlier markers
    pattern = re.compile("|".join(re.escape(t) for t in unique_terms), flags=re.IGNORECASE)
    return pattern.sub(lambda m: f"{marker}{m.group(0)}{marker}", text)
