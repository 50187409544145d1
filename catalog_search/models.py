# catalog_search/models.py
"""
Data types shared by the catalog search engine.

Items and categories are immutable snapshots handed over by the data layer;
the search code only reads them. Result containers are frozen as well so a
snapshot handed to the UI can never drift from the query that produced it.

Types:
    CatalogCategory: grouping label (id, name, emoji).
    CatalogItem: one listable entry of a business catalog.
    ScoredItem: an item plus its relevance score and matched field.
    SearchOutcome: output of the pure search pipeline.
    SearchResult: full snapshot exposed by a search session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# Matched-field labels
FIELD_TITLE = "title"
FIELD_DESCRIPTION = "description"
FIELD_TAG = "tag"
FIELD_CATEGORY = "category"


def _empty_counts() -> Mapping[str, int]:
    return MappingProxyType({})


@dataclass(frozen=True)
class CatalogCategory:
    id: str
    name: str
    emoji: Optional[str] = None


@dataclass(frozen=True)
class CatalogItem:
    """
    A single catalog entry.

    Only ``title``, ``description``, ``tags`` and ``category_id`` take part in
    scoring; price, currency, availability and image are carried through.
    """

    id: str
    category_id: str
    title: str
    description: Optional[str] = None
    price: float = 0.0
    currency: str = ""
    tags: Tuple[str, ...] = ()
    is_available: bool = True
    image_url: Optional[str] = None


@dataclass(frozen=True)
class ScoredItem:
    item: CatalogItem
    score: float
    matched_field: str = FIELD_TITLE


@dataclass(frozen=True)
class SearchOutcome:
    """
    Result of one pass of the search pipeline for a single query.

    Attributes:
        query: the (trimmed) query the outcome was computed for.
        results: matching items, most relevant first.
        scored: the same hits with score and matched field (explanations).
        matched_categories: categories owning at least one hit, catalog order.
        result_count_by_category: category id -> number of hits.
        suggestions: spelling corrections, only when ``results`` is empty.
    """

    query: str = ""
    results: Tuple[CatalogItem, ...] = ()
    scored: Tuple[ScoredItem, ...] = ()
    matched_categories: Tuple[CatalogCategory, ...] = ()
    result_count_by_category: Mapping[str, int] = field(default_factory=_empty_counts)
    suggestions: Tuple[str, ...] = ()

    @property
    def result_count(self) -> int:
        return len(self.results)


@dataclass(frozen=True)
class SearchResult:
    """Snapshot of a search session as rendered by the UI."""

    query: str
    debounced_query: str
    results: Tuple[CatalogItem, ...]
    is_searching: bool
    is_active: bool
    result_count: int
    matched_categories: Tuple[CatalogCategory, ...]
    result_count_by_category: Mapping[str, int]
    suggestions: Tuple[str, ...]
    popular_categories: Tuple[CatalogCategory, ...]
