# catalog_search/__init__.py
"""Fuzzy, synonym-aware search over a small in-memory business catalog."""

from .config import SearchConfig
from .distance import levenshtein
from .expand import SYNONYM_GROUPS, expand_query_terms, expand_synonyms, tokenize_query
from .models import CatalogCategory, CatalogItem, ScoredItem, SearchOutcome, SearchResult
from .query import highlight_matches, items_in_category, popular_categories, search_catalog
from .scorer import score_item
from .session import CatalogSearchSession, ThreadingScheduler
from .suggest import generate_suggestions
from .utils import CatalogFormatError, catalog_from_dict, load_catalog

__all__ = [
    "SYNONYM_GROUPS",
    "CatalogCategory",
    "CatalogFormatError",
    "CatalogItem",
    "CatalogSearchSession",
    "ScoredItem",
    "SearchConfig",
    "SearchOutcome",
    "SearchResult",
    "ThreadingScheduler",
    "catalog_from_dict",
    "expand_query_terms",
    "expand_synonyms",
    "generate_suggestions",
    "highlight_matches",
    "items_in_category",
    "levenshtein",
    "load_catalog",
    "popular_categories",
    "score_item",
    "search_catalog",
    "tokenize_query",
]
