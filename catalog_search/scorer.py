# catalog_search/scorer.py
"""
Relevance scoring of a single catalog item against a query.

Two passes are computed and the higher one wins:

  A. Full phrase: the whole query compared with the title and description.
       exact title 110 > title prefix 105 > title substring 100 > description 60
  B. Per term: every expanded query term is scored on its own, using the bands
       exact title 100 > title prefix 90 > title substring 80
       > title word equal 85 / title word prefix 75 (raise only)
       > tag 70 > category substring 65 > description 50
       > fuzzy title word 40 - 5*distance > fuzzy category 25
     Each raw query term takes the best score among its expansions; the raw
     term scores are averaged and a +15 bonus is added when a multi-term query
     matched on every term.

A small bonus for short titles breaks ties in favour of more specific items.
"""

import math
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .distance import levenshtein, max_category_distance, max_title_distance
from .expand import SYNONYM_GROUPS, expand_synonyms, tokenize_query
from .models import (
    FIELD_CATEGORY,
    FIELD_DESCRIPTION,
    FIELD_TAG,
    FIELD_TITLE,
    CatalogCategory,
    CatalogItem,
    ScoredItem,
)

MULTI_TERM_BONUS = 15
LENGTH_BONUS_PIVOT = 50
LENGTH_BONUS_FACTOR = 0.1


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def category_name_for(item: CatalogItem, categories: Sequence[CatalogCategory]) -> str:
    """
    Lower-cased name of the item's category.

    Returns "" when the item points at a category that is not in the list.
    """
    for category in categories:
        if category.id == item.category_id:
            return (category.name or "").lower()
    return ""


def _phrase_score(phrase: str, title: str, description: str) -> Tuple[int, str]:
    if not phrase:
        return 0, FIELD_TITLE
    if title == phrase:
        return 110, FIELD_TITLE
    if title.startswith(phrase):
        return 105, FIELD_TITLE
    if phrase in title:
        return 100, FIELD_TITLE
    if phrase in description:
        return 60, FIELD_DESCRIPTION
    return 0, FIELD_TITLE


def _term_score(
    term: str,
    title: str,
    title_words: List[str],
    description: str,
    tags: Tuple[str, ...],
    category_name: str,
) -> Tuple[int, str]:
    """Best score of one term against one item, with the field that produced it."""
    best = 0
    field = FIELD_TITLE

    if title == term:
        best = 100
    elif title.startswith(term):
        best = 90
    elif term in title:
        best = 80

    # Word-level matches only ever raise the score
    for word in title_words:
        if word == term and best < 85:
            best, field = 85, FIELD_TITLE
        elif word.startswith(term) and best < 75:
            best, field = 75, FIELD_TITLE

    if term in tags and best < 70:
        best, field = 70, FIELD_TAG

    if category_name and term in category_name and best < 65:
        best, field = 65, FIELD_CATEGORY

    if best < 50 and term in description:
        best, field = 50, FIELD_DESCRIPTION

    if best < 40:
        allowed = max_title_distance(term)
        for word in title_words:
            dist = levenshtein(term, word)
            if 0 < dist <= allowed and 40 - 5 * dist > best:
                best, field = 40 - 5 * dist, FIELD_TITLE

    if best < 30 and category_name:
        dist = levenshtein(term, category_name)
        if 0 < dist <= max_category_distance(term) and best < 25:
            best, field = 25, FIELD_CATEGORY

    return best, field


def score_item(
    item: CatalogItem,
    query_terms: Sequence[str],
    categories: Sequence[CatalogCategory],
    raw_query: str = "",
    synonyms: Mapping[str, Tuple[str, ...]] = SYNONYM_GROUPS,
) -> Optional[ScoredItem]:
    """
    Score one catalog item.

    Args:
        item: the catalog item to score (never mutated).
        query_terms: synonym-expanded query terms, lower-cased.
        categories: category list used to resolve ``item.category_id``.
        raw_query: the lower-cased query as typed (phrase pass and raw terms).
        synonyms: synonym table the terms were expanded with.

    Returns:
        ScoredItem with the final score and matched field, or None when
        neither pass matched.
    """
    title = item.title.lower()
    title_words = tokenize_query(title)
    description = (item.description or "").lower()
    tags = tuple(t.lower() for t in item.tags or ())
    category_name = category_name_for(item, categories)
    phrase = raw_query.strip().lower()

    # ---------------------------
    # Pass A: full phrase
    # ---------------------------
    phrase_score, phrase_field = _phrase_score(phrase, title, description)

    # ---------------------------
    # Pass B: per term
    # ---------------------------
    term_scores: Dict[str, Tuple[int, str]] = {}
    for term in query_terms:
        if term and term not in term_scores:
            term_scores[term] = _term_score(
                term, title, title_words, description, tags, category_name
            )

    # Each raw term owns its own expansions; without a raw query every
    # expanded term counts as a raw term of its own.
    if phrase:
        raw_groups = [
            expand_synonyms(raw, synonyms) for raw in dict.fromkeys(tokenize_query(phrase))
        ]
    else:
        raw_groups = [[term] for term in term_scores]

    score_sum = 0
    match_count = 0
    best_term_score = 0
    best_term_field = FIELD_TITLE
    for group in raw_groups:
        raw_best, raw_field = 0, FIELD_TITLE
        for term in group:
            score, field = term_scores.get(term, (0, FIELD_TITLE))
            if score > raw_best:
                raw_best, raw_field = score, field
        score_sum += raw_best
        if raw_best > 0:
            match_count += 1
        if raw_best > best_term_score:
            best_term_score, best_term_field = raw_best, raw_field

    per_term_score = 0
    if raw_groups:
        per_term_score = _round_half_up(score_sum / len(raw_groups))
        if len(raw_groups) > 1 and match_count >= len(raw_groups):
            per_term_score += MULTI_TERM_BONUS

    # ---------------------------
    # Combine
    # ---------------------------
    if phrase_score >= per_term_score:
        base, matched_field = phrase_score, phrase_field
    else:
        base, matched_field = per_term_score, best_term_field

    if base == 0:
        return None

    length_bonus = max(0.0, (LENGTH_BONUS_PIVOT - len(item.title)) * LENGTH_BONUS_FACTOR)
    return ScoredItem(item=item, score=base + length_bonus, matched_field=matched_field)
