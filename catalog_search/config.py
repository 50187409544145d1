# catalog_search/config.py
"""
Search session settings.

Defaults match the catalog page: 300 ms debounce, 3 suggestions, 4 popular
categories. Deployments can override them through environment variables:

    CATALOG_SEARCH_DEBOUNCE_MS
    CATALOG_SEARCH_MAX_SUGGESTIONS
    CATALOG_SEARCH_POPULAR_LIMIT
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DEFAULT_DEBOUNCE_MS = 300
DEFAULT_MAX_SUGGESTIONS = 3
DEFAULT_POPULAR_LIMIT = 4

ENV_DEBOUNCE_MS = "CATALOG_SEARCH_DEBOUNCE_MS"
ENV_MAX_SUGGESTIONS = "CATALOG_SEARCH_MAX_SUGGESTIONS"
ENV_POPULAR_LIMIT = "CATALOG_SEARCH_POPULAR_LIMIT"


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r; using %d", name, raw, default)
        return default


@dataclass(frozen=True)
class SearchConfig:
    """
    Tunables of a search session.

    Attributes:
        debounce_ms: quiet period before a non-empty query is searched.
        max_suggestions: cap on "did you mean" suggestions.
        popular_limit: number of popular categories to expose.

    Raises:
        ValueError: if any value is negative.
    """

    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS
    popular_limit: int = DEFAULT_POPULAR_LIMIT

    def __post_init__(self) -> None:
        for name in ("debounce_ms", "max_suggestions", "popular_limit"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "SearchConfig":
        """Build a config from environment variables (``os.environ`` by default)."""
        env = os.environ if env is None else env
        return cls(
            debounce_ms=_int_from_env(env, ENV_DEBOUNCE_MS, DEFAULT_DEBOUNCE_MS),
            max_suggestions=_int_from_env(env, ENV_MAX_SUGGESTIONS, DEFAULT_MAX_SUGGESTIONS),
            popular_limit=_int_from_env(env, ENV_POPULAR_LIMIT, DEFAULT_POPULAR_LIMIT),
        )
