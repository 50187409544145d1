# catalog_search/session.py
"""
Search session: debounced, memoized catalog search for one catalog view.

A session tracks three pieces of query state:

  query            - what the user has typed, updated immediately
  debounced_query  - what the results are computed for, committed once the
                     input has been quiet for ``debounce_ms`` (or right away
                     when the input was cleared)
  is_active        - whether the search bar is open

Only one debounce timer is ever pending: every ``set_query`` cancels the
previous one and schedules a new one (trailing-edge debounce). Results are
recomputed lazily and cached on ``(debounced_query, catalog_version)``.

Timers come from a scheduler object exposing ``schedule(delay_seconds,
callback) -> handle`` and ``cancel(handle)``; the default one runs on
``threading.Timer``.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from .config import SearchConfig
from .expand import SYNONYM_GROUPS
from .models import CatalogCategory, CatalogItem, SearchOutcome, SearchResult
from .query import popular_categories, search_catalog

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class ThreadingScheduler:
    """Runs callbacks on daemon ``threading.Timer`` threads."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(max(delay, 0.0), callback)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


class CatalogSearchSession:
    """
    Debounced search over one catalog.

    Args:
        items: catalog items.
        categories: catalog categories.
        config: session settings (``SearchConfig()`` by default).
        scheduler: timer service (``ThreadingScheduler()`` by default).
        on_update: called with a fresh SearchResult after every debounce commit,
            after clear_search and after set_catalog.
        synonyms: synonym table used for query expansion.
    """

    def __init__(
        self,
        items: Sequence[CatalogItem] = (),
        categories: Sequence[CatalogCategory] = (),
        config: Optional[SearchConfig] = None,
        scheduler: Any = None,
        on_update: Optional[Callable[[SearchResult], None]] = None,
        synonyms: Mapping[str, Tuple[str, ...]] = SYNONYM_GROUPS,
    ):
        self.config = config or SearchConfig()
        self.scheduler = scheduler or ThreadingScheduler()
        self.on_update = on_update
        self.synonyms = synonyms

        self._lock = threading.RLock()
        self._items: Tuple[CatalogItem, ...] = tuple(items)
        self._categories: Tuple[CatalogCategory, ...] = tuple(categories)
        self._catalog_version = 0

        self._query = ""
        self._debounced_query = ""
        self._active = False
        self._timer = None
        # Bumped on every reschedule so a timer that already fired cannot commit
        self._generation = 0

        self._cache_key: Optional[Tuple[str, int]] = None
        self._cache: SearchOutcome = SearchOutcome()
        self._popular_version = -1
        self._popular: Tuple[CatalogCategory, ...] = ()

    # ------------------------
    # Query state
    # ------------------------
    def set_query(self, query: str) -> None:
        """
        Record what the user typed and (re)arm the debounce timer.

        A non-empty query also opens the search (``is_active`` becomes True).
        """
        query = query or ""
        with self._lock:
            self._query = query
            if query.strip():
                self._active = True
            self._cancel_timer()
            delay = self.config.debounce_seconds if query.strip() else 0.0
            self._generation += 1
            generation = self._generation
            self._timer = self.scheduler.schedule(delay, lambda: self._commit(generation))
        logger.debug("Query set to %r; committing in %.3fs", query, delay)

    def clear_search(self) -> None:
        """Reset query, results and active flag immediately, without debounce."""
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            self._query = ""
            self._debounced_query = ""
            self._active = False
        self._notify()

    def set_active(self, active: bool) -> None:
        with self._lock:
            self._active = bool(active)

    def set_catalog(
        self, items: Sequence[CatalogItem], categories: Sequence[CatalogCategory]
    ) -> None:
        """Swap in a new catalog snapshot; cached results are invalidated."""
        with self._lock:
            self._items = tuple(items)
            self._categories = tuple(categories)
            self._catalog_version += 1
        logger.debug("Catalog replaced: %d items, %d categories", len(self._items), len(self._categories))
        self._notify()

    def close(self) -> None:
        """Cancel any pending debounce timer."""
        with self._lock:
            self._cancel_timer()
            self._generation += 1

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self.scheduler.cancel(self._timer)
            self._timer = None

    def _commit(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
            committed = self._query.strip()
            self._debounced_query = committed
        logger.debug("Debounced query committed: %r", committed)
        self._notify()

    def _notify(self) -> None:
        callback = self.on_update
        if callback is not None:
            callback(self.snapshot())

    # ------------------------
    # Derived state
    # ------------------------
    def _outcome(self) -> SearchOutcome:
        with self._lock:
            key = (self._debounced_query, self._catalog_version)
            if key != self._cache_key:
                self._cache = search_catalog(
                    self._debounced_query,
                    self._items,
                    self._categories,
                    max_suggestions=self.config.max_suggestions,
                    synonyms=self.synonyms,
                )
                self._cache_key = key
            return self._cache

    @property
    def query(self) -> str:
        return self._query

    @property
    def debounced_query(self) -> str:
        return self._debounced_query

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def is_searching(self) -> bool:
        """True while a debounce is in flight."""
        with self._lock:
            return self._query.strip() != self._debounced_query

    @property
    def results(self) -> Tuple[CatalogItem, ...]:
        return self._outcome().results

    @property
    def result_count(self) -> int:
        return self._outcome().result_count

    @property
    def matched_categories(self) -> Tuple[CatalogCategory, ...]:
        return self._outcome().matched_categories

    @property
    def result_count_by_category(self) -> Mapping[str, int]:
        return self._outcome().result_count_by_category

    @property
    def suggestions(self) -> Tuple[str, ...]:
        return self._outcome().suggestions

    @property
    def popular_categories(self) -> Tuple[CatalogCategory, ...]:
        with self._lock:
            if self._popular_version != self._catalog_version:
                self._popular = popular_categories(
                    self._items, self._categories, limit=self.config.popular_limit
                )
                self._popular_version = self._catalog_version
            return self._popular

    def snapshot(self) -> SearchResult:
        """Consistent view of the whole session state."""
        with self._lock:
            outcome = self._outcome()
            return SearchResult(
                query=self._query,
                debounced_query=self._debounced_query,
                results=outcome.results,
                is_searching=self.is_searching,
                is_active=self._active,
                result_count=outcome.result_count,
                matched_categories=outcome.matched_categories,
                result_count_by_category=outcome.result_count_by_category,
                suggestions=outcome.suggestions,
                popular_categories=self.popular_categories,
            )
