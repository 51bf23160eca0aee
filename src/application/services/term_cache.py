"""Vocabulary Term Cache.

Process-lifetime cache of controlled vocabulary term sets, one per
VocabularyCategory. A category is fetched lazily on first use:

- A non-empty fetched set is cached permanently and never refreshed.
- An empty set or a failed fetch returns the category default (access rights
  and PID schemes have built-in terms; the rest are empty) without caching,
  so the next call retries the fetch.

Concurrent first use may fetch the same category more than once. The lock
only guards the map, so the cached value is always one complete fetched set.
"""

import logging
from threading import Lock
from typing import Dict, FrozenSet, Iterable, Optional, Protocol, Set

from domain.fair_models import VocabularyCategory

logger = logging.getLogger(__name__)


DEFAULT_TERMS: Dict[VocabularyCategory, FrozenSet[str]] = {
    VocabularyCategory.ACCESS_RIGHTS: frozenset({"Open", "Restricted"}),
    VocabularyCategory.PID_SCHEMES: frozenset({"DOI", "Handle", "URN", "ARK"}),
}


class TermSource(Protocol):
    """Anything that can fetch a category's vocabulary terms."""

    async def fetch_terms(self, category: VocabularyCategory) -> Set[str]:
        ...


def default_terms(category: VocabularyCategory) -> FrozenSet[str]:
    return DEFAULT_TERMS.get(category, frozenset())


class TermCache:
    """Lazily populated, per-category cache of accepted vocabulary terms."""

    def __init__(self, source: Optional[TermSource] = None):
        """
        Initialize the cache.

        Args:
            source: Vocabulary source used to populate categories. Without a
                source only preloaded terms and defaults are available.
        """
        self.source = source
        self._terms: Dict[VocabularyCategory, FrozenSet[str]] = {}
        self._lock = Lock()

    def cached(self, category: VocabularyCategory) -> Optional[FrozenSet[str]]:
        with self._lock:
            return self._terms.get(category)

    def is_cached(self, category: VocabularyCategory) -> bool:
        return self.cached(category) is not None

    def preload(self, category: VocabularyCategory, terms: Iterable[str]) -> bool:
        """Seed a category with known terms.

        Returns:
            True if the terms were stored, False if they were empty or the
            category was already populated.
        """
        frozen = frozenset(t.strip() for t in terms if t and t.strip())
        if not frozen:
            return False
        return self._store(category, frozen) is frozen

    def clear(self):
        with self._lock:
            self._terms.clear()

    async def get_terms(
        self, category: VocabularyCategory, source: Optional[TermSource] = None
    ) -> FrozenSet[str]:
        """Return the accepted terms for a category, fetching on first use.

        Never raises: fetch failures fall back to the category default.

        Args:
            category: Vocabulary category to look up
            source: Source used for this call instead of the cache's own,
                for callers whose connections live shorter than the cache
        """
        terms = self.cached(category)
        if terms is not None:
            return terms

        source = source or self.source
        if source is None:
            logger.warning(f"No vocabulary source configured, using default {category.value} terms")
            return default_terms(category)

        logger.info(f"Fetching approved {category.value} terms from CESSDA vocabulary")
        try:
            fetched = await source.fetch_terms(category)
        except Exception as e:
            logger.error(f"Failed to fetch {category.value} vocabulary: {e}")
            return default_terms(category)

        if not fetched:
            logger.info(f"Using default {category.value} terms due to empty vocabulary")
            return default_terms(category)

        terms = self._store(category, frozenset(fetched))
        logger.info(f"Fetched {len(terms)} approved {category.value} terms")
        return terms

    def _store(self, category: VocabularyCategory, terms: FrozenSet[str]) -> FrozenSet[str]:
        # First writer wins; later racers get the already cached set
        with self._lock:
            return self._terms.setdefault(category, terms)
