# roadmap_engine/catalog/cache.py
"""
Explicit catalog cache.

Callers that want to reuse a validated skill graph across generation calls
create a CatalogCache and pass it in. There is no process-wide catalog state.
"""

import logging
import threading
from collections import OrderedDict

from roadmap_engine.catalog.provider import CatalogProvider, CatalogSnapshot
from roadmap_engine.planning.graph import SkillGraph, load_graph

logger = logging.getLogger(__name__)


class CatalogCache:
    """
    LRU cache of (snapshot, validated graph) keyed by provider cache_key.

    Only successfully validated catalogs are cached; a catalog that fails
    validation is re-checked on every call.
    """

    def __init__(self, max_entries: int = 8) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, tuple[CatalogSnapshot, SkillGraph]] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, provider: CatalogProvider) -> tuple[CatalogSnapshot, SkillGraph]:
        """
        Return the snapshot and graph for a provider, loading on miss.

        Raises:
            CatalogError: The catalog fails graph validation
        """
        key = provider.cache_key
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return entry

        snapshot = CatalogSnapshot.from_provider(provider)
        graph = load_graph(snapshot.skills, snapshot.edges)

        with self._lock:
            self.misses += 1
            self._entries[key] = (snapshot, graph)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted catalog {evicted} from cache")
        logger.info(f"Cached catalog {key}: {len(graph)} skills")
        return snapshot, graph

    def invalidate(self, provider: CatalogProvider | None = None) -> None:
        """Drop one provider's entry, or everything when provider is None."""
        with self._lock:
            if provider is None:
                self._entries.clear()
            else:
                self._entries.pop(provider.cache_key, None)
