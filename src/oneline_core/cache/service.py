# src/oneline_core/cache/service.py
"""
Provides the memoization service used to avoid recomputing energization for a diagram
whose electrical content has not changed.
"""
import logging
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 128


class EnergizationCache:
    """
    A bounded, least-recently-used cache of derived energization results.

    The engine is a pure function of the diagram, so a cached value can be returned for
    any diagram with the same key. The cache is an explicit object owned by an engine
    instance rather than hidden global state: two engines never share results.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}.")
        self.max_entries = max_entries
        self._entries: "OrderedDict[Tuple, Any]" = OrderedDict()
        self.clear_stats()
        logger.debug("EnergizationCache instance created (max_entries=%d).", max_entries)

    def get(self, key: Tuple) -> Optional[Any]:
        """Retrieves a cached value, or None on a miss."""
        if key in self._entries:
            self._entries.move_to_end(key)
            self._stats['hits'] += 1
            # Logging the key can be verbose; truncate for readability.
            logger.debug(f"Cache HIT for key: {str(key)[:150]}...")
            return self._entries[key]

        self._stats['misses'] += 1
        logger.debug(f"Cache MISS for key: {str(key)[:150]}...")
        return None

    def put(self, key: Tuple, value: Any):
        """Stores a value, evicting the least recently used entry when full."""
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted_key, _ = self._entries.popitem(last=False)
            self._stats['evictions'] += 1
            logger.debug(f"Cache EVICT for key: {str(evicted_key)[:150]}...")

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, int]:
        """Returns a copy of the hit/miss/eviction counters."""
        return dict(self._stats)

    def clear_stats(self):
        self._stats = {'hits': 0, 'misses': 0, 'evictions': 0}

    def clear(self):
        """Drops every cached entry. Statistics are kept."""
        self._entries.clear()
        logger.info("Cleared the energization cache.")
