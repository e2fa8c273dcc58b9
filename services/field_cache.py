from __future__ import annotations

import logging
from collections import OrderedDict

logger = logging.getLogger("climate_grid.field_cache")


class FieldCache:
    """
    Bounded LRU cache of serialized field bodies keyed by time index.

    Valid only because a field is a pure function of its time index.
    ``max_entries <= 0`` disables caching entirely.
    """

    def __init__(self, max_entries: int) -> None:
        self.max_entries = max_entries
        self._entries: OrderedDict[int, bytes] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, time_index: int) -> bool:
        return time_index in self._entries

    def get(self, time_index: int) -> bytes | None:
        body = self._entries.get(time_index)
        if body is None:
            self.misses += 1
            return None
        self._entries.move_to_end(time_index)
        self.hits += 1
        return body

    def put(self, time_index: int, body: bytes) -> None:
        if self.max_entries <= 0:
            return
        self._entries[time_index] = body
        self._entries.move_to_end(time_index)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted time index %d from field cache", evicted)
