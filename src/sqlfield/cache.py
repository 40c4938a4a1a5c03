"""
Caching for column metadata.

Declared column types are read from the schema once per table and kept in a
cachetools TTL cache, so decoding many result sets from the same table does
not repeat the schema query.

Entries are keyed by the connection object itself, not its id(). A key holds
its connection until the entry expires or is evicted, so an id reused by a
later connection can never match a stale entry.
"""
import logging
import threading
from typing import Any

import cachetools

logger = logging.getLogger(__name__)


class SchemaCache:
    """Declared column types per (connection, table).

    Thread-safe singleton over one bounded TTL cache.
    """

    _instance = None
    _lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> 'SchemaCache':
        """Get singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def __init__(self, maxsize: int = 256, ttl: int = 600) -> None:
        self._cache = cachetools.TTLCache(maxsize=maxsize, ttl=ttl)

    def get(self, connection: Any, table: str) -> dict[str, str] | None:
        """Cached declared types of a table, or None on a miss.
        """
        with self._lock:
            return self._cache.get((connection, table.lower()))

    def set(self, connection: Any, table: str, declared: dict[str, str]) -> None:
        with self._lock:
            self._cache[(connection, table.lower())] = declared

    def invalidate(self, connection: Any) -> None:
        """Drop every entry of a connection, e.g. after a schema change or close.
        """
        with self._lock:
            for key in [key for key in self._cache if key[0] is connection]:
                del self._cache[key]
                logger.debug(f'Cleared table_info({key[1]}) cache entry')

    def clear(self) -> None:
        """Clear all entries."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
