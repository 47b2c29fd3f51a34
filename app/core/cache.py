"""
Query cache.
Caches read results per logical key and drops them once a committed
mutation touches the same namespace.
"""

import hashlib
import logging
from typing import Any, Awaitable, Callable

from cachetools import TTLCache
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from app.core.config import settings


logger = logging.getLogger(__name__)


# Namespaces
SETTINGS = "settings"
DASHBOARD = "dashboard-stats"

PENDING_INVALIDATIONS = "pending_cache_invalidations"


def make_cache_key(namespace: str, *args, **kwargs) -> str:
    """Build a stable key from a namespace and query arguments."""
    key_data = f"{namespace}:{args}:{sorted(kwargs.items())}"
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{namespace}:{key_hash}"


class QueryCache:
    """
    Bounded in-process TTL cache keyed by namespace-prefixed keys.

    Values must be plain data (dicts, lists, numbers), never ORM instances,
    since sessions do not outlive a request.
    """

    def __init__(self, ttl_seconds: int = 60, maxsize: int = 1024):
        self.ttl_seconds = ttl_seconds
        self._entries: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl_seconds)

    def get(self, key: str) -> Any | None:
        """Return a cached value, or None if missing or expired."""
        return self._entries.get(key)

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    async def get_or_set(
        self,
        namespace: str,
        loader: Callable[[], Awaitable[Any]],
        *args,
        **kwargs,
    ) -> Any:
        """
        Return the cached result for a query, loading it on a miss.

        Args:
            namespace: Logical query identifier (e.g. "dashboard-stats")
            loader: Coroutine function producing the value
            *args, **kwargs: Query parameters that make up the key

        Returns:
            Cached or freshly loaded value
        """
        key = make_cache_key(namespace, *args, **kwargs)
        cached = self.get(key)
        if cached is not None:
            logger.debug("Cache HIT for %s: %s", namespace, key)
            return cached

        logger.debug("Cache MISS for %s: %s", namespace, key)
        value = await loader()
        self.set(key, value)
        return value

    def invalidate(self, *namespaces: str) -> int:
        """
        Drop every entry under the given namespaces.

        Returns:
            Number of entries removed
        """
        self._entries.expire()
        prefixes = tuple(f"{namespace}:" for namespace in namespaces)
        stale = [key for key in list(self._entries) if key.startswith(prefixes)]
        for key in stale:
            self._entries.pop(key, None)
        if stale:
            logger.debug("Invalidated %d cache entries for %s", len(stale), ", ".join(namespaces))
        return len(stale)

    def invalidate_on_commit(self, session: AsyncSession, *namespaces: str) -> None:
        """
        Invalidate namespaces once the session's transaction commits.

        A rollback discards the pending namespaces, so readers never
        re-cache data that was not committed.
        """
        session.info.setdefault(PENDING_INVALIDATIONS, set()).update(namespaces)

    def clear(self) -> None:
        self._entries.clear()


# Global cache instance
query_cache = QueryCache(
    ttl_seconds=settings.QUERY_CACHE_TTL_SECONDS,
    maxsize=settings.QUERY_CACHE_MAXSIZE,
)


@event.listens_for(Session, "after_commit")
def _invalidate_committed(session: Session) -> None:
    namespaces = session.info.pop(PENDING_INVALIDATIONS, None)
    if namespaces:
        query_cache.invalidate(*namespaces)


@event.listens_for(Session, "after_rollback")
def _discard_pending(session: Session) -> None:
    session.info.pop(PENDING_INVALIDATIONS, None)
