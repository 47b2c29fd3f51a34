"""
Query cache tests.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import cache
from app.core.cache import QueryCache, make_cache_key, query_cache
from app.models.company import Company, CompanyType


@pytest.mark.asyncio
async def test_get_or_set_loads_once():
    cache = QueryCache(ttl_seconds=60)
    calls = []

    async def loader():
        calls.append(1)
        return {"total": 3}

    first = await cache.get_or_set("settings", loader, "currencies", is_active=True)
    second = await cache.get_or_set("settings", loader, "currencies", is_active=True)

    assert first == second == {"total": 3}
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_distinct_arguments_get_distinct_keys():
    cache = QueryCache()

    async def loader():
        return len(cache._entries)

    assert await cache.get_or_set("settings", loader, "currencies") == 0
    assert await cache.get_or_set("settings", loader, "units") == 1
    assert make_cache_key("settings", "currencies") != make_cache_key("settings", "units")


@pytest.mark.asyncio
async def test_invalidate_only_touches_named_namespaces():
    cache = QueryCache()
    cache.set(make_cache_key("settings", "units"), ["a"])
    cache.set(make_cache_key("dashboard-stats", "2026-03-15"), {"b": 1})

    assert cache.invalidate("settings") == 1
    assert cache.get(make_cache_key("settings", "units")) is None
    assert cache.get(make_cache_key("dashboard-stats", "2026-03-15")) == {"b": 1}


def test_expired_entries_are_dropped():
    cache = QueryCache(ttl_seconds=0)
    key = make_cache_key("dashboard-stats")
    cache.set(key, [1])

    assert cache.get(key) is None
    assert cache.invalidate("dashboard-stats") == 0


def test_size_is_bounded():
    cache = QueryCache(ttl_seconds=60, maxsize=2)
    for day in ("2026-03-13", "2026-03-14", "2026-03-15"):
        cache.set(make_cache_key("dashboard-stats", day), {"day": day})

    assert len(cache._entries) == 2
    assert cache.get(make_cache_key("dashboard-stats", "2026-03-15")) == {"day": "2026-03-15"}


@pytest.mark.asyncio
async def test_invalidation_waits_for_commit(db_session: AsyncSession):
    key = make_cache_key(cache.DASHBOARD, "2026-03-15")
    query_cache.set(key, {"total_companies": 0})

    db_session.add(Company(name="Acme Makina", type=CompanyType.CUSTOMER))
    await db_session.flush()
    query_cache.invalidate_on_commit(db_session, cache.DASHBOARD)

    assert query_cache.get(key) == {"total_companies": 0}

    await db_session.commit()
    assert query_cache.get(key) is None


@pytest.mark.asyncio
async def test_rollback_discards_pending_invalidation(db_session: AsyncSession):
    key = make_cache_key(cache.DASHBOARD, "2026-03-15")
    query_cache.set(key, {"total_companies": 0})

    db_session.add(Company(name="Acme Makina", type=CompanyType.CUSTOMER))
    await db_session.flush()
    query_cache.invalidate_on_commit(db_session, cache.DASHBOARD)
    await db_session.rollback()

    await db_session.commit()
    assert query_cache.get(key) == {"total_companies": 0}
