"""CacheService behavior against a mocked Redis client"""

import json
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from app.models.category import CategoryCreate, SubCategory
from app.services.cache import CacheService, cache_service, CATEGORIES_ALL, CATEGORIES_TREE, SUBCATEGORIES_ALL
from app.services.category_service import CategoryService


async def test_disconnected_cache_is_a_no_op():
    cache = CacheService()

    assert await cache.get("anything") is None
    await cache.set("anything", [1, 2])
    await cache.invalidate("anything")


async def test_set_serializes_datetimes():
    cache = CacheService()
    cache.redis_client = AsyncMock()

    await cache.set("key", {"at": datetime(2026, 1, 2, 3, 4, 5)}, ttl=30)

    cache.redis_client.setex.assert_awaited_once_with("key", 30, '{"at": "2026-01-02T03:04:05"}')


async def test_redis_errors_are_not_raised():
    cache = CacheService()
    cache.redis_client = AsyncMock()
    cache.redis_client.get.side_effect = ConnectionError("redis down")

    assert await cache.get("key") is None


@pytest.fixture
def mocked_redis(monkeypatch):
    client = AsyncMock()
    monkeypatch.setattr(cache_service, "redis_client", client)
    return client


async def test_category_list_served_from_cache(db, mocked_redis):
    mocked_redis.get.return_value = json.dumps(
        [{"id": 4, "name": "Cached", "slug": "cached", "parent_id": None, "order": 0}]
    )

    categories = await CategoryService(order_base=0).list_categories(db)

    assert [c.slug for c in categories] == ["cached"]
    mocked_redis.get.assert_awaited_once_with(CATEGORIES_ALL)


async def test_category_write_invalidates_lists(db, mocked_redis):
    await CategoryService(order_base=0).create_category(db, CategoryCreate(name="A", slug="a"))

    mocked_redis.delete.assert_awaited_once_with(CATEGORIES_ALL, CATEGORIES_TREE)


async def test_category_delete_invalidates_subcategories(db, mocked_redis):
    service = CategoryService(order_base=0)
    category_id = await service.create_category(db, CategoryCreate(name="Gone", slug="gone"))
    db.add(SubCategory(category_id=category_id, name="Orphan", slug="orphan", order=0))
    await db.commit()
    mocked_redis.delete.reset_mock()

    await service.delete_category(db, category_id)

    mocked_redis.delete.assert_awaited_once_with(CATEGORIES_ALL, CATEGORIES_TREE, SUBCATEGORIES_ALL)
