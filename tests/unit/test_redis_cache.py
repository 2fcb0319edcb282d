"""CacheService over a mocked redis.asyncio client."""

import json
from unittest.mock import AsyncMock, MagicMock

import redis.asyncio as redis

from app.core.config import Settings
from app.infrastructure.cache.redis_cache import CacheService


def _service() -> tuple[CacheService, MagicMock]:
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.setex = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.aclose = AsyncMock()
    return CacheService(client, Settings(redis_enabled=True)), client


async def test_get_decodes_json() -> None:
    cache, client = _service()
    client.get.return_value = json.dumps({"totalResults": 3})
    assert await cache.get("search:stats") == {"totalResults": 3}
    client.get.return_value = None
    assert await cache.get("search:stats") is None


async def test_set_uses_setex_with_ttl() -> None:
    cache, client = _service()
    assert await cache.set("search:popular_terms", ["contract"], ttl=3600) is True
    client.setex.assert_awaited_once_with("search:popular_terms", 3600, '["contract"]')


async def test_unserializable_value_is_not_stored() -> None:
    cache, client = _service()
    assert await cache.set("k", {object()}) is False
    client.setex.assert_not_awaited()


async def test_redis_errors_are_misses() -> None:
    cache, client = _service()
    client.get.side_effect = redis.ResponseError("WRONGTYPE")
    client.setex.side_effect = redis.ResponseError("OOM")
    assert await cache.get("k") is None
    assert await cache.set("k", 1) is False


async def test_invalid_json_is_a_miss() -> None:
    cache, client = _service()
    client.get.return_value = "{not json"
    assert await cache.get("k") is None


async def test_unavailable_without_client() -> None:
    cache = CacheService(None, Settings(redis_enabled=True))
    assert cache.is_available() is False
    assert await cache.get("k") is None
    assert await cache.set("k", 1) is False


async def test_disconnect_closes_client() -> None:
    cache, client = _service()
    await cache.disconnect()
    client.aclose.assert_awaited_once()
    assert cache.is_available() is False
