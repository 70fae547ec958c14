"""
Redis caching service for hotel catalog listings.

CACHING STRATEGY
================

What we cache:
  - Hotel listing responses (JSON-serialized), one entry per filter set
  - Cache key pattern: "hotels:list:location=..&price_min=..&price_max=..&rating=..&amenities=.."

Invalidation strategy:
  - On hotel create, update or delete: delete every "hotels:list:*" key
  - TTL-based expiry as safety net (REDIS_CACHE_TTL)

Bookings never touch the cache: there is no inventory on the hotel, so a
booking does not change what the listing shows.

Redis is optional. When it is disabled or unreachable every call here is a
no-op and the catalog is served straight from the database.
"""

import json
from typing import Optional

import redis.asyncio as redis
from hotel_booking.core.config import get_settings
from hotel_booking.core.logging import get_logger
from hotel_booking.core.metrics import record_cache_operation
from hotel_booking.schemas.hotel import HotelFilter

logger = get_logger(__name__)
settings = get_settings()

HOTEL_LIST_PREFIX = "hotels:list:"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def make_hotel_list_key(filters: HotelFilter) -> str:
    amenities = ",".join(sorted(filters.amenities))
    location = (filters.location or "").strip().lower()
    return (
        f"{HOTEL_LIST_PREFIX}location={location}&price_min={filters.price_min}"
        f"&price_max={filters.price_max}&rating={filters.rating}&amenities={amenities}"
    )


async def get_cached_hotels(filters: HotelFilter) -> Optional[list]:
    """Retrieve a cached hotel list response."""
    client = await get_redis()
    if not client:
        return None

    key = make_hotel_list_key(filters)
    try:
        data = await client.get(key)
        record_cache_operation("get", hit=data is not None)
        if data:
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        logger.debug("cache_miss", key=key)
    except Exception as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_hotels(filters: HotelFilter, data: list) -> None:
    """Cache a hotel list response with TTL."""
    client = await get_redis()
    if not client:
        return

    key = make_hotel_list_key(filters)
    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data, default=str))
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except Exception as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_hotel_cache() -> None:
    """
    Invalidate all cached hotel listings.
    Uses SCAN to find and delete all keys matching the prefix.
    """
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=f"{HOTEL_LIST_PREFIX}*", count=100):
            await client.delete(key)
            deleted += 1
        logger.info("cache_invalidated", keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
