"""Redis connection for the schedule cache"""
from datetime import date
from typing import Optional

import redis

from app.config.settings import get_settings

_redis_pool: Optional[redis.ConnectionPool] = None


def get_redis_pool() -> redis.ConnectionPool:
    """Lazily build the shared pool; nothing connects until the first command"""
    global _redis_pool
    if _redis_pool is None:
        settings = get_settings()
        _redis_pool = redis.ConnectionPool.from_url(
            settings.REDIS_URL,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
            retry_on_timeout=True,
            socket_timeout=2,
            decode_responses=True,
        )
    return _redis_pool


def get_redis() -> redis.Redis:
    return redis.Redis(connection_pool=get_redis_pool())


def close_redis_pool() -> None:
    global _redis_pool
    if _redis_pool is not None:
        _redis_pool.disconnect()
        _redis_pool = None


class RedisKeys:
    """Key layout, one namespace per cached concern"""

    # Bumped on every schedule change; day keys of older generations are never read again
    SCHEDULE_GENERATION = "schedule:{business_id}:generation"
    # Resolved open hours for one business day
    SCHEDULE_DAY = "schedule:{business_id}:g{generation}:{date}"

    @staticmethod
    def schedule_generation(business_id) -> str:
        return RedisKeys.SCHEDULE_GENERATION.format(business_id=business_id)

    @staticmethod
    def schedule_day(business_id, generation: int, day: date) -> str:
        return RedisKeys.SCHEDULE_DAY.format(
            business_id=business_id, generation=generation, date=day.isoformat()
        )
