# app/services/cache/schedule_cache.py
"""Redis cache for resolved business days"""
import json
import logging
from datetime import date, time
from typing import Optional, Dict

from app.config.redis import get_redis, RedisKeys
from app.config.settings import get_settings

logger = logging.getLogger(__name__)

CLOSED_MARKER = "closed"


class ScheduleCache:
    """
    Best-effort cache of ScheduleCalendar results keyed by (business_id, generation, date).

    Invalidation bumps the business generation instead of deleting keys. A reader
    that resolved a day before an invalidation writes under the old generation,
    which nobody reads again, so a racing read can never bring back a stale day.
    Every failure is logged and treated as a miss.
    """

    @staticmethod
    def _enabled() -> bool:
        return get_settings().SCHEDULE_CACHE_ENABLED

    @staticmethod
    def generation(business_id) -> Optional[int]:
        """Current generation of a business, or None when the cache is unusable"""
        if not ScheduleCache._enabled():
            return None
        key = RedisKeys.schedule_generation(business_id)
        try:
            return int(get_redis().get(key) or 0)
        except Exception as e:
            logger.warning(f"Schedule cache generation read failed for {key}: {e}")
            return None

    @staticmethod
    def get(business_id, day: date, generation: int) -> Optional[Dict]:
        """Return the cached payload, or None on a miss"""
        if not ScheduleCache._enabled():
            return None
        key = RedisKeys.schedule_day(business_id, generation, day)
        try:
            raw = get_redis().get(key)
        except Exception as e:
            logger.warning(f"Schedule cache read failed for {key}: {e}")
            return None
        if raw is None:
            return None
        return json.loads(raw)

    @staticmethod
    def set(business_id, day: date, generation: int, payload: Dict) -> None:
        if not ScheduleCache._enabled():
            return
        key = RedisKeys.schedule_day(business_id, generation, day)
        try:
            get_redis().setex(key, get_settings().SCHEDULE_CACHE_TTL_SECONDS, json.dumps(payload))
        except Exception as e:
            logger.warning(f"Schedule cache write failed for {key}: {e}")

    @staticmethod
    def invalidate_business(business_id) -> None:
        """Retire every cached day of one business; old keys expire through their TTL"""
        if not ScheduleCache._enabled():
            return
        key = RedisKeys.schedule_generation(business_id)
        try:
            generation = get_redis().incr(key)
            logger.info(f"Schedule cache for business {business_id} moved to generation {generation}")
        except Exception as e:
            logger.warning(f"Schedule cache invalidation failed for business {business_id}: {e}")


def encode_time(value: time) -> str:
    return value.strftime("%H:%M:%S")


def decode_time(value: str) -> time:
    return time.fromisoformat(value)
