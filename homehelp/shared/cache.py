import json
import logging
from typing import Any, Optional

from redis import Redis
from redis.exceptions import RedisError

from homehelp.core.config import settings

logger = logging.getLogger(__name__)

SERVICES_PREFIX = "services"
CITIES_PREFIX = "cities"

_client: Optional[Redis] = None


def get_redis_client() -> Optional[Redis]:
    global _client
    if not settings.CACHE_ENABLED:
        return None
    if _client is None:
        _client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
    return _client


def build_cache_key(prefix: str, *parts: str) -> str:
    base_parts = [prefix, *parts]
    return ':'.join(filter(None, base_parts))


def get_cache_value(key: str) -> Optional[Any]:
    client = get_redis_client()
    if not client:
        return None
    try:
        raw = client.get(key)
    except RedisError as exc:
        logger.warning("Cache read failed for %s: %s", key, exc)
        return None
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def set_cache_value(key: str, value: Any, expire_seconds: Optional[int] = None) -> None:
    client = get_redis_client()
    if not client:
        return
    ttl = expire_seconds or settings.CACHE_EXPIRE_SECONDS
    try:
        client.set(key, json.dumps(value, default=str), ex=ttl)
    except RedisError as exc:
        logger.warning("Cache write failed for %s: %s", key, exc)


def clear_cache(prefix: str, *parts: str) -> None:
    client = get_redis_client()
    if not client:
        return
    pattern = build_cache_key(prefix, *parts)
    try:
        for key in client.scan_iter(pattern + '*'):
            client.delete(key)
    except RedisError as exc:
        logger.warning("Cache clear failed for %s: %s", pattern, exc)
