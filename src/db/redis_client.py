"""Redis connection and utilities."""

import json
from typing import Any

import redis

from src.config import CACHE_TTL, REDIS_CONFIG


class RedisClient:
    def __init__(self):
        self.client = redis.Redis(**REDIS_CONFIG)

    def get_json(self, key: str) -> Any | None:
        """Get JSON data from Redis."""
        data = self.client.get(key)
        return json.loads(data.decode("utf-8")) if data else None

    def set_json(self, key: str, value: Any, ttl: int = CACHE_TTL) -> bool:
        """Set JSON data in Redis with TTL."""
        return self.client.setex(key, ttl, json.dumps(value))


# Singleton instance
redis_client = RedisClient()
