"""Redis implementation of the link store."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..errors import DuplicateKeyError, StoreError
from .base import LinkStoreBase
from .models import Link


# KEYS[1] = link hash, KEYS[2] = creation index
# ARGV[1] = target url, ARGV[2] = created_at (epoch micros), ARGV[3] = code
CREATE_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
redis.call('HSET', KEYS[1], 'target_url', ARGV[1], 'clicks', 0, 'created_at', ARGV[2])
redis.call('ZADD', KEYS[2], ARGV[2], ARGV[3])
return 1
"""

# KEYS[1] = link hash; ARGV[1] = click time (epoch micros)
INCREMENT_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return nil
end
redis.call('HINCRBY', KEYS[1], 'clicks', 1)
local prev = redis.call('HGET', KEYS[1], 'last_clicked')
if (not prev) or tonumber(prev) < tonumber(ARGV[1]) then
    redis.call('HSET', KEYS[1], 'last_clicked', ARGV[1])
end
return redis.call('HGETALL', KEYS[1])
"""

# KEYS[1] = link hash, KEYS[2] = creation index; ARGV[1] = code
DELETE_SCRIPT = """
local removed = redis.call('DEL', KEYS[1])
redis.call('ZREM', KEYS[2], ARGV[1])
return removed
"""


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _to_micros(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // timedelta(microseconds=1)


def _from_micros(value) -> datetime:
    return EPOCH + timedelta(microseconds=int(value))


class RedisLinkStore(LinkStoreBase):
    """Redis link store.

    Each link is a hash; a sorted set scored by creation time gives the
    listing order. Create, increment and delete run as Lua scripts, so each
    is atomic on the server.
    """

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = "tinylink",
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis store.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            key_prefix: Namespace for all keys written by this store
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.logger = logger or logging.getLogger(__name__)
        self.client: redis.Redis = redis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        self._create = self.client.register_script(CREATE_SCRIPT)
        self._increment = self.client.register_script(INCREMENT_SCRIPT)
        self._delete = self.client.register_script(DELETE_SCRIPT)

    def link_key(self, code: str) -> str:
        return f"{self.key_prefix}:link:{code}"

    @property
    def index_key(self) -> str:
        return f"{self.key_prefix}:links:by_created"

    @staticmethod
    def _hash_to_link(code: str, data: Dict[str, str]) -> Link:
        last_clicked = data.get("last_clicked")
        return Link(
            code=code,
            target_url=data["target_url"],
            clicks=int(data.get("clicks", 0)),
            last_clicked=_from_micros(last_clicked) if last_clicked else None,
            created_at=_from_micros(data["created_at"]),
        )

    def _wrap(self, action: str, e: Exception) -> StoreError:
        self.logger.error(f"Redis error during {action}: {e}")
        return StoreError(str(e))

    async def find(self, code: str) -> Optional[Link]:
        try:
            data = await self.client.hgetall(self.link_key(code))
        except RedisError as e:
            raise self._wrap("find", e) from e
        return self._hash_to_link(code, data) if data else None

    async def create(self, code: str, target_url: str, created_at: datetime) -> Link:
        created_micros = _to_micros(created_at)
        try:
            created = await self._create(
                keys=[self.link_key(code), self.index_key],
                args=[target_url, created_micros, code],
            )
        except RedisError as e:
            raise self._wrap("create", e) from e

        if not created:
            raise DuplicateKeyError(code)

        return Link(
            code=code,
            target_url=target_url,
            created_at=_from_micros(created_micros),
        )

    async def increment_clicks(self, code: str, now: datetime) -> Optional[Link]:
        try:
            flat = await self._increment(keys=[self.link_key(code)], args=[_to_micros(now)])
        except RedisError as e:
            raise self._wrap("increment", e) from e

        if not flat:
            return None
        # HGETALL comes back from Lua as a flat [field, value, ...] list
        return self._hash_to_link(code, dict(zip(flat[::2], flat[1::2])))

    async def delete(self, code: str) -> bool:
        try:
            removed = await self._delete(
                keys=[self.link_key(code), self.index_key],
                args=[code],
            )
        except RedisError as e:
            raise self._wrap("delete", e) from e
        return removed > 0

    async def list_all(self, descending: bool = True) -> List[Link]:
        try:
            codes = await self.client.zrange(self.index_key, 0, -1, desc=descending)
            async with self.client.pipeline(transaction=False) as pipe:
                for code in codes:
                    pipe.hgetall(self.link_key(code))
                rows = await pipe.execute()
        except RedisError as e:
            raise self._wrap("list", e) from e

        # A link deleted between the two reads comes back empty
        return [self._hash_to_link(code, data) for code, data in zip(codes, rows) if data]

    async def health_check(self) -> bool:
        try:
            await self.client.ping()
            return True
        except RedisError as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()
        self.logger.info("Redis connection closed")
