"""Contract tests for the PostgreSQL and Redis stores.

These need live servers and run only when TEST_DATABASE_URL or
TEST_REDIS_URL is set. Each test uses fresh codes / a fresh key prefix.
"""

import asyncio
import os
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from tinylink.database.postgres import PostgresLinkStore
from tinylink.database.redis_store import RedisLinkStore
from tinylink.errors import DuplicateKeyError
from tinylink.shortcode import generate_random_code


T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)

DATABASE_URL = os.getenv("TEST_DATABASE_URL")
REDIS_URL = os.getenv("TEST_REDIS_URL")


@pytest.fixture
async def postgres_store(logger):
    if not DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set")
    store = PostgresLinkStore(db_config=DATABASE_URL, logger=logger)
    await store.ensure_tables()
    yield store
    await store.close()


@pytest.fixture
async def redis_store(logger):
    if not REDIS_URL:
        pytest.skip("TEST_REDIS_URL not set")
    prefix = f"tinylink-test-{uuid.uuid4().hex[:8]}"
    store = RedisLinkStore(redis_url=REDIS_URL, key_prefix=prefix, logger=logger)
    yield store
    keys = await store.client.keys(f"{prefix}:*")
    if keys:
        await store.client.delete(*keys)
    await store.close()


@pytest.fixture(params=["postgres_store", "redis_store"])
def backend(request):
    return request.getfixturevalue(request.param)


@pytest.mark.asyncio
class TestStoreBackends:
    """The same contract holds on every durable backend."""

    async def test_create_find_delete(self, backend):
        code = generate_random_code(8)

        created = await backend.create(code, "https://example.com", T0)
        assert created.clicks == 0
        assert created.last_clicked is None

        found = await backend.find(code)
        assert found.target_url == "https://example.com"
        assert found.created_at == T0

        assert await backend.delete(code) is True
        assert await backend.delete(code) is False
        assert await backend.find(code) is None

    async def test_duplicate_create(self, backend):
        code = generate_random_code(8)
        await backend.create(code, "https://example.com", T0)

        with pytest.raises(DuplicateKeyError):
            await backend.create(code, "https://other.example", T0)

        assert (await backend.find(code)).target_url == "https://example.com"
        await backend.delete(code)

    async def test_increment_missing(self, backend):
        assert await backend.increment_clicks(generate_random_code(8), T0) is None

    async def test_concurrent_increments(self, backend):
        code = generate_random_code(8)
        await backend.create(code, "https://example.com", T0)
        stamps = [T0 + timedelta(seconds=i) for i in range(50)]

        await asyncio.gather(*(backend.increment_clicks(code, ts) for ts in stamps))

        link = await backend.find(code)
        assert link.clicks == 50
        assert link.last_clicked == stamps[-1]
        await backend.delete(code)

    async def test_list_all_order(self, backend):
        codes = [generate_random_code(8) for _ in range(3)]
        for i, code in enumerate(codes):
            await backend.create(code, "https://example.com", T0 + timedelta(seconds=i))

        listed = [link.code for link in await backend.list_all() if link.code in codes]

        assert listed == list(reversed(codes))
        for code in codes:
            await backend.delete(code)

    async def test_health_check(self, backend):
        assert await backend.health_check()
