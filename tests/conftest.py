"""Pytest configuration and fixtures."""

import asyncio
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from tinylink.database.memory import InMemoryLinkStore
from tinylink.database.models import Link
from tinylink.errors import DuplicateKeyError, StoreError
from tinylink.registrar import LinkRegistrar
from tinylink.resolver import LinkResolver
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging
from web_app import create_app


class StepClock:
    """Returns a fixed start time, one second later on every call."""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        now = self.current
        self.current += timedelta(seconds=1)
        return now


class CountingGenerator(ShortCodeGenerator):
    """Seeded generator that records every code it hands out."""

    def __init__(self, default_length: int = 6):
        super().__init__(default_length=default_length, rng=random.Random(1234))
        self.generated = []

    def generate_random(self, length: Optional[int] = None) -> str:
        code = super().generate_random(length)
        self.generated.append(code)
        return code


class AlwaysTakenStore(InMemoryLinkStore):
    """Every code looks taken at lookup time."""

    async def find(self, code: str) -> Optional[Link]:
        return Link(code=code, target_url="https://taken.example", created_at=datetime.now(timezone.utc))


class DuplicateOnCreateStore(InMemoryLinkStore):
    """Lookups miss but every write clashes, as if another writer always won."""

    def __init__(self):
        super().__init__()
        self.create_calls = 0

    async def find(self, code: str) -> Optional[Link]:
        return None

    async def create(self, code: str, target_url: str, created_at: datetime) -> Link:
        self.create_calls += 1
        raise DuplicateKeyError(code)


class YieldingStore(InMemoryLinkStore):
    """Suspends after each lookup so concurrent callers all pass the pre-check."""

    async def find(self, code: str) -> Optional[Link]:
        link = await super().find(code)
        await asyncio.sleep(0)
        return link


class InterleavingStore(InMemoryLinkStore):
    """Suspends between reading and writing the click count.

    With ``atomic=True`` the read-suspend-write runs under the store lock;
    with ``atomic=False`` it does not, and concurrent increments lose clicks.
    """

    def __init__(self, atomic: bool = True):
        super().__init__()
        self.atomic = atomic

    async def find(self, code: str) -> Optional[Link]:
        link = await super().find(code)
        await asyncio.sleep(0)
        return link

    async def _read_modify_write(self, code: str, now: datetime) -> Optional[Link]:
        link = self._links.get(code)
        if link is None:
            return None
        clicks = link.clicks
        await asyncio.sleep(0)
        link.clicks = clicks + 1
        if link.last_clicked is None or now > link.last_clicked:
            link.last_clicked = now
        return Link(**vars(link))

    async def increment_clicks(self, code: str, now: datetime) -> Optional[Link]:
        if not self.atomic:
            return await self._read_modify_write(code, now)
        async with self._lock:
            return await self._read_modify_write(code, now)


class VanishingStore(InMemoryLinkStore):
    """The link disappears between lookup and increment."""

    async def increment_clicks(self, code: str, now: datetime) -> Optional[Link]:
        await self.delete(code)
        return await super().increment_clicks(code, now)


class BrokenStore(InMemoryLinkStore):
    """Every operation fails like an unreachable database."""

    async def find(self, code: str) -> Optional[Link]:
        raise StoreError("connection refused")

    async def list_all(self, descending: bool = True):
        raise StoreError("connection refused")

    async def health_check(self) -> bool:
        return False


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store(logger):
    return InMemoryLinkStore(logger=logger)


@pytest.fixture
def short_code_generator():
    return CountingGenerator(default_length=6)


@pytest.fixture
def registrar(store, short_code_generator, logger, clock):
    return LinkRegistrar(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
        clock=clock,
    )


@pytest.fixture
def resolver(store, logger, clock):
    return LinkResolver(store=store, logger=logger, clock=clock)


@pytest.fixture
def config():
    return Config(store_backend="memory")


def build_app(store, config, logger, generator=None):
    """Wire a FastAPI app around ``store``."""
    return create_app(
        store=store,
        resolver=LinkResolver(store=store, logger=logger),
        registrar=LinkRegistrar(
            store=store,
            short_code_generator=generator or CountingGenerator(),
            logger=logger,
            clock=StepClock(),
        ),
        config=config,
    )


@pytest.fixture
def app(store, config, logger, short_code_generator):
    return build_app(store, config, logger, short_code_generator)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
