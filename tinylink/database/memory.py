"""In-process link store, used for development and tests."""

import asyncio
import logging
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

from ..errors import DuplicateKeyError
from .base import LinkStoreBase
from .models import Link


class InMemoryLinkStore(LinkStoreBase):
    """Dict-backed store. Every mutation runs under one asyncio lock.

    Links handed out are copies, so callers never see later mutations.
    State is per process; use a shared backend when running several workers.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._links: Dict[str, Link] = {}
        self._lock = asyncio.Lock()

    async def find(self, code: str) -> Optional[Link]:
        link = self._links.get(code)
        return replace(link) if link else None

    async def create(self, code: str, target_url: str, created_at: datetime) -> Link:
        async with self._lock:
            if code in self._links:
                raise DuplicateKeyError(code)
            link = Link(code=code, target_url=target_url, created_at=created_at)
            self._links[code] = link
            return replace(link)

    async def increment_clicks(self, code: str, now: datetime) -> Optional[Link]:
        async with self._lock:
            link = self._links.get(code)
            if link is None:
                return None
            link.clicks += 1
            if link.last_clicked is None or now > link.last_clicked:
                link.last_clicked = now
            return replace(link)

    async def delete(self, code: str) -> bool:
        async with self._lock:
            return self._links.pop(code, None) is not None

    async def list_all(self, descending: bool = True) -> List[Link]:
        links = sorted(self._links.values(), key=lambda l: l.created_at, reverse=descending)
        return [replace(link) for link in links]

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.logger.debug(f"Discarding {len(self._links)} in-memory links")
        self._links.clear()
