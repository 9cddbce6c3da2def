"""Code resolution: the redirect hot path."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from .database.base import LinkStoreBase


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RedirectTarget:
    """Where a resolved code sends the visitor."""

    target_url: str


class LinkResolver:
    """Resolve codes to targets and count clicks."""

    def __init__(
        self,
        store: LinkStoreBase,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock

    async def resolve(self, code: str) -> Optional[RedirectTarget]:
        """Look up ``code`` and record a click.

        A miss returns None and touches nothing. A hit always issues the
        atomic increment; if the link vanished between lookup and increment
        the increment is a no-op and the target read first is still returned.
        Store errors propagate.

        Args:
            code: The short code from the request path

        Returns:
            RedirectTarget, or None if the code is unknown
        """
        link = await self.store.find(code)

        if link is None:
            self.logger.warning(f"Short code not found: {code}")
            return None

        updated = await self.store.increment_clicks(code, self.clock())
        if updated is None:
            self.logger.info(f"Link {code} deleted during redirect; click not recorded")
        else:
            self.logger.debug(f"Resolved {code} -> {link.target_url} (clicks={updated.clicks})")

        return RedirectTarget(target_url=link.target_url)
