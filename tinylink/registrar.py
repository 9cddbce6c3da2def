"""Link registration, removal and read access."""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from .common.validators import is_reserved_code, is_valid_code, is_valid_url
from .database.base import LinkStoreBase
from .database.models import Link
from .errors import (
    CodeTakenError,
    DuplicateKeyError,
    GenerationExhaustedError,
    InvalidCodeError,
    InvalidUrlError,
    LinkNotFoundError,
    MissingFieldError,
)
from .resolver import utc_now
from .shortcode import ShortCodeGenerator


class LinkRegistrar:
    """Create, delete and read links.

    Pre-checks against the store only short-circuit the common case; the
    store's unique constraint on ``create`` decides who wins a race.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_attempts: int = 10,
        code_length: int = 6,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the registrar.

        Args:
            store: Link store
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_attempts: Attempts allowed when generating a random code
            code_length: Length of generated codes
            clock: Source of creation timestamps
        """
        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator(default_length=code_length)
        self.logger = logger or logging.getLogger(__name__)
        self.max_attempts = max_attempts
        self.code_length = code_length
        self.clock = clock

    async def register(self, target_url: Optional[str], requested_code: Optional[str] = None) -> Link:
        """Create a new link.

        Args:
            target_url: The URL to redirect to
            requested_code: Optional custom code; empty means generate one

        Returns:
            The created Link

        Raises:
            MissingFieldError: If target_url is empty
            InvalidUrlError: If target_url is not an http(s) URL
            InvalidCodeError: If requested_code has a bad format
            CodeTakenError: If requested_code is already in use or names a route
            GenerationExhaustedError: If no free random code was found
        """
        if isinstance(target_url, str):
            # Stored exactly as validated, so the redirect Location is absolute
            target_url = target_url.strip()

        if not target_url:
            raise MissingFieldError()

        if not is_valid_url(target_url):
            raise InvalidUrlError()

        if requested_code:
            link = await self._register_custom(target_url, requested_code)
        else:
            link = await self._register_random(target_url)

        self.logger.info(f"Created short URL: {link.code} -> {link.target_url}")
        return link

    async def _register_custom(self, target_url: str, code: str) -> Link:
        if not is_valid_code(code):
            raise InvalidCodeError()

        if is_reserved_code(code) or await self.store.find(code) is not None:
            raise CodeTakenError()

        try:
            return await self.store.create(code, target_url, self.clock())
        except DuplicateKeyError:
            # Lost the race to a concurrent registration of the same code
            raise CodeTakenError()

    async def _register_random(self, target_url: str) -> Link:
        for attempt in range(1, self.max_attempts + 1):
            code = self.generator.generate_random(self.code_length)

            if is_reserved_code(code) or await self.store.find(code) is not None:
                self.logger.debug(f"Collision on generated code {code} (attempt {attempt})")
                continue

            try:
                return await self.store.create(code, target_url, self.clock())
            except DuplicateKeyError:
                self.logger.debug(f"Code {code} taken at write time (attempt {attempt})")

        self.logger.error(f"No free code after {self.max_attempts} attempts")
        raise GenerationExhaustedError()

    async def remove(self, code: str) -> bool:
        """Delete a link.

        Raises:
            LinkNotFoundError: If the code does not exist (or was deleted concurrently)
        """
        if await self.store.find(code) is None:
            raise LinkNotFoundError()

        if not await self.store.delete(code):
            raise LinkNotFoundError()

        self.logger.info(f"Deleted short URL: {code}")
        return True

    async def list(self) -> List[Link]:
        """All links, newest first."""
        return await self.store.list_all(descending=True)

    async def get_stats(self, code: str) -> Link:
        """Read a link without counting a click.

        Raises:
            LinkNotFoundError: If the code does not exist
        """
        link = await self.store.find(code)
        if link is None:
            raise LinkNotFoundError()
        return link
