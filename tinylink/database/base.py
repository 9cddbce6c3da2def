"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from .models import Link


class LinkStoreBase(ABC):
    """Durable mapping of code -> Link.

    Implementations must enforce code uniqueness inside ``create`` and make
    ``increment_clicks`` a single atomic operation. Driver failures are
    raised as ``StoreError``.
    """

    @abstractmethod
    async def find(self, code: str) -> Optional[Link]:
        """Get the link for a code.

        Args:
            code: The short code to lookup

        Returns:
            The Link if found, None otherwise
        """

    @abstractmethod
    async def create(self, code: str, target_url: str, created_at: datetime) -> Link:
        """Persist a new link with zero clicks.

        Args:
            code: The short code to use
            target_url: The URL to redirect to
            created_at: Creation timestamp (timezone-aware UTC)

        Returns:
            The created Link

        Raises:
            DuplicateKeyError: If the code already exists
        """

    @abstractmethod
    async def increment_clicks(self, code: str, now: datetime) -> Optional[Link]:
        """Atomically add one click and stamp ``last_clicked``.

        ``last_clicked`` keeps the later of its current value and ``now``.

        Args:
            code: The short code to update
            now: Click timestamp

        Returns:
            The updated Link, or None if the code does not exist
        """

    @abstractmethod
    async def delete(self, code: str) -> bool:
        """Delete a link.

        Returns:
            True if deleted, False if not found
        """

    @abstractmethod
    async def list_all(self, descending: bool = True) -> List[Link]:
        """List every link ordered by creation time (newest first by default)."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable."""

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
