"""Idempotency store port."""

from abc import ABC, abstractmethod


class IdempotencyStore(ABC):
    """Port interface remembering which inbound updates were already handled."""

    @abstractmethod
    async def claim(self, update_id: str, ttl_seconds: int) -> bool:
        """
        Record an update as being handled, atomically.

        Two deliveries of the same update racing each other cannot both
        claim it.

        Args:
            update_id: Update identifier
            ttl_seconds: How long the claim is remembered

        Returns:
            True if this call claimed the update, False if it was claimed before
        """
        pass

    async def close(self) -> None:
        """Release connections held by the store."""
        pass
