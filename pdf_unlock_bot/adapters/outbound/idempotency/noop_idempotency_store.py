"""Idempotency store used when update de-duplication is disabled."""

from pdf_unlock_bot.application.ports.idempotency_store import IdempotencyStore


class NoOpIdempotencyStore(IdempotencyStore):
    """Treats every delivery as new, so redeliveries are handled again."""

    async def claim(self, update_id: str, ttl_seconds: int) -> bool:
        """Always grant the claim."""
        return True
