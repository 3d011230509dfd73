"""Unit tests for NoOp idempotency store adapter."""

import pytest

from pdf_unlock_bot.adapters.outbound.idempotency.noop_idempotency_store import NoOpIdempotencyStore


@pytest.mark.asyncio
async def test_every_claim_is_granted():
    """Test that redeliveries are never reported as duplicates."""
    store = NoOpIdempotencyStore()

    assert await store.claim("100", 3600) is True
    assert await store.claim("100", 3600) is True

    await store.close()
