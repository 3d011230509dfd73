"""Unit tests for Redis idempotency store adapter."""

from unittest.mock import AsyncMock, patch

import pytest

from pdf_unlock_bot.adapters.outbound.idempotency.redis_idempotency_store import RedisIdempotencyStore

FROM_URL = "pdf_unlock_bot.adapters.outbound.idempotency.redis_idempotency_store.aioredis.from_url"


@pytest.fixture
def mock_redis_client():
    """Create a mock Redis client accepting the first SET NX of each key."""
    keys = set()

    async def set_nx(name, value, ex=None, nx=False):
        if nx and name in keys:
            return None
        keys.add(name)
        return True

    client = AsyncMock()
    client.set = AsyncMock(side_effect=set_nx)
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def redis_store():
    """Create Redis idempotency store with test URL."""
    return RedisIdempotencyStore("redis://localhost:6379/0")


@pytest.mark.asyncio
async def test_first_claim_wins(redis_store, mock_redis_client):
    """Test that only the first delivery of an update claims it."""
    with patch(FROM_URL, new_callable=AsyncMock, return_value=mock_redis_client):
        assert await redis_store.claim("123456", 3600) is True
        assert await redis_store.claim("123456", 3600) is False
        assert await redis_store.claim("123457", 3600) is True


@pytest.mark.asyncio
async def test_claim_uses_set_nx_with_ttl(redis_store, mock_redis_client):
    """Test the key namespace and the atomic SET options."""
    with patch(FROM_URL, new_callable=AsyncMock, return_value=mock_redis_client):
        await redis_store.claim("123456", ttl_seconds=60)

    mock_redis_client.set.assert_awaited_once_with("telegram:update:123456", "1", ex=60, nx=True)


@pytest.mark.asyncio
async def test_client_reuse(redis_store, mock_redis_client):
    """Test that client is reused across multiple calls."""
    with patch(FROM_URL, new_callable=AsyncMock, return_value=mock_redis_client) as mock_from_url:
        await redis_store.claim("1", 60)
        await redis_store.claim("2", 60)

        assert mock_from_url.call_count == 1


@pytest.mark.asyncio
async def test_close_closes_redis_connection(redis_store, mock_redis_client):
    """Test close closes Redis connection."""
    redis_store._client = mock_redis_client

    await redis_store.close()

    mock_redis_client.aclose.assert_awaited_once()
    assert redis_store._client is None


@pytest.mark.asyncio
async def test_close_without_connection(redis_store):
    """Test close before any claim."""
    await redis_store.close()
