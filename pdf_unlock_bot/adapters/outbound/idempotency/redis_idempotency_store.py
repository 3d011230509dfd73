"""Redis idempotency store adapter."""

from typing import Optional

from redis import asyncio as aioredis

from pdf_unlock_bot.application.ports.idempotency_store import IdempotencyStore


class RedisIdempotencyStore(IdempotencyStore):
    """
    Claims Telegram update ids with ``SET NX EX``.

    One key per update, expiring after the TTL. Concurrent redeliveries of an
    update (webhook retries while the first delivery is still running) race on
    the same key and only one of them wins.
    """

    KEY_PREFIX = "telegram:update:"

    def __init__(self, redis_url: str) -> None:
        """
        Initialize Redis idempotency store.

        Args:
            redis_url: Redis connection URL
        """
        self._redis_url = redis_url
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        if self._client is None:
            self._client = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def claim(self, update_id: str, ttl_seconds: int) -> bool:
        """
        Claim an update id.

        Args:
            update_id: Telegram update identifier
            ttl_seconds: Lifetime of the claim in seconds

        Returns:
            True if the key was created by this call
        """
        client = await self._get_client()
        created = await client.set(f"{self.KEY_PREFIX}{update_id}", "1", ex=ttl_seconds, nx=True)
        return bool(created)

    async def close(self) -> None:
        """Close the Redis connection, if one was opened."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
