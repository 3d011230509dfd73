"""Unit tests for the update dispatcher."""

from unittest.mock import AsyncMock

import pytest

from pdf_unlock_bot.adapters.inbound.telegram.update_dispatcher import UpdateDispatcher
from pdf_unlock_bot.application.dtos.events import BotEventResult, EventKind

UPDATE = {
    "update_id": 100,
    "message": {"from": {"id": 42, "first_name": "Ada"}, "chat": {"id": 1001}, "text": "/start"},
}


class MemoryIdempotencyStore:
    """Idempotency store remembering keys in a set."""

    def __init__(self):
        self.keys = set()

    async def claim(self, update_id, ttl_seconds):
        if update_id in self.keys:
            return False
        self.keys.add(update_id)
        return True


@pytest.fixture
def use_case():
    """Create mock use case."""
    mock = AsyncMock()
    mock.execute.return_value = BotEventResult(user_id="42", action="start", step="awaiting_file")
    return mock


@pytest.mark.asyncio
async def test_dispatch_runs_use_case(use_case):
    """Test that a mapped update reaches the use case."""
    dispatcher = UpdateDispatcher(use_case, MemoryIdempotencyStore(), 3600)

    await dispatcher.dispatch(UPDATE, "webhook")

    event = use_case.execute.call_args.args[0]
    assert event.kind == EventKind.COMMAND
    assert event.command == "start"
    assert use_case.execute.call_args.kwargs["turn_id"]


@pytest.mark.asyncio
async def test_redelivered_update_is_skipped(use_case):
    """Test that an update id is handled only once."""
    dispatcher = UpdateDispatcher(use_case, MemoryIdempotencyStore(), 3600)

    await dispatcher.dispatch(UPDATE, "webhook")
    await dispatcher.dispatch(UPDATE, "webhook")

    assert use_case.execute.await_count == 1


@pytest.mark.asyncio
async def test_unmapped_update_is_ignored(use_case):
    """Test that unsupported updates never reach the use case."""
    dispatcher = UpdateDispatcher(use_case, MemoryIdempotencyStore(), 3600)

    await dispatcher.dispatch({"update_id": 101, "poll": {}}, "polling")

    use_case.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_use_case_errors_are_contained(use_case):
    """Test that a failing handler does not propagate."""
    use_case.execute.side_effect = RuntimeError("boom")
    dispatcher = UpdateDispatcher(use_case, MemoryIdempotencyStore(), 3600)

    await dispatcher.dispatch(UPDATE, "polling")

    use_case.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_idempotency_store_failure_does_not_block(use_case):
    """Test that an unavailable store lets the update through."""
    store = AsyncMock()
    store.claim.side_effect = ConnectionError("redis down")
    dispatcher = UpdateDispatcher(use_case, store, 3600)

    await dispatcher.dispatch(UPDATE, "webhook")

    use_case.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_malformed_update_is_contained(use_case):
    """Test that an update that cannot be mapped is logged and dropped."""
    dispatcher = UpdateDispatcher(use_case, MemoryIdempotencyStore(), 3600)
    malformed = {"update_id": 102, "message": {"chat": {"id": 1001}, "from": "nobody", "text": "hi"}}

    await dispatcher.dispatch(malformed, "polling")

    use_case.execute.assert_not_awaited()
