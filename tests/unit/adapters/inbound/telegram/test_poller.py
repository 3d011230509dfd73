"""Unit tests for the long-polling loop."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from pdf_unlock_bot.adapters.inbound.telegram.poller import TelegramPoller
from pdf_unlock_bot.application.ports.messaging_transport import TransportError


@pytest.fixture
def transport():
    """Create mock transport."""
    return AsyncMock()


@pytest.fixture
def dispatcher():
    """Create mock dispatcher."""
    return AsyncMock()


@pytest.mark.asyncio
async def test_poll_once_dispatches_and_advances_offset(transport, dispatcher):
    """Test that each update is dispatched and the offset moves past it."""
    transport.get_updates.return_value = [{"update_id": 10}, {"update_id": 11}]
    poller = TelegramPoller(transport, dispatcher, timeout_seconds=30)

    count = await poller.poll_once()
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert count == 2
    assert dispatcher.dispatch.await_count == 2
    dispatcher.dispatch.assert_any_await({"update_id": 10}, "polling")

    transport.get_updates.return_value = []
    await poller.poll_once()
    transport.get_updates.assert_awaited_with(12, 30)


@pytest.mark.asyncio
async def test_first_poll_has_no_offset(transport, dispatcher):
    """Test the initial getUpdates call."""
    transport.get_updates.return_value = []
    poller = TelegramPoller(transport, dispatcher, timeout_seconds=5)

    await poller.poll_once()

    transport.get_updates.assert_awaited_once_with(None, 5)


@pytest.mark.asyncio
async def test_run_survives_polling_errors(transport, dispatcher):
    """Test that a failed getUpdates is retried after a pause."""
    calls = 0

    async def get_updates(offset, timeout):
        nonlocal calls
        calls += 1
        if calls == 1:
            raise TransportError("network down")
        if calls == 2:
            return [{"update_id": 1}]
        await asyncio.sleep(3600)

    transport.get_updates.side_effect = get_updates
    poller = TelegramPoller(transport, dispatcher, error_delay_seconds=0)

    poller.start()
    for _ in range(20):
        await asyncio.sleep(0)
        if dispatcher.dispatch.await_count:
            break
    await poller.stop()

    transport.delete_webhook.assert_awaited_once()
    dispatcher.dispatch.assert_awaited_once_with({"update_id": 1}, "polling")


@pytest.mark.asyncio
async def test_stop_cancels_in_flight_handlers(transport, dispatcher):
    """Test that stopping cancels handlers still running."""
    started = asyncio.Event()
    cancelled = asyncio.Event()

    async def slow_dispatch(payload, component):
        started.set()
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    dispatcher.dispatch.side_effect = slow_dispatch
    transport.get_updates.return_value = [{"update_id": 1}]
    poller = TelegramPoller(transport, dispatcher)

    await poller.poll_once()
    await started.wait()
    await poller.stop()

    assert cancelled.is_set()
