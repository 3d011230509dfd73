"""Long-polling delivery of Telegram updates."""

import asyncio
from typing import Optional

from pdf_unlock_bot.adapters.inbound.telegram.update_dispatcher import UpdateDispatcher
from pdf_unlock_bot.adapters.outbound.telegram.telegram_transport import TelegramTransport
from pdf_unlock_bot.application.ports.messaging_transport import TransportError
from pdf_unlock_bot.infrastructure.logging.logger import logger


class TelegramPoller:
    """Fetches updates with getUpdates and handles each one in its own task."""

    def __init__(
        self,
        transport: TelegramTransport,
        dispatcher: UpdateDispatcher,
        timeout_seconds: int = 30,
        error_delay_seconds: float = 5.0,
    ) -> None:
        """
        Initialize poller.

        Args:
            transport: Telegram transport
            dispatcher: Update dispatcher
            timeout_seconds: Long-poll timeout
            error_delay_seconds: Pause after a failed getUpdates call
        """
        self._transport = transport
        self._dispatcher = dispatcher
        self._timeout_seconds = timeout_seconds
        self._error_delay_seconds = error_delay_seconds
        self._offset: Optional[int] = None
        self._loop_task: Optional[asyncio.Task] = None
        self._handlers: set[asyncio.Task] = set()

    async def poll_once(self) -> int:
        """
        Fetch one batch of updates and schedule their handling.

        Returns:
            Number of scheduled updates
        """
        updates = await self._transport.get_updates(self._offset, self._timeout_seconds)
        for payload in updates:
            self._offset = payload["update_id"] + 1
            task = asyncio.create_task(self._dispatcher.dispatch(payload, "polling"))
            self._handlers.add(task)
            task.add_done_callback(self._handlers.discard)
        return len(updates)

    async def run(self) -> None:
        """Poll until cancelled."""
        try:
            await self._transport.delete_webhook()
        except TransportError as err:
            logger.error("Could not remove webhook before polling: %s", err)

        while True:
            try:
                await self.poll_once()
            except TransportError as err:
                logger.error("Polling error: %s", err)
                await asyncio.sleep(self._error_delay_seconds)

    def start(self) -> None:
        """Start polling in a background task."""
        if self._loop_task is None:
            self._loop_task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """Cancel polling and any in-flight update handlers."""
        tasks = list(self._handlers)
        if self._loop_task is not None:
            tasks.append(self._loop_task)
            self._loop_task = None
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
