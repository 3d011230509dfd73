"""Dependency injection container."""

from pdf_unlock_bot.adapters.inbound.telegram.poller import TelegramPoller
from pdf_unlock_bot.adapters.inbound.telegram.update_dispatcher import UpdateDispatcher
from pdf_unlock_bot.adapters.outbound.telegram import TelegramTransport
from pdf_unlock_bot.application.ports.file_store import FileStore
from pdf_unlock_bot.application.ports.idempotency_store import IdempotencyStore
from pdf_unlock_bot.application.ports.session_store import SessionStore
from pdf_unlock_bot.application.use_cases.cleanup_temporary_files import CleanupTemporaryFiles
from pdf_unlock_bot.application.use_cases.handle_bot_event_use_case import HandleBotEventUseCase
from pdf_unlock_bot.infrastructure.config.settings import settings
from pdf_unlock_bot.infrastructure.wiring.dependencies import (
    create_decryptor,
    create_file_store,
    create_handle_bot_event_use_case,
    create_idempotency_store,
    create_session_store,
    create_transport,
)


class Container:
    """Dependency injection container sharing one instance of each component."""

    def __init__(self) -> None:
        """Initialize container with dependencies."""
        self._session_store: SessionStore = create_session_store()
        self._file_store: FileStore = create_file_store()
        self._transport: TelegramTransport = create_transport()
        self._idempotency_store: IdempotencyStore = create_idempotency_store()

        # Use cases
        self._handle_bot_event_use_case: HandleBotEventUseCase = create_handle_bot_event_use_case(
            self._session_store,
            self._file_store,
            create_decryptor(),
            self._transport,
        )
        self._cleanup = CleanupTemporaryFiles(self._session_store, self._file_store)

        # Inbound delivery (webhook route or poller)
        self._dispatcher = UpdateDispatcher(
            self._handle_bot_event_use_case,
            self._idempotency_store,
            settings.update_idempotency_ttl_seconds,
        )
        self._poller = TelegramPoller(
            self._transport,
            self._dispatcher,
            timeout_seconds=settings.polling_timeout_seconds,
        )

    @property
    def session_store(self) -> SessionStore:
        """Get session store."""
        return self._session_store

    @property
    def file_store(self) -> FileStore:
        """Get file store."""
        return self._file_store

    @property
    def transport(self) -> TelegramTransport:
        """Get Telegram transport."""
        return self._transport

    @property
    def idempotency_store(self) -> IdempotencyStore:
        """Get idempotency store."""
        return self._idempotency_store

    @property
    def dispatcher(self) -> UpdateDispatcher:
        """Get update dispatcher."""
        return self._dispatcher

    @property
    def poller(self) -> TelegramPoller:
        """Get update poller."""
        return self._poller

    @property
    def cleanup(self) -> CleanupTemporaryFiles:
        """Get cleanup use case."""
        return self._cleanup


# Global container instance
container = Container()
