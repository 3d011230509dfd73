"""Dependency injection factory functions."""

from pdf_unlock_bot.adapters.outbound.decryption import PikepdfDecryptor, QpdfDecryptor
from pdf_unlock_bot.adapters.outbound.file_store import LocalFileStore
from pdf_unlock_bot.adapters.outbound.idempotency.noop_idempotency_store import NoOpIdempotencyStore
from pdf_unlock_bot.adapters.outbound.idempotency.redis_idempotency_store import RedisIdempotencyStore
from pdf_unlock_bot.adapters.outbound.session_store import InMemorySessionStore
from pdf_unlock_bot.adapters.outbound.telegram import TelegramTransport
from pdf_unlock_bot.application.ports.file_store import FileStore
from pdf_unlock_bot.application.ports.idempotency_store import IdempotencyStore
from pdf_unlock_bot.application.ports.messaging_transport import MessagingTransport
from pdf_unlock_bot.application.ports.pdf_decryptor import PdfDecryptor
from pdf_unlock_bot.application.ports.session_store import SessionStore
from pdf_unlock_bot.application.use_cases.handle_bot_event_use_case import HandleBotEventUseCase
from pdf_unlock_bot.infrastructure.config.settings import settings
from pdf_unlock_bot.infrastructure.logging.logger import log_event


def create_session_store() -> SessionStore:
    """
    Factory function to create session store.

    Returns:
        SessionStore instance
    """
    return InMemorySessionStore()


def create_file_store() -> FileStore:
    """
    Factory function to create file store.

    Returns:
        FileStore instance rooted at settings.storage_dir
    """
    return LocalFileStore(settings.storage_dir)


def create_decryptor() -> PdfDecryptor:
    """
    Factory function to create PDF decryptor.

    Returns:
        PdfDecryptor instance (pikepdf worker or qpdf binary)
    """
    if settings.decryptor_backend == "qpdf":
        return QpdfDecryptor(settings.decryption_timeout_seconds, binary=settings.qpdf_binary)
    if settings.decryptor_backend != "pikepdf":
        raise ValueError(f"Unknown DECRYPTOR_BACKEND: {settings.decryptor_backend!r}")
    return PikepdfDecryptor(settings.decryption_timeout_seconds)


def create_transport() -> TelegramTransport:
    """
    Factory function to create Telegram transport.

    Returns:
        TelegramTransport instance (the Bot is created on first use)
    """
    return TelegramTransport(settings.bot_token)


def create_idempotency_store() -> IdempotencyStore:
    """
    Factory function to create idempotency store.

    Returns:
        IdempotencyStore instance (Redis or NoOp)
    """
    if not settings.update_idempotency_enabled:
        return NoOpIdempotencyStore()

    if not settings.redis_url:
        # Idempotency requested without Redis: start anyway, without de-duplication
        return NoOpIdempotencyStore()

    return RedisIdempotencyStore(settings.redis_url)


def create_handle_bot_event_use_case(
    session_store: SessionStore,
    file_store: FileStore,
    decryptor: PdfDecryptor,
    transport: MessagingTransport,
) -> HandleBotEventUseCase:
    """
    Factory function to create HandleBotEventUseCase with dependencies.

    Returns:
        HandleBotEventUseCase instance
    """

    # Wire logger function
    def _logger_func(user_id, turn_id, component, **kwargs):
        log_event(user_id, turn_id, component, **kwargs)

    return HandleBotEventUseCase(
        session_store,
        file_store,
        decryptor,
        transport,
        max_file_size_bytes=settings.max_file_size_bytes,
        logger=_logger_func,
    )
