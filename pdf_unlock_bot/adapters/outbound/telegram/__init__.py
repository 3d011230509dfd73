"""Telegram outbound adapter."""

from pdf_unlock_bot.adapters.outbound.telegram.telegram_transport import TelegramTransport

__all__ = [
    "TelegramTransport",
]
