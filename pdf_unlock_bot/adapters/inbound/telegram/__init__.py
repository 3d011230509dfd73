"""Telegram inbound adapter."""

from pdf_unlock_bot.adapters.inbound.telegram.poller import TelegramPoller
from pdf_unlock_bot.adapters.inbound.telegram.update_dispatcher import UpdateDispatcher
from pdf_unlock_bot.adapters.inbound.telegram.update_mapper import map_update

__all__ = [
    "TelegramPoller",
    "UpdateDispatcher",
    "map_update",
]
