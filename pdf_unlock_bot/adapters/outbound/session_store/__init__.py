"""Session store outbound adapter."""

from pdf_unlock_bot.adapters.outbound.session_store.in_memory_session_store import (
    InMemorySessionStore,
)

__all__ = [
    "InMemorySessionStore",
]
