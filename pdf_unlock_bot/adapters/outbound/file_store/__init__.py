"""File store outbound adapter."""

from pdf_unlock_bot.adapters.outbound.file_store.local_file_store import (
    LocalFileStore,
    sanitize_file_name,
)

__all__ = [
    "LocalFileStore",
    "sanitize_file_name",
]
