"""Cleanup of temporary files at process start and shutdown."""

from pdf_unlock_bot.application.ports.file_store import FileStore
from pdf_unlock_bot.application.ports.session_store import SessionStore
from pdf_unlock_bot.infrastructure.logging.logger import logger


class CleanupTemporaryFiles:
    """
    Best-effort removal of files owned by sessions.

    Shutdown releases every session's file; startup sweeps files orphaned by
    a previous process that did not stop gracefully.
    """

    def __init__(self, session_store: SessionStore, file_store: FileStore) -> None:
        """
        Initialize cleanup use case.

        Args:
            session_store: Per-user session storage
            file_store: Temporary PDF storage
        """
        self._session_store = session_store
        self._file_store = file_store

    async def release_sessions(self) -> int:
        """
        Delete every session's owned file and drop the sessions.

        Returns:
            Number of files released
        """
        released = 0
        for user_id, session in await self._session_store.items():
            if session.pending_file_path is not None:
                await self._file_store.delete(session.pending_file_path)
                logger.info("Cleaned up file for user %s", user_id)
                released += 1
            await self._session_store.delete(user_id)
        return released

    async def sweep_stale(self, older_than_seconds: float) -> int:
        """
        Delete stored files older than a threshold.

        Args:
            older_than_seconds: Minimum file age to delete

        Returns:
            Number of deleted files
        """
        removed = await self._file_store.sweep(older_than_seconds)
        if removed:
            logger.info("Swept %d stale temporary file(s)", removed)
        return removed
