"""In-memory session store adapter."""

from typing import Optional

from pdf_unlock_bot.application.ports.session_store import SessionStore
from pdf_unlock_bot.domain.entities.session import Session


class InMemorySessionStore(SessionStore):
    """
    In-memory implementation of the session store.

    State lives in a plain dict of this process and is lost on restart.
    Each operation is atomic under asyncio, but read-modify-write sequences
    spanning an await are not: two events of the same user can interleave.
    """

    def __init__(self) -> None:
        """Initialize in-memory store."""
        self._storage: dict[str, Session] = {}

    async def get(self, user_id: str) -> Optional[Session]:
        """
        Get the session of a user.

        Args:
            user_id: User identifier

        Returns:
            Session entity, or None if not found
        """
        return self._storage.get(user_id)

    async def set(self, user_id: str, session: Session) -> None:
        """
        Create or replace the session of a user.

        Args:
            user_id: User identifier
            session: Session entity to store
        """
        self._storage[user_id] = session

    async def delete(self, user_id: str) -> None:
        """
        Delete the session of a user.

        Args:
            user_id: User identifier
        """
        if user_id in self._storage:
            del self._storage[user_id]

    async def items(self) -> list[tuple[str, Session]]:
        """Snapshot of all sessions."""
        return list(self._storage.items())
