"""Session store port."""

from abc import ABC, abstractmethod
from typing import Optional

from pdf_unlock_bot.domain.entities.session import Session


class SessionStore(ABC):
    """Port interface for per-user session storage."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[Session]:
        """
        Get the session of a user.

        Args:
            user_id: User identifier

        Returns:
            Session entity, or None if the user has no session
        """
        pass

    @abstractmethod
    async def set(self, user_id: str, session: Session) -> None:
        """
        Create or replace the session of a user.

        Args:
            user_id: User identifier
            session: Session entity to store
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """
        Delete the session of a user (no-op if absent).

        Args:
            user_id: User identifier
        """
        pass

    @abstractmethod
    async def items(self) -> list[tuple[str, Session]]:
        """
        Snapshot of all sessions.

        Returns:
            List of (user_id, session) pairs
        """
        pass
