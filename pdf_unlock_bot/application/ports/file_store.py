"""File store port."""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator


class FileStore(ABC):
    """Port interface for scoped temporary PDF storage."""

    @abstractmethod
    async def store_inbound(self, data: bytes, suggested_name: str) -> Path:
        """
        Write an uploaded file to a fresh inbound path.

        Args:
            data: File contents
            suggested_name: Name supplied by the user

        Returns:
            Path of the stored file

        Raises:
            OSError: If the file cannot be written
        """
        pass

    @abstractmethod
    def reserve_outbound(self, original_name: str) -> Path:
        """
        Derive a fresh outbound path for an unlocked file.

        Args:
            original_name: Name of the file being unlocked

        Returns:
            Path that no other operation uses (the file is not created)
        """
        pass

    @abstractmethod
    async def delete(self, path: Path) -> None:
        """
        Delete a file; a missing file is not an error.

        Args:
            path: File path
        """
        pass

    @abstractmethod
    async def sweep(self, older_than_seconds: float) -> int:
        """
        Delete stored files older than a threshold.

        Args:
            older_than_seconds: Minimum file age to delete

        Returns:
            Number of deleted files
        """
        pass

    @asynccontextmanager
    async def outbound(self, original_name: str) -> AsyncIterator[Path]:
        """
        Reserve an outbound path and delete it on every exit.

        Args:
            original_name: Name of the file being unlocked

        Yields:
            Reserved outbound path
        """
        path = self.reserve_outbound(original_name)
        try:
            yield path
        finally:
            await self.delete(path)
