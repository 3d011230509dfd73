"""Local filesystem file store adapter."""

import asyncio
import re
import time
from pathlib import Path
from typing import Union
from uuid import uuid4

from pdf_unlock_bot.application.ports.file_store import FileStore
from pdf_unlock_bot.infrastructure.logging.logger import log_file_cleanup

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_file_name(name: str) -> str:
    """
    Reduce a user-supplied name to a safe basename.

    Args:
        name: File name as sent by the user

    Returns:
        Basename with unsafe characters replaced by underscores
    """
    base = Path(name.replace("\\", "/")).name
    cleaned = _UNSAFE_CHARS.sub("_", base).strip("._")
    return cleaned or "document.pdf"


class LocalFileStore(FileStore):
    """File store keeping inbound and outbound PDFs under one root directory."""

    INBOUND_DIR = "inbound"
    OUTBOUND_DIR = "outbound"
    OUTBOUND_PREFIX = "unlocked_"

    def __init__(self, root: Union[str, Path]) -> None:
        """
        Initialize file store.

        Args:
            root: Root directory (created on demand)
        """
        self._root = Path(root)
        self._inbound_dir = self._root / self.INBOUND_DIR
        self._outbound_dir = self._root / self.OUTBOUND_DIR

    @property
    def inbound_dir(self) -> Path:
        """Directory holding uploaded files."""
        return self._inbound_dir

    @property
    def outbound_dir(self) -> Path:
        """Directory holding unlocked files."""
        return self._outbound_dir

    async def store_inbound(self, data: bytes, suggested_name: str) -> Path:
        """
        Write an uploaded file to a fresh inbound path.

        Args:
            data: File contents
            suggested_name: Name supplied by the user

        Returns:
            Path of the stored file
        """
        path = self._inbound_dir / f"{uuid4().hex}_{sanitize_file_name(suggested_name)}"
        await asyncio.to_thread(self._write, path, data)
        return path

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # "xb" refuses to overwrite, so a path is never shared
        fh = open(path, "xb")
        try:
            with fh:
                fh.write(data)
        except BaseException:
            # Nobody owns a partly written file
            path.unlink(missing_ok=True)
            raise

    def reserve_outbound(self, original_name: str) -> Path:
        """
        Derive a fresh outbound path for an unlocked file.

        Args:
            original_name: Name of the file being unlocked

        Returns:
            Path under the outbound directory (directory created, file not)
        """
        self._outbound_dir.mkdir(parents=True, exist_ok=True)
        name = f"{self.OUTBOUND_PREFIX}{uuid4().hex}_{sanitize_file_name(original_name)}"
        return self._outbound_dir / name

    async def delete(self, path: Path) -> None:
        """
        Delete a file; a missing file is not an error.

        Failures are logged, never raised.

        Args:
            path: File path
        """
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as err:
            log_file_cleanup(str(path), error=err)

    async def sweep(self, older_than_seconds: float) -> int:
        """
        Delete inbound and outbound files older than a threshold.

        Args:
            older_than_seconds: Minimum file age to delete

        Returns:
            Number of deleted files
        """
        cutoff = time.time() - older_than_seconds
        removed = 0
        for directory in (self._inbound_dir, self._outbound_dir):
            if not directory.is_dir():
                continue
            for path in directory.iterdir():
                try:
                    if path.is_file() and path.stat().st_mtime < cutoff:
                        path.unlink()
                        removed += 1
                        log_file_cleanup(str(path))
                except FileNotFoundError:
                    continue
                except OSError as err:
                    log_file_cleanup(str(path), error=err)
        return removed
