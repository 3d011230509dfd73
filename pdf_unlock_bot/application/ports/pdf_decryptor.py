"""PDF decryptor port."""

from abc import ABC, abstractmethod
from pathlib import Path

from pdf_unlock_bot.application.dtos.unlock import UnlockResult


class PdfDecryptor(ABC):
    """Port interface for the external password-removal operation."""

    @abstractmethod
    async def unlock(self, input_path: Path, output_path: Path, password: str) -> UnlockResult:
        """
        Remove the password of a PDF.

        Implementations never raise: every failure is reported through the
        result.

        Args:
            input_path: Encrypted PDF
            output_path: Destination of the decrypted PDF
            password: Candidate password

        Returns:
            Unlock result (the output may be missing on failure)
        """
        pass
