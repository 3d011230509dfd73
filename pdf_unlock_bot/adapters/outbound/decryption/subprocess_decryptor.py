"""Base adapter running an external decryption process."""

import asyncio
import contextlib
from abc import abstractmethod
from pathlib import Path

from pdf_unlock_bot.application.dtos.unlock import UnlockFailureReason, UnlockResult
from pdf_unlock_bot.application.ports.pdf_decryptor import PdfDecryptor
from pdf_unlock_bot.infrastructure.logging.logger import logger


class SubprocessDecryptor(PdfDecryptor):
    """
    Runs one external process per unlock attempt.

    The password travels on stdin so it never shows up in the process list.
    A process outliving ``timeout_seconds`` is killed and reported as a
    failure with reason ``other``.
    """

    def __init__(self, timeout_seconds: float) -> None:
        """
        Initialize decryptor.

        Args:
            timeout_seconds: Maximum run time of one attempt
        """
        self._timeout = timeout_seconds

    @abstractmethod
    def _command(self, input_path: Path, output_path: Path) -> list[str]:
        """Build the argv of the external process."""

    @abstractmethod
    def _classify(self, returncode: int, stderr: str, output_path: Path) -> UnlockResult:
        """Map the process outcome to an unlock result."""

    def _stdin(self, password: str) -> bytes:
        """Bytes written to the process stdin."""
        return password.encode("utf-8")

    async def unlock(self, input_path: Path, output_path: Path, password: str) -> UnlockResult:
        """
        Remove the password of a PDF.

        Args:
            input_path: Encrypted PDF
            output_path: Destination of the decrypted PDF
            password: Candidate password

        Returns:
            Unlock result; never raises
        """
        command = self._command(Path(input_path), Path(output_path))
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as err:
            logger.error("Cannot start decryption process %r: %s", command[0], err)
            return UnlockResult.failed(UnlockFailureReason.OTHER, f"cannot start {command[0]}")

        try:
            _, stderr = await asyncio.wait_for(
                process.communicate(self._stdin(password)),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Decryption of %s timed out after %ss", input_path, self._timeout)
            return UnlockResult.failed(
                UnlockFailureReason.OTHER, f"timed out after {self._timeout}s"
            )
        except Exception as err:  # noqa: BLE001 - adapter boundary
            logger.exception("Decryption process for %s failed", input_path)
            return UnlockResult.failed(UnlockFailureReason.OTHER, str(err))
        finally:
            if process.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
                await process.wait()

        return self._classify(
            process.returncode,
            (stderr or b"").decode("utf-8", errors="replace").strip(),
            Path(output_path),
        )
