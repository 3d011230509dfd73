"""qpdf command-line decryption adapter."""

from pathlib import Path

from pdf_unlock_bot.adapters.outbound.decryption.subprocess_decryptor import SubprocessDecryptor
from pdf_unlock_bot.application.dtos.unlock import UnlockFailureReason, UnlockResult

# qpdf exits with 3 when it succeeded with warnings
_SUCCESS_CODES = (0, 3)

_PASSWORD_MARKERS = ("invalid password", "password required")
_CORRUPT_MARKERS = (
    "not a pdf file",
    "can't find pdf header",
    "unable to find trailer",
    "no such file",
    "unable to open",
)


class QpdfDecryptor(SubprocessDecryptor):
    """Runs ``qpdf --decrypt`` with the password file read from stdin."""

    def __init__(self, timeout_seconds: float, binary: str = "qpdf") -> None:
        """
        Initialize decryptor.

        Args:
            timeout_seconds: Maximum run time of one attempt
            binary: qpdf executable name or path
        """
        super().__init__(timeout_seconds)
        self._binary = binary

    def _command(self, input_path: Path, output_path: Path) -> list[str]:
        return [self._binary, "--password-file=-", "--decrypt", str(input_path), str(output_path)]

    def _stdin(self, password: str) -> bytes:
        # qpdf takes the first line of the password file
        return f"{password}\n".encode("utf-8")

    def _classify(self, returncode: int, stderr: str, output_path: Path) -> UnlockResult:
        if returncode in _SUCCESS_CODES and output_path.exists():
            return UnlockResult.unlocked()
        message = stderr.lower()
        if any(marker in message for marker in _PASSWORD_MARKERS):
            return UnlockResult.failed(UnlockFailureReason.WRONG_OR_MISSING_PASSWORD, stderr)
        if any(marker in message for marker in _CORRUPT_MARKERS):
            return UnlockResult.failed(UnlockFailureReason.CORRUPT_OR_UNREADABLE_INPUT, stderr)
        return UnlockResult.failed(UnlockFailureReason.OTHER, stderr)
