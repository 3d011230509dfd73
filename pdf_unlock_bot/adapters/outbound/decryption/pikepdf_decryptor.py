"""pikepdf-backed decryption adapter."""

import sys
from pathlib import Path

from pdf_unlock_bot.adapters.outbound.decryption import pikepdf_worker
from pdf_unlock_bot.adapters.outbound.decryption.subprocess_decryptor import SubprocessDecryptor
from pdf_unlock_bot.application.dtos.unlock import UnlockFailureReason, UnlockResult


class PikepdfDecryptor(SubprocessDecryptor):
    """Runs the bundled pikepdf worker in a child interpreter."""

    WORKER_MODULE = "pdf_unlock_bot.adapters.outbound.decryption.pikepdf_worker"

    def _command(self, input_path: Path, output_path: Path) -> list[str]:
        return [sys.executable, "-m", self.WORKER_MODULE, str(input_path), str(output_path)]

    def _classify(self, returncode: int, stderr: str, output_path: Path) -> UnlockResult:
        if returncode == pikepdf_worker.EXIT_OK and output_path.exists():
            return UnlockResult.unlocked()
        if returncode == pikepdf_worker.EXIT_PASSWORD:
            return UnlockResult.failed(UnlockFailureReason.WRONG_OR_MISSING_PASSWORD, stderr)
        if returncode == pikepdf_worker.EXIT_CORRUPT:
            return UnlockResult.failed(UnlockFailureReason.CORRUPT_OR_UNREADABLE_INPUT, stderr)
        return UnlockResult.failed(UnlockFailureReason.OTHER, stderr)
