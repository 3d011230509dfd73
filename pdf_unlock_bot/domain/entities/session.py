"""Session entities for the unlock conversation."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import ClassVar, Optional, Union


class SessionStep(str, Enum):
    """Step of the unlock conversation a user is on."""

    AWAITING_FILE = "awaiting_file"
    AWAITING_PASSWORD = "awaiting_password"
    PROCESSING = "processing"


@dataclass(frozen=True)
class PendingFile:
    """Locally stored file owned by a session."""

    path: Path
    name: str


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AwaitingFileSession:
    """Session waiting for the user to upload a PDF."""

    step: ClassVar[SessionStep] = SessionStep.AWAITING_FILE

    user_id: str
    attempt_count: int = 0
    created_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        """Validate attempt counter."""
        if self.attempt_count < 0:
            raise ValueError("Attempt count cannot be negative")

    @property
    def pending_file(self) -> None:
        """Sessions in this step never own a file."""
        return None

    @property
    def pending_file_path(self) -> Optional[Path]:
        """Path of the owned file (always None)."""
        return None

    @property
    def pending_file_name(self) -> Optional[str]:
        """Display name of the owned file (always None)."""
        return None


@dataclass(frozen=True)
class _FileSession:
    """Base for sessions that own a pending file."""

    user_id: str
    pending_file: PendingFile
    attempt_count: int = 0
    created_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        """Validate pending file and attempt counter."""
        if self.pending_file is None:
            raise ValueError(f"{type(self).__name__} requires a pending file")
        if self.attempt_count < 0:
            raise ValueError("Attempt count cannot be negative")

    @property
    def pending_file_path(self) -> Path:
        """Path of the owned file."""
        return self.pending_file.path

    @property
    def pending_file_name(self) -> str:
        """Display name of the owned file."""
        return self.pending_file.name


@dataclass(frozen=True)
class AwaitingPasswordSession(_FileSession):
    """Session holding an uploaded PDF until a password arrives."""

    step: ClassVar[SessionStep] = SessionStep.AWAITING_PASSWORD

    def begin_attempt(self) -> "ProcessingSession":
        """
        Start an unlock attempt.

        Returns:
            Processing session with the attempt counter incremented
        """
        return ProcessingSession(
            user_id=self.user_id,
            pending_file=self.pending_file,
            attempt_count=self.attempt_count + 1,
            created_at=self.created_at,
        )


@dataclass(frozen=True)
class ProcessingSession(_FileSession):
    """Session with an unlock attempt in flight."""

    step: ClassVar[SessionStep] = SessionStep.PROCESSING

    def retry(self) -> AwaitingPasswordSession:
        """
        Return to waiting for a password after a failed attempt.

        Returns:
            Awaiting-password session keeping the attempt counter
        """
        return AwaitingPasswordSession(
            user_id=self.user_id,
            pending_file=self.pending_file,
            attempt_count=self.attempt_count,
            created_at=self.created_at,
        )


Session = Union[AwaitingFileSession, AwaitingPasswordSession, ProcessingSession]
