"""Unlock attempt DTOs."""

from enum import Enum
from typing import Optional

from pdf_unlock_bot.application.dtos.base import DTO


class UnlockFailureReason(str, Enum):
    """Advisory classification of a failed unlock attempt."""

    WRONG_OR_MISSING_PASSWORD = "wrong_or_missing_password"
    CORRUPT_OR_UNREADABLE_INPUT = "corrupt_or_unreadable_input"
    OTHER = "other"


class UnlockResult(DTO):
    """Result of one unlock attempt."""

    success: bool
    reason: Optional[UnlockFailureReason] = None
    detail: str = ""

    @classmethod
    def unlocked(cls) -> "UnlockResult":
        """Build a success result."""
        return cls(success=True)

    @classmethod
    def failed(cls, reason: UnlockFailureReason, detail: str = "") -> "UnlockResult":
        """Build a failure result."""
        return cls(success=False, reason=reason, detail=detail)
