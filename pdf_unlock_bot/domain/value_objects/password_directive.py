"""Password directive value object."""

import re
from dataclasses import dataclass
from typing import Optional

_DIRECTIVE_PATTERN = re.compile(r"password:(.*)", re.IGNORECASE)


class EmptyPasswordError(ValueError):
    """Raised when a password directive carries no password."""


@dataclass(frozen=True)
class PasswordDirective:
    """Password supplied as ``password: <secret>``."""

    password: str

    def __post_init__(self) -> None:
        """Validate password."""
        if not self.password:
            raise EmptyPasswordError("Password cannot be empty")

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["PasswordDirective"]:
        """
        Extract a password directive from a message or caption.

        The first ``password:`` (any case) wins; the rest of that line,
        trimmed, is the password.

        Args:
            text: Message text or document caption

        Returns:
            Parsed directive, or None if the text holds no directive

        Raises:
            EmptyPasswordError: If the directive is present but empty
        """
        if not text:
            return None
        match = _DIRECTIVE_PATTERN.search(text)
        if match is None:
            return None
        return cls(match.group(1).strip())

    @property
    def masked(self) -> str:
        """Password replaced by asterisks, for display."""
        return "*" * len(self.password)
