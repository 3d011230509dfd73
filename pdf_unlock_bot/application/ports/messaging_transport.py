"""Messaging transport port."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

# Rows of (label, callback payload) pairs
Buttons = list[list[tuple[str, str]]]


class TransportError(Exception):
    """Raised when the messaging platform cannot be reached or rejects a call."""


class MessagingTransport(ABC):
    """Port interface for outbound messaging operations."""

    @abstractmethod
    async def send_message(self, chat_id: int, text: str, buttons: Optional[Buttons] = None) -> int:
        """
        Send a Markdown-formatted text message.

        Args:
            chat_id: Chat identifier
            text: Message text
            buttons: Optional inline keyboard rows

        Returns:
            Identifier of the sent message

        Raises:
            TransportError: If the message cannot be sent
        """
        pass

    @abstractmethod
    async def edit_message(
        self,
        chat_id: int,
        message_id: int,
        text: str,
        buttons: Optional[Buttons] = None,
    ) -> None:
        """
        Replace the text of a previously sent message.

        Raises:
            TransportError: If the message cannot be edited
        """
        pass

    @abstractmethod
    async def send_document(self, chat_id: int, path: Path, filename: str) -> None:
        """
        Send a local file as a document.

        Args:
            chat_id: Chat identifier
            path: Local file path
            filename: File name shown to the user

        Raises:
            TransportError: If the document cannot be sent
        """
        pass

    @abstractmethod
    async def answer_callback(self, callback_id: str) -> None:
        """
        Acknowledge an inline-button callback.

        Raises:
            TransportError: If the acknowledgement fails
        """
        pass

    @abstractmethod
    async def download_file(self, file_id: str) -> bytes:
        """
        Download an uploaded file.

        Args:
            file_id: Platform file identifier

        Returns:
            File contents

        Raises:
            TransportError: If the download fails
        """
        pass

    def escape(self, text: str) -> str:
        """
        Escape user-supplied text for the transport's message format.

        Args:
            text: Raw text such as a file or user name

        Returns:
            Text safe to embed in a formatted message (unchanged by default)
        """
        return text
