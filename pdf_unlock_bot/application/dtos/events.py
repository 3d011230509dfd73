"""Inbound event and handling result DTOs."""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict

from pdf_unlock_bot.application.dtos.base import DTO


class EventKind(str, Enum):
    """Kind of inbound event delivered by the transport."""

    COMMAND = "command"
    DOCUMENT = "document"
    TEXT = "text"
    CALLBACK = "callback"


class DocumentInfo(DTO):
    """Metadata of an uploaded document (nothing is downloaded yet)."""

    file_id: Optional[str] = None
    file_name: Optional[str] = None
    mime_type: Optional[str] = None
    file_size: Optional[int] = None


class InboundEvent(DTO):
    """Transport-neutral inbound event."""

    kind: EventKind
    chat_id: int
    user_id: Optional[str] = None
    first_name: Optional[str] = None
    update_id: Optional[int] = None
    command: Optional[str] = None  # start, help, status, cancel, ...
    text: Optional[str] = None
    caption: Optional[str] = None
    document: Optional[DocumentInfo] = None
    callback_id: Optional[str] = None
    callback_data: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "kind": "document",
                "chat_id": 123456789,
                "user_id": "123456789",
                "first_name": "Ada",
                "update_id": 100,
                "caption": "password: mypassword123",
                "document": {
                    "file_id": "BQACAgIAAxkBAAIB",
                    "file_name": "statement.pdf",
                    "mime_type": "application/pdf",
                    "file_size": 48213,
                },
            }
        }
    )


class BotEventResult(DTO):
    """Outcome of handling one inbound event."""

    user_id: Optional[str] = None
    action: str
    step: Optional[str] = None  # Session step after handling, None if no session
