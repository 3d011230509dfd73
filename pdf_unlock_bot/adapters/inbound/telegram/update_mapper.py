"""Mapping of raw Telegram updates to inbound events."""

from typing import Any, Optional

from pdf_unlock_bot.application.dtos.events import DocumentInfo, EventKind, InboundEvent


def _user_fields(sender: Optional[dict[str, Any]]) -> dict[str, Any]:
    if not sender or sender.get("id") is None:
        return {"user_id": None, "first_name": None}
    return {"user_id": str(sender["id"]), "first_name": sender.get("first_name")}


def parse_command(text: str) -> Optional[str]:
    """
    Extract the command name from a ``/command@botname args`` message.

    Args:
        text: Message text

    Returns:
        Lower-cased command name, or None if the text is not a command
    """
    if not text.startswith("/"):
        return None
    head = text[1:].split(maxsplit=1)[0] if len(text) > 1 else ""
    name = head.split("@", 1)[0].lower()
    return name or None


def map_update(payload: dict[str, Any]) -> Optional[InboundEvent]:
    """
    Map a Telegram update payload to an inbound event.

    Args:
        payload: Update as delivered by the Bot API (webhook body or getUpdates item)

    Returns:
        Inbound event, or None for updates the bot does not handle
    """
    update_id = payload.get("update_id")

    callback = payload.get("callback_query")
    if callback:
        chat = (callback.get("message") or {}).get("chat") or {}
        if chat.get("id") is None or not callback.get("data"):
            return None
        return InboundEvent(
            kind=EventKind.CALLBACK,
            chat_id=chat["id"],
            update_id=update_id,
            callback_id=callback.get("id"),
            callback_data=callback["data"],
            **_user_fields(callback.get("from")),
        )

    message = payload.get("message")
    if not message or (message.get("chat") or {}).get("id") is None:
        return None

    common: dict[str, Any] = {
        "chat_id": message["chat"]["id"],
        "update_id": update_id,
        **_user_fields(message.get("from")),
    }

    document = message.get("document")
    if document is not None:
        return InboundEvent(
            kind=EventKind.DOCUMENT,
            caption=message.get("caption"),
            document=DocumentInfo(
                file_id=document.get("file_id"),
                file_name=document.get("file_name"),
                mime_type=document.get("mime_type"),
                file_size=document.get("file_size"),
            ),
            **common,
        )

    text = message.get("text")
    if not text:
        return None

    command = parse_command(text)
    if command is not None:
        return InboundEvent(kind=EventKind.COMMAND, command=command, text=text, **common)
    return InboundEvent(kind=EventKind.TEXT, text=text, **common)
