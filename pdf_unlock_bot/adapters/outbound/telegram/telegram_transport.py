"""Telegram Bot API transport adapter."""

from pathlib import Path
from typing import Any, Optional

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.helpers import escape_markdown

from pdf_unlock_bot.application.ports.messaging_transport import (
    Buttons,
    MessagingTransport,
    TransportError,
)

ALLOWED_UPDATES = ["message", "callback_query"]


def build_keyboard(buttons: Optional[Buttons]) -> Optional[InlineKeyboardMarkup]:
    """
    Build an inline keyboard from (label, payload) rows.

    Args:
        buttons: Keyboard rows, or None

    Returns:
        Inline keyboard markup, or None when there are no buttons
    """
    if not buttons:
        return None
    return InlineKeyboardMarkup(
        [[InlineKeyboardButton(label, callback_data=data) for label, data in row] for row in buttons]
    )


class TelegramTransport(MessagingTransport):
    """python-telegram-bot implementation of the messaging transport."""

    def __init__(self, token: str, bot: Optional[Bot] = None) -> None:
        """
        Initialize Telegram transport.

        Args:
            token: Bot token
            bot: Optional pre-built Bot instance (created lazily otherwise)
        """
        self._token = token
        self._bot = bot
        self._initialized = False

    async def _get_bot(self) -> Bot:
        """
        Get or create the initialized Bot instance.

        Returns:
            Bot instance
        """
        if self._bot is None:
            self._bot = Bot(self._token)
        if not self._initialized:
            try:
                await self._bot.initialize()
            except TelegramError as err:
                raise TransportError(f"Telegram initialization failed: {err}") from err
            self._initialized = True
        return self._bot

    def escape(self, text: str) -> str:
        """Escape Markdown (v1) entities in user-supplied text."""
        return escape_markdown(text, version=1)

    async def send_message(self, chat_id: int, text: str, buttons: Optional[Buttons] = None) -> int:
        """Send a Markdown message and return its id."""
        bot = await self._get_bot()
        try:
            message = await bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=ParseMode.MARKDOWN,
                reply_markup=build_keyboard(buttons),
            )
        except TelegramError as err:
            raise TransportError(f"send_message failed: {err}") from err
        return message.message_id

    async def edit_message(
        self,
        chat_id: int,
        message_id: int,
        text: str,
        buttons: Optional[Buttons] = None,
    ) -> None:
        """Replace the text of a sent message."""
        bot = await self._get_bot()
        try:
            await bot.edit_message_text(
                text=text,
                chat_id=chat_id,
                message_id=message_id,
                parse_mode=ParseMode.MARKDOWN,
                reply_markup=build_keyboard(buttons),
            )
        except TelegramError as err:
            raise TransportError(f"edit_message failed: {err}") from err

    async def send_document(self, chat_id: int, path: Path, filename: str) -> None:
        """Upload a local file as a document."""
        bot = await self._get_bot()
        try:
            await bot.send_document(chat_id=chat_id, document=Path(path), filename=filename)
        except TelegramError as err:
            raise TransportError(f"send_document failed: {err}") from err

    async def answer_callback(self, callback_id: str) -> None:
        """Acknowledge an inline-button callback."""
        bot = await self._get_bot()
        try:
            await bot.answer_callback_query(callback_query_id=callback_id)
        except TelegramError as err:
            raise TransportError(f"answer_callback failed: {err}") from err

    async def download_file(self, file_id: str) -> bytes:
        """Download an uploaded file into memory."""
        bot = await self._get_bot()
        try:
            telegram_file = await bot.get_file(file_id)
            data = await telegram_file.download_as_bytearray()
        except TelegramError as err:
            raise TransportError(f"download failed: {err}") from err
        return bytes(data)

    async def set_webhook(self, url: str, secret_token: Optional[str] = None) -> None:
        """
        Register the webhook URL.

        Args:
            url: Full externally reachable webhook URL
            secret_token: Optional secret echoed back in a request header
        """
        bot = await self._get_bot()
        try:
            await bot.set_webhook(
                url=url,
                secret_token=secret_token or None,
                allowed_updates=ALLOWED_UPDATES,
            )
        except TelegramError as err:
            raise TransportError(f"set_webhook failed: {err}") from err

    async def delete_webhook(self) -> None:
        """Remove any registered webhook so that polling can receive updates."""
        bot = await self._get_bot()
        try:
            await bot.delete_webhook()
        except TelegramError as err:
            raise TransportError(f"delete_webhook failed: {err}") from err

    async def get_updates(self, offset: Optional[int], timeout: int) -> list[dict[str, Any]]:
        """
        Long-poll for updates.

        Args:
            offset: Identifier of the first update to return
            timeout: Long-poll timeout in seconds

        Returns:
            Raw update payloads
        """
        bot = await self._get_bot()
        try:
            updates = await bot.get_updates(
                offset=offset,
                timeout=timeout,
                allowed_updates=ALLOWED_UPDATES,
            )
        except TelegramError as err:
            raise TransportError(f"get_updates failed: {err}") from err
        return [update.to_dict() for update in updates]

    async def close(self) -> None:
        """Shut down the underlying HTTP client."""
        if self._bot is not None and self._initialized:
            await self._bot.shutdown()
            self._initialized = False
