"""Telegram webhook request validation helpers."""

import hmac
from typing import Optional

from pdf_unlock_bot.infrastructure.config.settings import settings


def is_valid_webhook_token(token: str) -> bool:
    """
    Check the token embedded in the webhook path.

    Args:
        token: Token taken from the request path

    Returns:
        True if it matches the configured bot token
    """
    if not settings.bot_token:
        return False
    return hmac.compare_digest(token.encode("utf-8"), settings.bot_token.encode("utf-8"))


def is_valid_secret_token(header_value: Optional[str]) -> bool:
    """
    Check the X-Telegram-Bot-Api-Secret-Token header.

    Args:
        header_value: Header value, or None if absent

    Returns:
        True if no secret is configured or the header matches it
    """
    if not settings.webhook_secret_token:
        return True
    if header_value is None:
        return False
    return hmac.compare_digest(
        header_value.encode("utf-8"), settings.webhook_secret_token.encode("utf-8")
    )
