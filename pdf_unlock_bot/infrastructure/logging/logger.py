"""Structured logger for observability."""

import logging
from typing import Any, Optional

# Configure root logger with JSON-like structured format
_logger = logging.getLogger("pdf_unlock_bot")
_logger.setLevel(logging.INFO)

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_event(
    user_id: Optional[str],
    turn_id: str,
    component: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log structured event for an inbound update.

    Args:
        user_id: User identifier (None when the sender is unknown)
        turn_id: Turn identifier (UUID string)
        component: Component name (e.g., 'webhook', 'polling', 'use_case')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {
        "user_id": user_id,
        "turn_id": turn_id,
        "component": component,
    }
    fields.update(kwargs)

    # Format as key=value pairs for readability
    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    log_message = " | ".join(log_parts)

    _logger.log(level, log_message)


def log_file_cleanup(path: str, error: Optional[BaseException] = None) -> None:
    """
    Log removal of a temporary file.

    Args:
        path: File path
        error: Error raised while deleting, if any
    """
    if error is None:
        _logger.info("file_cleanup | path=%r", path)
    else:
        _logger.error("file_cleanup_failed | path=%r | error=%r", path, error)


# Module-level logger for ad-hoc messages
logger = _logger
