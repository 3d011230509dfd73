"""HTTP routes."""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Header, HTTPException, Request, status

from pdf_unlock_bot.adapters.inbound.http.telegram_utils import (
    is_valid_secret_token,
    is_valid_webhook_token,
)
from pdf_unlock_bot.infrastructure.config.settings import settings
from pdf_unlock_bot.infrastructure.wiring.container import container

router = APIRouter()

_dispatcher = container.dispatcher
_session_store = container.session_store
_file_store = container.file_store


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.post("/bot{token}", status_code=status.HTTP_200_OK)
async def telegram_webhook(
    token: str,
    request: Request,
    background_tasks: BackgroundTasks,
    x_telegram_bot_api_secret_token: Optional[str] = Header(None),
) -> dict[str, bool]:
    """
    Receive a Telegram update pushed to the webhook.

    The update is handled after the response is sent so that Telegram does
    not time out while a PDF is downloaded or decrypted.

    Args:
        token: Bot token embedded in the webhook path
        request: FastAPI request object (JSON update body)
        background_tasks: FastAPI background task queue
        x_telegram_bot_api_secret_token: Optional secret header set by Telegram

    Returns:
        Acknowledgement

    Raises:
        HTTPException: 404 on token mismatch, 403 on secret mismatch, 400 on bad body
    """
    if not is_valid_webhook_token(token):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    if not is_valid_secret_token(x_telegram_bot_api_secret_token):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid webhook secret token",
        )

    try:
        payload = await request.json()
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Update body must be JSON",
        ) from err

    if not isinstance(payload, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Update body must be a JSON object",
        )

    background_tasks.add_task(_dispatcher.dispatch, payload, "webhook")
    return {"ok": True}


@router.get("/debug/session/{user_id}", status_code=status.HTTP_200_OK)
async def get_session_debug(user_id: str) -> dict:
    """
    Get debug information for a session (only enabled if DEBUG_MODE=true).

    Args:
        user_id: User identifier

    Returns:
        Session debug information

    Raises:
        HTTPException: 404 if DEBUG_MODE is disabled
    """
    if not settings.debug_mode:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Debug endpoint is disabled",
        )

    session = await _session_store.get(user_id)

    if session is None:
        return {"user_id": user_id, "session": None}

    return {
        "user_id": user_id,
        "session": {
            "step": session.step.value,
            "pending_file_path": (
                str(session.pending_file_path) if session.pending_file_path else None
            ),
            "pending_file_name": session.pending_file_name,
            "attempt_count": session.attempt_count,
            "created_at": session.created_at.isoformat(),
        },
    }


@router.post("/debug/session/{user_id}/reset", status_code=status.HTTP_200_OK)
async def reset_session(user_id: str) -> dict:
    """
    Delete a session and its owned file (only enabled if DEBUG_MODE=true).

    Args:
        user_id: User identifier

    Returns:
        Confirmation message

    Raises:
        HTTPException: 404 if DEBUG_MODE is disabled
    """
    if not settings.debug_mode:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Debug endpoint is disabled",
        )

    session = await _session_store.get(user_id)
    if session is not None and session.pending_file_path is not None:
        await _file_store.delete(session.pending_file_path)
    await _session_store.delete(user_id)

    return {
        "user_id": user_id,
        "message": "Session reset successfully",
        "status": "reset",
    }
