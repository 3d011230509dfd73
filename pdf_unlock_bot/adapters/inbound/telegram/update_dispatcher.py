"""Dispatch of Telegram updates to the bot use case."""

from typing import Any
from uuid import uuid4

from pdf_unlock_bot.adapters.inbound.telegram.update_mapper import map_update
from pdf_unlock_bot.application.ports.idempotency_store import IdempotencyStore
from pdf_unlock_bot.application.use_cases.handle_bot_event_use_case import HandleBotEventUseCase
from pdf_unlock_bot.infrastructure.logging.logger import log_event, logger


class UpdateDispatcher:
    """Maps raw updates, drops redeliveries and runs the use case."""

    def __init__(
        self,
        use_case: HandleBotEventUseCase,
        idempotency_store: IdempotencyStore,
        idempotency_ttl_seconds: int,
    ) -> None:
        """
        Initialize dispatcher.

        Args:
            use_case: Bot event use case
            idempotency_store: Store of already handled update ids
            idempotency_ttl_seconds: How long a handled update id is remembered
        """
        self._use_case = use_case
        self._idempotency_store = idempotency_store
        self._idempotency_ttl_seconds = idempotency_ttl_seconds

    async def _is_duplicate(self, update_id: Any) -> bool:
        if update_id is None:
            return False
        key = str(update_id)
        try:
            return not await self._idempotency_store.claim(key, self._idempotency_ttl_seconds)
        except Exception as err:  # noqa: BLE001 - de-duplication is best effort
            logger.warning("Idempotency store unavailable for update %s: %s", key, err)
        return False

    async def dispatch(self, payload: dict[str, Any], component: str) -> None:
        """
        Handle one raw update; never raises.

        Args:
            payload: Telegram update payload
            component: Delivery mode for logging ('webhook' or 'polling')
        """
        turn_id = str(uuid4())
        try:
            event = map_update(payload)
        except Exception:
            logger.exception("Malformed update %s", payload.get("update_id"))
            return

        if event is None:
            log_event(None, turn_id, component, update_id=payload.get("update_id"), action="ignored")
            return

        if await self._is_duplicate(event.update_id):
            log_event(
                event.user_id, turn_id, component, update_id=event.update_id, action="duplicate"
            )
            return

        log_event(
            event.user_id,
            turn_id,
            component,
            update_id=event.update_id,
            kind=event.kind.value,
        )

        try:
            result = await self._use_case.execute(event, turn_id=turn_id)
        except Exception:
            logger.exception("Unhandled error while handling update %s", event.update_id)
            return

        log_event(
            event.user_id,
            turn_id,
            component,
            action=result.action,
            step_after=result.step,
        )
