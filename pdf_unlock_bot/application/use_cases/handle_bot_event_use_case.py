"""Handle bot event use case: the per-user unlock conversation state machine."""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pdf_unlock_bot.application.dtos.events import BotEventResult, EventKind, InboundEvent
from pdf_unlock_bot.application.ports.file_store import FileStore
from pdf_unlock_bot.application.ports.messaging_transport import (
    Buttons,
    MessagingTransport,
    TransportError,
)
from pdf_unlock_bot.application.ports.pdf_decryptor import PdfDecryptor
from pdf_unlock_bot.application.ports.session_store import SessionStore
from pdf_unlock_bot.application.use_cases.bot_messages import BotMessages
from pdf_unlock_bot.domain.entities.session import (
    AwaitingFileSession,
    AwaitingPasswordSession,
    PendingFile,
    ProcessingSession,
    Session,
)
from pdf_unlock_bot.domain.value_objects.password_directive import (
    EmptyPasswordError,
    PasswordDirective,
)

DEFAULT_MAX_FILE_SIZE_BYTES = 20 * 1024 * 1024

# Events that never touch a session and need no user identity
_STATELESS_COMMANDS = {"help"}
_STATELESS_CALLBACKS = {"help", "about"}


class HandleBotEventUseCase:
    """
    Use case driving the unlock conversation of each user.

    Steps: awaiting_file -> awaiting_password -> processing. Processing is
    entered and left within a single event; it exists for status reporting.
    Sessions are read and written around awaits without locking, so two
    events of the same user arriving together can race.
    """

    def __init__(
        self,
        session_store: SessionStore,
        file_store: FileStore,
        decryptor: PdfDecryptor,
        transport: MessagingTransport,
        max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize handle bot event use case.

        Args:
            session_store: Per-user session storage
            file_store: Temporary PDF storage
            decryptor: External password-removal adapter
            transport: Outbound messaging adapter
            max_file_size_bytes: Largest accepted upload
            logger: Optional logger function (user_id, turn_id, component, **kwargs)
        """
        self._session_store = session_store
        self._file_store = file_store
        self._decryptor = decryptor
        self._transport = transport
        self._messages = BotMessages(transport.escape)
        self._max_file_size_bytes = max_file_size_bytes
        self._logger = logger

    def _log(self, user_id: Optional[str], turn_id: str, component: str, **kwargs: Any) -> None:
        """
        Log event if logger is available.

        Args:
            user_id: User identifier
            turn_id: Turn identifier
            component: Component name
            **kwargs: Additional log fields
        """
        if self._logger:
            self._logger(user_id, turn_id, component, **kwargs)

    async def execute(self, event: InboundEvent, turn_id: Optional[str] = None) -> BotEventResult:
        """
        Handle one inbound event.

        Args:
            event: Transport-neutral inbound event
            turn_id: Optional turn identifier for logging

        Returns:
            Action taken and the user's step afterwards
        """
        turn_id = turn_id or "unknown"

        if event.kind == EventKind.CALLBACK:
            await self._acknowledge(event, turn_id)
            name, stateless = event.callback_data, _STATELESS_CALLBACKS
        elif event.kind == EventKind.COMMAND:
            name, stateless = event.command, _STATELESS_COMMANDS
        else:
            name, stateless = None, set()

        if event.user_id is None and name not in stateless:
            self._log(None, turn_id, "use_case", action="rejected_unidentified", kind=event.kind.value)
            await self._notify(event.chat_id, BotMessages.UNIDENTIFIED_USER, turn_id=turn_id)
            return BotEventResult(action="rejected_unidentified")

        if event.kind == EventKind.CALLBACK:
            return await self._handle_callback(event, turn_id)
        if event.kind == EventKind.COMMAND:
            return await self._handle_command(event, turn_id)
        if event.kind == EventKind.DOCUMENT:
            return await self._handle_document(event, turn_id)
        return await self._handle_text(event, turn_id)

    # Commands and callbacks

    async def _handle_command(self, event: InboundEvent, turn_id: str) -> BotEventResult:
        if event.command == "start":
            return await self._start(event, self._messages.welcome(event.first_name), turn_id)
        if event.command == "help":
            await self._notify(event.chat_id, BotMessages.HELP, turn_id=turn_id)
            return await self._result(event.user_id, "help")
        if event.command == "status":
            return await self._status(event, turn_id)
        if event.command == "cancel":
            return await self._cancel(event, turn_id)
        self._log(event.user_id, turn_id, "use_case", action="ignored", command=event.command)
        return await self._result(event.user_id, "ignored")

    async def _handle_callback(self, event: InboundEvent, turn_id: str) -> BotEventResult:
        data = event.callback_data
        if data == "help":
            await self._notify(event.chat_id, BotMessages.QUICK_HELP, turn_id=turn_id)
            return await self._result(event.user_id, "help")
        if data == "about":
            await self._notify(event.chat_id, BotMessages.ABOUT, turn_id=turn_id)
            return await self._result(event.user_id, "about")
        if data == "cancel":
            return await self._cancel(event, turn_id)
        if data == "start":
            return await self._start(event, BotMessages.START_FROM_BUTTON, turn_id)
        self._log(event.user_id, turn_id, "use_case", action="ignored", callback_data=data)
        return await self._result(event.user_id, "ignored")

    async def _acknowledge(self, event: InboundEvent, turn_id: str) -> None:
        if not event.callback_id:
            return
        try:
            await self._transport.answer_callback(event.callback_id)
        except TransportError as err:
            self._log(event.user_id, turn_id, "transport", error=str(err), operation="answer_callback")

    async def _start(self, event: InboundEvent, message: str, turn_id: str) -> BotEventResult:
        user_id = event.user_id
        previous = await self._session_store.get(user_id)
        await self._release_file(previous)
        await self._session_store.set(user_id, AwaitingFileSession(user_id=user_id))
        self._log_transition(user_id, turn_id, previous, AwaitingFileSession.step.value)
        buttons = BotMessages.WELCOME_BUTTONS if event.kind == EventKind.COMMAND else None
        await self._notify(event.chat_id, message, buttons, turn_id=turn_id)
        return await self._result(user_id, "start")

    async def _cancel(self, event: InboundEvent, turn_id: str) -> BotEventResult:
        user_id = event.user_id
        previous = await self._session_store.get(user_id)
        await self._discard(user_id, previous)
        self._log_transition(user_id, turn_id, previous, None)
        await self._notify(event.chat_id, BotMessages.CANCELLED, turn_id=turn_id)
        return await self._result(user_id, "cancel")

    async def _status(self, event: InboundEvent, turn_id: str) -> BotEventResult:
        session = await self._session_store.get(event.user_id)
        if session is None:
            await self._notify(event.chat_id, BotMessages.NO_SESSION_STATUS, turn_id=turn_id)
            return await self._result(event.user_id, "status")

        elapsed = int((datetime.now(timezone.utc) - session.created_at).total_seconds())
        message = self._messages.status(
            session.step,
            session.pending_file_name,
            max(elapsed, 0),
            session.attempt_count,
        )
        await self._notify(event.chat_id, message, turn_id=turn_id)
        return await self._result(event.user_id, "status")

    # Documents

    def _is_pdf(self, event: InboundEvent) -> bool:
        document = event.document
        return bool(
            document
            and document.file_id
            and document.file_name
            and (document.mime_type or "").startswith("application/pdf")
        )

    async def _handle_document(self, event: InboundEvent, turn_id: str) -> BotEventResult:
        user_id = event.user_id
        if not self._is_pdf(event):
            self._log(user_id, turn_id, "use_case", action="rejected_invalid_type")
            await self._notify(event.chat_id, BotMessages.INVALID_FILE_TYPE, turn_id=turn_id)
            return await self._result(user_id, "rejected_invalid_type")

        document = event.document
        if document.file_size is not None and document.file_size > self._max_file_size_bytes:
            self._log(
                user_id, turn_id, "use_case", action="rejected_too_large", file_size=document.file_size
            )
            await self._notify(
                event.chat_id,
                BotMessages.file_too_large(document.file_size, self._max_file_size_bytes),
                turn_id=turn_id,
            )
            return await self._result(user_id, "rejected_too_large")

        progress_id = await self._notify(
            event.chat_id,
            self._messages.downloading(document.file_name, document.file_size),
            turn_id=turn_id,
        )

        try:
            data = await self._transport.download_file(document.file_id)
            stored_path = await self._file_store.store_inbound(data, document.file_name)
        except (TransportError, OSError) as err:
            self._log(user_id, turn_id, "use_case", action="download_failed", error=str(err))
            previous = await self._session_store.get(user_id)
            await self._discard(user_id, previous)
            self._log_transition(user_id, turn_id, previous, None)
            await self._notify(event.chat_id, BotMessages.DOWNLOAD_FAILED, turn_id=turn_id)
            return await self._result(user_id, "download_failed")

        # A second upload replaces the pending one; its file must not leak
        previous = await self._session_store.get(user_id)
        await self._release_file(previous)
        session = AwaitingPasswordSession(
            user_id=user_id,
            pending_file=PendingFile(path=stored_path, name=document.file_name),
        )
        await self._session_store.set(user_id, session)
        self._log_transition(user_id, turn_id, previous, session.step.value, file_size=len(data))

        await self._report(
            event.chat_id,
            progress_id,
            self._messages.download_complete(document.file_name, document.file_size),
            turn_id=turn_id,
        )

        try:
            directive = PasswordDirective.parse(event.caption)
        except EmptyPasswordError:
            await self._notify(event.chat_id, BotMessages.EMPTY_PASSWORD, turn_id=turn_id)
            return await self._result(user_id, "empty_password")

        if directive is not None:
            await self._notify(event.chat_id, BotMessages.PASSWORD_IN_CAPTION, turn_id=turn_id)
            return await self._attempt_unlock(event, session, directive, None, turn_id)

        await self._notify(
            event.chat_id,
            self._messages.password_required(document.file_name),
            BotMessages.PASSWORD_REQUEST_BUTTONS,
            turn_id=turn_id,
        )
        return await self._result(user_id, "awaiting_password")

    # Text

    async def _handle_text(self, event: InboundEvent, turn_id: str) -> BotEventResult:
        user_id = event.user_id
        session = await self._session_store.get(user_id)

        if isinstance(session, ProcessingSession):
            await self._notify(event.chat_id, BotMessages.STILL_PROCESSING, turn_id=turn_id)
            return await self._result(user_id, "busy")

        if not isinstance(session, AwaitingPasswordSession):
            await self._notify(
                event.chat_id, BotMessages.NO_PDF_FOUND, BotMessages.START_BUTTONS, turn_id=turn_id
            )
            return await self._result(user_id, "no_pending_file")

        try:
            directive = PasswordDirective.parse(event.text)
        except EmptyPasswordError:
            await self._notify(event.chat_id, BotMessages.EMPTY_PASSWORD, turn_id=turn_id)
            return await self._result(user_id, "empty_password")

        if directive is None:
            await self._notify(event.chat_id, BotMessages.INVALID_PASSWORD_FORMAT, turn_id=turn_id)
            return await self._result(user_id, "invalid_password_format")

        progress_id = await self._notify(
            event.chat_id,
            self._messages.processing(session.pending_file_name, directive.masked),
            turn_id=turn_id,
        )
        return await self._attempt_unlock(event, session, directive, progress_id, turn_id)

    # Unlock attempt

    async def _attempt_unlock(
        self,
        event: InboundEvent,
        session: AwaitingPasswordSession,
        directive: PasswordDirective,
        progress_id: Optional[int],
        turn_id: str,
    ) -> BotEventResult:
        """
        Run one unlock attempt against the session's pending file.

        Success sends the unlocked document and ends the session. A failed
        decryption keeps the input for another try and returns to
        awaiting_password. Delivery or storage errors end the session.
        """
        user_id = session.user_id
        processing = session.begin_attempt()
        await self._session_store.set(user_id, processing)
        self._log_transition(
            user_id, turn_id, session, processing.step.value, attempt=processing.attempt_count
        )

        file_name = processing.pending_file_name
        try:
            async with self._file_store.outbound(file_name) as output_path:
                result = await self._decryptor.unlock(
                    processing.pending_file_path, output_path, directive.password
                )
                self._log(
                    user_id,
                    turn_id,
                    "decryption",
                    attempt=processing.attempt_count,
                    success=result.success,
                    failure_reason=result.reason.value if result.reason else None,
                )

                if not result.success:
                    retry = processing.retry()
                    await self._session_store.set(user_id, retry)
                    self._log_transition(user_id, turn_id, processing, retry.step.value)
                    await self._report(
                        event.chat_id,
                        progress_id,
                        self._messages.unlock_failed(file_name, retry.attempt_count),
                        BotMessages.RETRY_BUTTONS,
                        turn_id=turn_id,
                    )
                    return await self._result(user_id, "unlock_failed")

                await self._transport.send_document(
                    event.chat_id, output_path, BotMessages.unlocked_file_name(file_name)
                )
        except (TransportError, OSError) as err:
            self._log(user_id, turn_id, "use_case", action="processing_error", error=str(err))
            await self._discard(user_id, processing)
            self._log_transition(user_id, turn_id, processing, None)
            await self._report(
                event.chat_id,
                progress_id,
                self._messages.processing_error(file_name),
                turn_id=turn_id,
            )
            return await self._result(user_id, "processing_error")
        except Exception:
            # Unexpected defect: clean up and notify; the dispatcher logs the error
            await self._discard(user_id, processing)
            self._log_transition(user_id, turn_id, processing, None)
            await self._report(
                event.chat_id,
                progress_id,
                self._messages.processing_error(file_name),
                turn_id=turn_id,
            )
            raise

        await self._discard(user_id, processing)
        self._log_transition(user_id, turn_id, processing, None)
        await self._report(
            event.chat_id, progress_id, self._messages.unlock_succeeded(file_name), turn_id=turn_id
        )
        return await self._result(user_id, "unlocked")

    # Helpers

    async def _release_file(self, session: Optional[Session]) -> None:
        """Delete the file owned by a session, if any."""
        if session is not None and session.pending_file_path is not None:
            await self._file_store.delete(session.pending_file_path)

    async def _discard(self, user_id: str, session: Optional[Session]) -> None:
        """Delete the owned file, then the session itself."""
        await self._release_file(session)
        await self._session_store.delete(user_id)

    async def _notify(
        self,
        chat_id: int,
        text: str,
        buttons: Optional[Buttons] = None,
        turn_id: str = "unknown",
    ) -> Optional[int]:
        """
        Send a message; delivery failures are logged, not raised.

        Returns:
            Identifier of the sent message, or None if sending failed
        """
        try:
            return await self._transport.send_message(chat_id, text, buttons)
        except TransportError as err:
            self._log(None, turn_id, "transport", operation="send_message", error=str(err))
            return None

    async def _report(
        self,
        chat_id: int,
        message_id: Optional[int],
        text: str,
        buttons: Optional[Buttons] = None,
        turn_id: str = "unknown",
    ) -> None:
        """Edit a progress message, or send a new one when there is none."""
        if message_id is not None:
            try:
                await self._transport.edit_message(chat_id, message_id, text, buttons)
                return
            except TransportError as err:
                self._log(None, turn_id, "transport", operation="edit_message", error=str(err))
        await self._notify(chat_id, text, buttons, turn_id=turn_id)

    def _log_transition(
        self,
        user_id: str,
        turn_id: str,
        before: Optional[Session],
        step_after: Optional[str],
        **kwargs: Any,
    ) -> None:
        self._log(
            user_id,
            turn_id,
            "session",
            step_before=before.step.value if before is not None else None,
            step_after=step_after,
            **kwargs,
        )

    async def _result(self, user_id: Optional[str], action: str) -> BotEventResult:
        session = await self._session_store.get(user_id) if user_id is not None else None
        return BotEventResult(
            user_id=user_id,
            action=action,
            step=session.step.value if session is not None else None,
        )
