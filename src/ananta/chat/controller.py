"""Chat session controller.

Drives one logical conversation through its send/receive/persist cycle:

    idle -> waiting -> streaming -> idle     (reply streamed and finalized)
    idle -> waiting -> error -> idle         (fallback message appended)

The controller is the only writer of message state. Presentation layers
read its properties and subscribe with add_listener() to re-render after
every change.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from ..auth import User
from ..debug import DebugCallback
from ..errors import MissingCredentialError
from ..llm import TokenUsage
from ..prompts import get_fallback_message, get_welcome_message
from .history import ConversationStore
from .models import ChatStatus, Message
from .transport import ChatTransport

ChangeListener = Callable[["ChatController"], None]


class ChatController:
    """State machine for one user's conversation with the model.

    Hidden design decisions:
    - Single in-flight request (sends while not idle are dropped)
    - Placeholder insertion on the first streamed chunk
    - Text replacement from an accumulator rather than in-place appends
    - Persistence only at finalized points (user turn, reply, fallback)
    - Epoch guard so replies for a previous user or session never land
    """

    def __init__(
        self,
        transport: ChatTransport,
        history: ConversationStore,
        welcome_message: str | None = None,
        fallback_message: str | None = None,
    ):
        """Initialize the controller.

        Args:
            transport: Chat transport owned by this controller
            history: Conversation persistence
            welcome_message: Greeting for fresh conversations (default from prompts)
            fallback_message: Apology used when a reply fails (default from prompts)
        """
        self._transport = transport
        self._history = history
        self._welcome_text = welcome_message or get_welcome_message()
        self._fallback_text = fallback_message or get_fallback_message()

        self._user: User | None = None
        self._messages: list[Message] = []
        self._status = ChatStatus.IDLE
        self._input_text = ""
        self._epoch = 0
        self._credential_error: str | None = None
        self._last_usage: TokenUsage | None = None
        self._listeners: list[ChangeListener] = []
        self._debug_callback: DebugCallback | None = None

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def messages(self) -> list[Message]:
        """Snapshot of the conversation in order."""
        return list(self._messages)

    @property
    def status(self) -> ChatStatus:
        return self._status

    @property
    def input_text(self) -> str:
        return self._input_text

    @property
    def credential_error(self) -> str | None:
        """Reason chat replies are unavailable, or None if a session is open."""
        return self._credential_error

    @property
    def last_usage(self) -> TokenUsage | None:
        """Token counts of the last finalized reply, when the provider reported them."""
        return self._last_usage

    @property
    def can_send(self) -> bool:
        return self._status is ChatStatus.IDLE and self._user is not None

    def add_listener(self, listener: ChangeListener) -> None:
        """Register a callback invoked after every state change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback and propagate it to collaborators.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback
        self._transport.set_debug_callback(callback)
        self._history.set_debug_callback(callback)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Chat", message)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _set_status(self, status: ChatStatus) -> None:
        self._status = status
        self._notify()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def set_input(self, text: str) -> None:
        """Hold the draft text of the input box."""
        self._input_text = text

    def load_history(self, user: User) -> None:
        """Make a user active and show their stored conversation.

        Opens a fresh transport session. Missing or unreadable history is
        replaced by a welcome message that is not persisted until the next
        save.
        """
        self._epoch += 1
        self._user = user
        self._input_text = ""
        self._status = ChatStatus.IDLE
        self._open_session(reset=False)

        stored = self._history.load(user.id)
        if stored is None:
            self._messages = [self._welcome()]
            self._debug("info", f"Started new conversation for '{user.username}'")
        else:
            self._messages = stored
            self._debug("info", f"Loaded {len(stored)} message(s) for '{user.username}'")
        self._notify()

    def reset_session(self) -> None:
        """Start over: fresh remote session and a single welcome message.

        Earlier history is overwritten, not archived.
        """
        if self._user is None:
            return

        self._epoch += 1
        self._open_session(reset=True)
        self._messages = [self._welcome()]
        self._history.save(self._user.id, self._messages)
        self._input_text = ""
        self._status = ChatStatus.IDLE
        self._debug("info", "Session reset")
        self._notify()

    def logout(self) -> None:
        """Forget the active user and clear the conversation."""
        self._epoch += 1
        self._user = None
        self._messages = []
        self._input_text = ""
        self._status = ChatStatus.IDLE
        self._open_session(reset=True)
        self._notify()

    async def send_message(self, text: str) -> bool:
        """Send a user turn and stream the model's reply into the conversation.

        Args:
            text: Message text

        Returns:
            True if a reply was streamed and finalized; False if the call was
            ignored, failed (fallback appended), or became stale
        """
        if not text.strip() or self._status is not ChatStatus.IDLE or self._user is None:
            return False

        user = self._user
        epoch = self._epoch

        self._messages.append(Message.from_user(text))
        self._history.save(user.id, self._messages)
        self._input_text = ""
        self._set_status(ChatStatus.WAITING)
        self._debug("info", f"Sending: '{text[:50]}'")

        placeholder_id: str | None = None
        try:
            stream = await self._transport.send_stream(text)
            accumulated = ""
            async for chunk in stream:
                if epoch != self._epoch:
                    self._debug("warning", "Conversation changed during reply, discarding it")
                    return False

                if placeholder_id is None:
                    placeholder = Message.from_model("", is_streaming=True)
                    placeholder_id = placeholder.id
                    self._messages.append(placeholder)
                    self._status = ChatStatus.STREAMING

                accumulated += chunk
                self._update_message(placeholder_id, text=accumulated)
                self._notify()

        except asyncio.CancelledError:
            if epoch == self._epoch:
                self._drop_message(placeholder_id)
                self._set_status(ChatStatus.IDLE)
            raise
        except Exception as e:
            if epoch != self._epoch:
                self._debug("warning", f"Ignoring failure of stale reply: {e}")
                return False
            self._fail(user, placeholder_id, e)
            return False

        if epoch != self._epoch:
            self._debug("warning", "Conversation changed during reply, discarding it")
            return False

        if placeholder_id is None:
            self._messages.append(Message.from_model(""))
        else:
            self._update_message(placeholder_id, is_streaming=False)
        self._last_usage = stream.usage
        self._history.save(user.id, self._messages)
        self._debug("info", f"Reply complete ({len(accumulated)} chars)")
        self._set_status(ChatStatus.IDLE)
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _welcome(self) -> Message:
        return Message.from_model(self._welcome_text)

    def _open_session(self, reset: bool) -> None:
        try:
            if reset:
                self._transport.reset()
            else:
                self._transport.initialize()
            self._credential_error = None
        except MissingCredentialError as e:
            self._credential_error = str(e)
            self._debug("error", f"Chat unavailable: {e}")

    def _update_message(self, message_id: str, **update: Any) -> None:
        for i, message in enumerate(self._messages):
            if message.id == message_id:
                self._messages[i] = message.model_copy(update=update)
                return

    def _drop_message(self, message_id: str | None) -> None:
        if message_id is not None:
            self._messages = [m for m in self._messages if m.id != message_id]

    def _fail(self, user: User, placeholder_id: str | None, error: Exception) -> None:
        """Replace a failed reply with the fallback message."""
        self._debug("error", f"Chat error: {error}")
        self._set_status(ChatStatus.ERROR)
        self._drop_message(placeholder_id)
        self._messages.append(Message.from_model(self._fallback_text))
        self._history.save(user.id, self._messages)
        self._set_status(ChatStatus.IDLE)
