"""Persistence of conversations in the record store.

Validates stored blobs against the Message schema on the way in, so a
corrupted or hand-edited record is rejected at the boundary instead of
leaking untyped data into the controller.
"""

from pydantic import TypeAdapter, ValidationError

from ..debug import DebugCallback
from ..errors import MalformedStoredDataError
from ..storage import RecordStore, chat_key
from .models import Message

_MESSAGES = TypeAdapter(list[Message])


class ConversationStore:
    """Loads and saves one conversation per user."""

    def __init__(self, store: RecordStore):
        self._store = store
        self._debug_callback: DebugCallback | None = None

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        self._debug_callback = callback

    def load(self, user_id: str) -> list[Message] | None:
        """Read a user's conversation.

        Returns:
            The stored messages in order, or None if nothing usable is stored
        """
        key = chat_key(user_id)
        try:
            raw = self._store.get(key)
            if raw is None:
                return None
            return _MESSAGES.validate_python(raw)
        except (MalformedStoredDataError, ValidationError) as e:
            if self._debug_callback:
                self._debug_callback("warning", "Chat", f"Discarding unreadable history under '{key}': {e}")
            return None

    def save(self, user_id: str, messages: list[Message]) -> None:
        """Overwrite a user's conversation with the given messages."""
        self._store.set(chat_key(user_id), _MESSAGES.dump_python(messages, mode="json"))

    def clear(self, user_id: str) -> None:
        self._store.remove(chat_key(user_id))
