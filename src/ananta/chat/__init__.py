"""Chat module for ananta.

Module structure (each module hides a design decision):
- models.py: Message and status representation
- history.py: How conversations are persisted and validated
- transport.py: How the remote chat session is managed
- controller.py: The send/stream/finalize state machine
"""

from .controller import ChatController
from .history import ConversationStore
from .models import ChatStatus, Message, Role
from .transport import DEFAULT_TEMPERATURE, ChatTransport

__all__ = [
    "ChatController",
    "ChatStatus",
    "ChatTransport",
    "ConversationStore",
    "DEFAULT_TEMPERATURE",
    "Message",
    "Role",
]
