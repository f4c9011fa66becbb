"""
Ananta: a spiritual guidance chat and private journal for the terminal.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .auth import CredentialService, CurrentUserStore, User
from .chat import ChatController, ChatStatus, ChatTransport, ConversationStore, Message, Role
from .journal import JournalEditor, JournalEntry, JournalStore
from .storage import RecordStore, create_record_store

__all__ = [
    "ChatController",
    "ChatStatus",
    "ChatTransport",
    "ConversationStore",
    "CredentialService",
    "CurrentUserStore",
    "JournalEditor",
    "JournalEntry",
    "JournalStore",
    "Message",
    "RecordStore",
    "Role",
    "User",
    "create_record_store",
]
