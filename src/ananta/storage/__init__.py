"""Local record store for ananta."""

from .base import RecordStore
from .factory import create_record_store
from .file import FileRecordStore
from .in_memory import InMemoryRecordStore
from .keys import CURRENT_USER_KEY, USERS_KEY, chat_key, journal_key

__all__ = [
    "CURRENT_USER_KEY",
    "FileRecordStore",
    "InMemoryRecordStore",
    "RecordStore",
    "USERS_KEY",
    "chat_key",
    "create_record_store",
    "journal_key",
]
