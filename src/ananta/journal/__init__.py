"""Personal journal for ananta."""

from .editor import JournalEditor
from .models import JournalEntry, sort_entries
from .store import JournalStore

__all__ = ["JournalEditor", "JournalEntry", "JournalStore", "sort_entries"]
