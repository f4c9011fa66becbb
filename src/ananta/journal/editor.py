"""Editing state for the journal view.

Tracks which entry is open and the draft text, independent of how the
list and editor are drawn.
"""

from .models import JournalEntry
from .store import JournalStore


class JournalEditor:
    """List/editor pair over one user's journal."""

    def __init__(self, store: JournalStore):
        self._store = store
        self._user_id: str | None = None
        self.entries: list[JournalEntry] = []
        self.active_entry_id: str | None = None
        self.content = ""

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def active_entry(self) -> JournalEntry | None:
        for entry in self.entries:
            if entry.id == self.active_entry_id:
                return entry
        return None

    def load(self, user_id: str | None) -> None:
        """Switch to a user's journal and reset the editor."""
        self._user_id = user_id
        self.entries = self._store.list_entries(user_id) if user_id else []
        self.new_entry()

    def new_entry(self) -> None:
        self.active_entry_id = None
        self.content = ""

    def select(self, entry_id: str) -> bool:
        """Open an entry in the editor. Returns False for unknown ids."""
        for entry in self.entries:
            if entry.id == entry_id:
                self.active_entry_id = entry.id
                self.content = entry.content
                return True
        return False

    def save(self) -> JournalEntry | None:
        """Save the draft. A newly created entry becomes the active one."""
        if self._user_id is None:
            return None
        saved = self._store.save(self._user_id, self.active_entry_id, self.content)
        if saved is not None:
            self.active_entry_id = saved.id
            self.entries = self._store.list_entries(self._user_id)
        return saved

    def delete(self, entry_id: str) -> bool:
        """Delete an entry; clears the editor if it was open.

        Callers confirm with the user first.
        """
        if self._user_id is None:
            return False
        removed = self._store.delete(self._user_id, entry_id)
        if removed:
            self.entries = self._store.list_entries(self._user_id)
            if self.active_entry_id == entry_id:
                self.new_entry()
        return removed
