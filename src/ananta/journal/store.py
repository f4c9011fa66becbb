"""Journal persistence for one user at a time."""

from pydantic import ValidationError

from ..chat.models import utc_now
from ..debug import DebugCallback
from ..errors import MalformedStoredDataError
from ..storage import RecordStore, journal_key
from .models import JournalEntry, sort_entries


class JournalStore:
    """CRUD over a user's journal entries.

    Hidden design decisions:
    - Entries for a user live in a single record
    - Every write re-sorts by updated_at, newest first
    - Unreadable records are skipped instead of failing the whole list
    """

    def __init__(self, store: RecordStore):
        self._store = store
        self._debug_callback: DebugCallback | None = None

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Journal", message)

    def list_entries(self, user_id: str) -> list[JournalEntry]:
        """Return a user's entries, newest first.

        Malformed storage reads as an empty journal.
        """
        key = journal_key(user_id)
        try:
            raw = self._store.get(key)
        except MalformedStoredDataError as e:
            self._debug("warning", f"Failed to load journal entries: {e.reason}")
            return []

        if not isinstance(raw, list):
            return []

        entries = []
        for item in raw:
            try:
                entries.append(JournalEntry.model_validate(item))
            except ValidationError:
                self._debug("warning", f"Skipping invalid journal entry under '{key}'")
        return sort_entries(entries)

    def _write(self, user_id: str, entries: list[JournalEntry]) -> None:
        self._store.set(journal_key(user_id), [e.model_dump(mode="json") for e in entries])

    def save(self, user_id: str, entry_id: str | None, content: str) -> JournalEntry | None:
        """Create or update an entry.

        Args:
            user_id: Owner
            entry_id: Entry to update, or None to create a new one
            content: Entry text

        Returns:
            The saved entry; None when nothing was saved (blank content for a
            new entry, or an unknown entry_id)
        """
        if entry_id is None and not content.strip():
            return None

        entries = self.list_entries(user_id)
        now = utc_now()

        if entry_id is None:
            saved = JournalEntry(content=content, updated_at=now)
            entries.insert(0, saved)
        else:
            saved = None
            for i, entry in enumerate(entries):
                if entry.id == entry_id:
                    saved = entry.model_copy(update={"content": content, "updated_at": now})
                    entries[i] = saved
                    break
            if saved is None:
                self._debug("warning", f"No journal entry with id {entry_id}")
                return None

        self._write(user_id, sort_entries(entries))
        self._debug("info", f"Saved journal entry {saved.id}")
        return saved

    def delete(self, user_id: str, entry_id: str) -> bool:
        """Remove an entry.

        Returns:
            True if an entry was removed, False if the id was unknown
        """
        entries = self.list_entries(user_id)
        remaining = [e for e in entries if e.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self._write(user_id, remaining)
        self._debug("info", f"Deleted journal entry {entry_id}")
        return True

    def get(self, user_id: str, entry_id: str) -> JournalEntry | None:
        for entry in self.list_entries(user_id):
            if entry.id == entry_id:
                return entry
        return None
