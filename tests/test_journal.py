"""Unit tests for the journal module."""
from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ananta.journal import JournalEditor, JournalEntry, JournalStore, sort_entries
from ananta.storage import InMemoryRecordStore, journal_key


class TestJournalEntry:
    """Tests for JournalEntry model."""

    def test_defaults(self):
        entry = JournalEntry(content="Today I sat by the river.")

        assert len(entry.id) == 32
        assert entry.updated_at.tzinfo is not None

    def test_title_is_first_non_empty_line(self):
        assert JournalEntry(content="\n\n  Gratitude  \nmore").title == "Gratitude"

    def test_blank_title(self):
        assert JournalEntry(content="   ").title == "Untitled"

    def test_entry_is_immutable(self):
        entry = JournalEntry(content="x")
        with pytest.raises(ValueError):
            entry.content = "y"  # type: ignore

    @given(st.lists(st.datetimes(timezones=st.just(timezone.utc)), max_size=10))
    def test_sort_entries_newest_first(self, stamps):
        """Property test: sorted entries are in descending updated_at order."""
        entries = [JournalEntry(content="x", updated_at=s) for s in stamps]
        ordered = [e.updated_at for e in sort_entries(entries)]
        assert ordered == sorted(stamps, reverse=True)


class TestJournalStore:
    """Tests for journal persistence."""

    def test_empty_journal(self, journal, user):
        assert journal.list_entries(user.id) == []

    def test_create_entry(self, journal, user):
        entry = journal.save(user.id, None, "First reflection")

        assert entry is not None
        assert journal.list_entries(user.id) == [entry]

    def test_blank_new_entry_is_not_created(self, journal, user):
        journal.save(user.id, None, "Existing")
        before = journal.list_entries(user.id)

        assert journal.save(user.id, None, "   \n") is None
        assert journal.list_entries(user.id) == before

    def test_existing_entry_can_be_blanked(self, journal, user):
        entry = journal.save(user.id, None, "Something")
        updated = journal.save(user.id, entry.id, "")

        assert updated is not None
        assert updated.id == entry.id
        assert journal.get(user.id, entry.id).content == ""

    def test_update_refreshes_timestamp_and_moves_to_front(self, journal, memory_store, user):
        now = datetime.now(timezone.utc)
        newer = JournalEntry(content="newer", updated_at=now - timedelta(days=1))
        older = JournalEntry(content="older", updated_at=now - timedelta(days=2))
        memory_store.set(journal_key(user.id), [e.model_dump(mode="json") for e in (newer, older)])

        updated = journal.save(user.id, older.id, "older, revised")

        assert updated.updated_at >= newer.updated_at
        assert [e.id for e in journal.list_entries(user.id)] == [older.id, newer.id]

    def test_unknown_id_is_not_saved(self, journal, user):
        journal.save(user.id, None, "kept")
        assert journal.save(user.id, "missing", "text") is None
        assert len(journal.list_entries(user.id)) == 1

    def test_delete(self, journal, user):
        entry = journal.save(user.id, None, "to remove")

        assert journal.delete(user.id, entry.id)
        assert journal.list_entries(user.id) == []

    def test_delete_nonexistent_is_noop(self, journal, memory_store, user):
        journal.save(user.id, None, "keep me")
        before = memory_store.get(journal_key(user.id))

        assert not journal.delete(user.id, "missing")
        assert memory_store.get(journal_key(user.id)) == before

    def test_journals_are_per_user(self, journal, user, other_user):
        journal.save(user.id, None, "mine")

        assert journal.list_entries(other_user.id) == []

    def test_malformed_journal_reads_as_empty(self, journal, memory_store, user):
        memory_store.set_raw(journal_key(user.id), "[[[")
        assert journal.list_entries(user.id) == []

    def test_invalid_items_skipped(self, journal, memory_store, user):
        good = JournalEntry(content="good")
        memory_store.set(journal_key(user.id), [{"content": 5}, good.model_dump(mode="json")])

        assert journal.list_entries(user.id) == [good]

    def test_timestamp_without_offset_read_as_utc(self, journal, memory_store, user):
        memory_store.set(journal_key(user.id), [
            {"id": "naive", "content": "January", "updated_at": "2024-01-01T00:00:00"},
            {"id": "aware", "content": "February", "updated_at": "2024-02-01T00:00:00+00:00"},
        ])

        entries = journal.list_entries(user.id)

        assert [e.id for e in entries] == ["aware", "naive"]
        assert entries[1].updated_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_persist_then_reload_is_equal(self, file_store, user):
        store = JournalStore(file_store)
        for text in ("one", "two", "three"):
            store.save(user.id, None, text)

        assert JournalStore(file_store).list_entries(user.id) == store.list_entries(user.id)

    @settings(max_examples=25, deadline=None)
    @given(st.lists(st.tuples(st.booleans(), st.text(min_size=1, max_size=10)), max_size=12))
    def test_always_sorted_after_save(self, operations):
        """Property test: the stored list stays newest-first after any saves."""
        store = JournalStore(InMemoryRecordStore())
        for update_first, text in operations:
            entries = store.list_entries("u")
            target = entries[-1].id if update_first and entries else None
            store.save("u", target, text)

            stamps = [e.updated_at for e in store.list_entries("u")]
            assert stamps == sorted(stamps, reverse=True)


class TestJournalEditor:
    """Tests for list/editor state."""

    def test_load_resets_editor(self, journal, user):
        journal.save(user.id, None, "hello")
        editor = JournalEditor(journal)

        editor.load(user.id)

        assert len(editor.entries) == 1
        assert editor.active_entry_id is None
        assert editor.content == ""

    def test_save_new_entry_becomes_active(self, journal, user):
        editor = JournalEditor(journal)
        editor.load(user.id)
        editor.content = "A quiet morning"

        saved = editor.save()

        assert editor.active_entry_id == saved.id
        assert editor.active_entry == saved
        assert editor.entries == [saved]

    def test_save_blank_draft_does_nothing(self, journal, user):
        editor = JournalEditor(journal)
        editor.load(user.id)

        assert editor.save() is None
        assert editor.entries == []

    def test_select_and_edit(self, journal, user):
        entry = journal.save(user.id, None, "original")
        editor = JournalEditor(journal)
        editor.load(user.id)

        assert editor.select(entry.id)
        assert editor.content == "original"
        editor.content = "edited"
        editor.save()

        assert journal.get(user.id, entry.id).content == "edited"
        assert len(editor.entries) == 1

    def test_select_unknown(self, journal, user):
        editor = JournalEditor(journal)
        editor.load(user.id)
        assert not editor.select("missing")

    def test_delete_active_clears_editor(self, journal, user):
        entry = journal.save(user.id, None, "bye")
        editor = JournalEditor(journal)
        editor.load(user.id)
        editor.select(entry.id)

        assert editor.delete(entry.id)
        assert editor.active_entry_id is None
        assert editor.content == ""
        assert editor.entries == []

    def test_delete_other_keeps_editor(self, journal, user):
        keep = journal.save(user.id, None, "keep")
        drop = journal.save(user.id, None, "drop")
        editor = JournalEditor(journal)
        editor.load(user.id)
        editor.select(keep.id)

        editor.delete(drop.id)

        assert editor.active_entry_id == keep.id
        assert editor.content == "keep"

    def test_no_user_is_inert(self, journal):
        editor = JournalEditor(journal)
        editor.load(None)
        editor.content = "orphan"

        assert editor.save() is None
        assert not editor.delete("x")


def test_timestamps_round_trip_exactly(journal, memory_store, user):
    stamp = datetime(2024, 5, 1, 6, 30, 15, 123456, tzinfo=timezone.utc)
    entry = JournalEntry(content="dawn", updated_at=stamp)
    memory_store.set(journal_key(user.id), [entry.model_dump(mode="json")])

    assert journal.list_entries(user.id) == [entry]
