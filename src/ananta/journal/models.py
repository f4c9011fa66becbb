"""Data models for journal entries."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..chat.models import as_utc, new_id, utc_now


class JournalEntry(BaseModel):
    """One journal entry.

    updated_at doubles as the creation time: it is set when the entry is
    first saved and refreshed on every later save.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    content: str
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("updated_at")
    @classmethod
    def updated_at_as_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def title(self) -> str:
        """First non-empty line, used as a list label."""
        for line in self.content.splitlines():
            if line.strip():
                return line.strip()
        return "Untitled"


def sort_entries(entries: list[JournalEntry]) -> list[JournalEntry]:
    """Most recently updated first."""
    return sorted(entries, key=lambda e: e.updated_at, reverse=True)
