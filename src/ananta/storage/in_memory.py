"""In-memory record store.

Simple dict-based storage for ephemeral runs and tests.
Data is lost when the application exits.
"""

import json
from typing import Any

from ..errors import MalformedStoredDataError
from .base import RecordStore


class InMemoryRecordStore(RecordStore):
    """In-memory record store (session-only).

    Values are kept as JSON text, so reads return fresh copies and
    behave exactly like the file backend.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedStoredDataError(key, str(e)) from e

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, ensure_ascii=False)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)

    def set_raw(self, key: str, raw: str) -> None:
        """Store raw text under a key without encoding it."""
        self._data[key] = raw

    @property
    def backend_type(self) -> str:
        return "memory"
