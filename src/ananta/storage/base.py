"""Abstract base class for record stores."""

from abc import ABC, abstractmethod
from typing import Any


class RecordStore(ABC):
    """
    Abstract key-value record store.

    Hides all persistence details including:
    - Where values live (files, memory)
    - How values are encoded on disk
    - Write atomicity

    Values are JSON-serializable Python objects; callers own their schema.
    Access is synchronous: a single event loop never interleaves a read
    and a write for the same key.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """
        Read the value stored under a key.

        Args:
            key: Record key

        Returns:
            Decoded JSON value, or None if the key is absent

        Raises:
            MalformedStoredDataError: If the stored text is not valid JSON
        """

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Record key
            value: JSON-serializable value

        Raises:
            TypeError: If the value cannot be serialized to JSON
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys in sorted order."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
