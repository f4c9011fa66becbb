"""Factory for creating record stores."""

from typing import Any

from .base import RecordStore


def create_record_store(backend: str = "file", **config: Any) -> RecordStore:
    """
    Create a record store instance.

    This factory function hides which persistence mechanism is in use.

    Args:
        backend: Backend type ("file" or "memory")
        **config: Backend-specific configuration
            For file:
                - path: str | Path (default: '~/.ananta')
            For memory:
                - initial: dict[str, str] | None

    Returns:
        Record store instance

    Raises:
        ValueError: If backend type is not supported

    Example:
        >>> store = create_record_store("file", path="~/.ananta")
        >>> store.set("users", [])
    """
    if backend == "file":
        from .file import FileRecordStore
        return FileRecordStore(**config)

    if backend == "memory":
        from .in_memory import InMemoryRecordStore
        return InMemoryRecordStore(**config)

    raise ValueError(
        f"Unsupported record store backend: {backend}. "
        f"Supported backends: file, memory"
    )
