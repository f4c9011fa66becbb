"""File-backed record store.

Stores each key as a JSON file in a data directory, mirroring the
one-blob-per-key layout of browser local storage.
"""

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from ..errors import MalformedStoredDataError
from .base import RecordStore

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileRecordStore(RecordStore):
    """JSON-file record store.

    Hidden design decisions:
    - One file per key (``<key>.json``) in a single directory
    - Atomic writes through a temp file and ``os.replace``
    - UTF-8 text, indented for hand inspection
    """

    def __init__(self, path: str | Path = "~/.ananta"):
        self._root = Path(path).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid record key: {key!r}")
        return self._root / f"{key}.json"

    def get(self, key: str) -> Any | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedStoredDataError(key, str(e)) from e

    def set(self, key: str, value: Any) -> None:
        path = self._path_for(key)
        payload = json.dumps(value, ensure_ascii=False, indent=2)

        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        return sorted(p.stem for p in self._root.glob("*.json"))

    @property
    def backend_type(self) -> str:
        return "file"

    @property
    def path(self) -> Path:
        return self._root
