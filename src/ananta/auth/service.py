"""Credential service backed by the local record store."""

import base64

from pydantic import ValidationError

from ..debug import DebugCallback
from ..errors import DuplicateUsernameError, InvalidCredentialsError, MalformedStoredDataError
from ..storage import CURRENT_USER_KEY, USERS_KEY, RecordStore
from .models import CredentialRecord, User


def encode_secret(secret: str) -> str:
    """Encode a secret for storage (base64, reversible)."""
    return base64.b64encode(secret.encode("utf-8")).decode("ascii")


class CredentialService:
    """Registration and login against the record store.

    There is no session or token: callers keep the returned User and pass
    it to the services that need it.
    """

    def __init__(self, store: RecordStore):
        self._store = store
        self._debug_callback: DebugCallback | None = None

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the callback receiving (level, component, message) logs."""
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Auth", message)

    def _load_records(self) -> list[CredentialRecord]:
        try:
            raw = self._store.get(USERS_KEY)
        except MalformedStoredDataError as e:
            self._debug("warning", f"Ignoring unreadable credential list: {e.reason}")
            return []

        if not isinstance(raw, list):
            return []

        records = []
        for item in raw:
            try:
                records.append(CredentialRecord.model_validate(item))
            except ValidationError:
                self._debug("warning", "Skipping credential record with invalid shape")
        return records

    def _save_records(self, records: list[CredentialRecord]) -> None:
        self._store.set(USERS_KEY, [r.model_dump(mode="json") for r in records])

    def register(self, username: str, secret: str) -> User:
        """Create a new account.

        Args:
            username: Desired username (unique, case-insensitive)
            secret: Password

        Returns:
            The new public User

        Raises:
            DuplicateUsernameError: If the username is already taken
        """
        records = self._load_records()
        if any(r.matches_username(username) for r in records):
            raise DuplicateUsernameError(username)

        record = CredentialRecord(username=username, secret_digest=encode_secret(secret))
        records.append(record)
        self._save_records(records)
        self._debug("info", f"Registered user '{username}'")
        return record.to_user()

    def login(self, username: str, secret: str) -> User:
        """Check credentials.

        Args:
            username: Username (case-insensitive)
            secret: Password

        Returns:
            The matching public User

        Raises:
            InvalidCredentialsError: If no record matches both fields
        """
        digest = encode_secret(secret)
        for record in self._load_records():
            if record.matches_username(username) and record.secret_digest == digest:
                self._debug("info", f"User '{record.username}' logged in")
                return record.to_user()
        raise InvalidCredentialsError()


class CurrentUserStore:
    """Remembers which user is logged in across restarts."""

    def __init__(self, store: RecordStore):
        self._store = store

    def load(self) -> User | None:
        """Return the remembered user, or None if absent or unreadable."""
        try:
            raw = self._store.get(CURRENT_USER_KEY)
        except MalformedStoredDataError:
            return None
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except ValidationError:
            return None

    def remember(self, user: User) -> None:
        self._store.set(CURRENT_USER_KEY, user.model_dump(mode="json"))

    def forget(self) -> None:
        self._store.remove(CURRENT_USER_KEY)
