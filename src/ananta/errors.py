"""Exception taxonomy for ananta.

Every error raised by the service modules derives from AnantaError so the
presentation layers can catch the whole family in one place.
"""


class AnantaError(Exception):
    """Base class for all ananta errors."""


class AuthError(AnantaError):
    """Raised when registration or login is rejected."""


class DuplicateUsernameError(AuthError):
    """A credential record with the same (case-insensitive) username exists."""

    def __init__(self, username: str):
        super().__init__("Username already exists")
        self.username = username


class InvalidCredentialsError(AuthError):
    """No credential record matches the username and secret."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class ChatTransportError(AnantaError):
    """Base class for errors talking to the remote chat model."""


class MissingCredentialError(ChatTransportError):
    """No API key is configured, so no chat session can be opened."""

    def __init__(self, message: str = "API key not found") -> None:
        super().__init__(message)


class TransportError(ChatTransportError):
    """The remote stream could not be established or dropped mid-stream."""


class MalformedStoredDataError(AnantaError):
    """A stored value is not valid JSON or does not match its schema."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Malformed data under '{key}': {reason}")
        self.key = key
        self.reason = reason
