"""Data models for local authentication.

The public User is what the rest of the application sees; the
CredentialRecord additionally carries the encoded secret and never
leaves the auth module.
"""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Public identity of a registered user."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Opaque user identifier")
    username: str = Field(description="Display name as registered")


class CredentialRecord(BaseModel):
    """Stored credential for one user.

    secret_digest is a reversible base64 encoding, not a hash. This store
    is a local demo and must not guard anything of value.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    username: str
    secret_digest: str

    def to_user(self) -> User:
        """Strip the secret and return the public identity."""
        return User(id=self.id, username=self.username)

    def matches_username(self, username: str) -> bool:
        """Case-insensitive username comparison."""
        return self.username.lower() == username.lower()
