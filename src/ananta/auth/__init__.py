"""Local authentication for ananta."""

from .models import CredentialRecord, User
from .service import CredentialService, CurrentUserStore, encode_secret

__all__ = [
    "CredentialRecord",
    "CredentialService",
    "CurrentUserStore",
    "User",
    "encode_secret",
]
