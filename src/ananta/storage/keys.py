"""Record key naming.

Keeps the layout of the store in one place: a single current-user slot,
one credential list, and one chat and one journal record per user.
"""

CURRENT_USER_KEY = "currentUser"
USERS_KEY = "users"


def chat_key(user_id: str) -> str:
    """Key holding a user's conversation."""
    return f"chat_{user_id}"


def journal_key(user_id: str) -> str:
    """Key holding a user's journal entries."""
    return f"journal_{user_id}"
