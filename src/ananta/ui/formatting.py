"""Text formatting utilities for the TUI.

Hides the details of how timestamps and previews are displayed.
"""

from datetime import datetime

from .config import JOURNAL_DATE_FORMAT, JOURNAL_PREVIEW_LENGTH, MESSAGE_TIME_FORMAT


def format_journal_date(value: datetime) -> str:
    """Local-time label such as 'Mon, Oct 19, 2026, 08:15 PM'."""
    return value.astimezone().strftime(JOURNAL_DATE_FORMAT)


def format_message_time(value: datetime) -> str:
    return value.astimezone().strftime(MESSAGE_TIME_FORMAT)


def preview(text: str, limit: int = JOURNAL_PREVIEW_LENGTH) -> str:
    """Collapse whitespace and truncate for one-line list labels."""
    flat = " ".join(text.split())
    if not flat:
        return "Empty reflection"
    if len(flat) > limit:
        return flat[: limit - 3].rstrip() + "..."
    return flat
