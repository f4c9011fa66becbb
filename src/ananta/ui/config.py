"""UI configuration constants.

Centralizes magic numbers and display texts for the UI module.
"""

# Offered on an empty conversation
SUGGESTED_PROMPTS = [
    "I feel overwhelmed by my responsibilities.",
    "I am struggling with a difficult decision.",
    "I feel lost and without purpose.",
    "How do I deal with anger towards a loved one?",
]

# Status line texts
TYPING_INDICATOR_TEXT = "Ananta is reflecting..."
CHAT_UNAVAILABLE_TEXT = "Chat is unavailable: {reason}. Set GEMINI_API_KEY to talk with Ananta."

# Journal display
JOURNAL_DATE_FORMAT = "%a, %b %d, %Y, %I:%M %p"
JOURNAL_PREVIEW_LENGTH = 60  # Characters of entry text shown in the list
SAVED_TOAST_SECONDS = 2

# Chat display
MESSAGE_TIME_FORMAT = "%H:%M"

# Views
VIEW_CHAT = "chat"
VIEW_JOURNAL = "journal"
