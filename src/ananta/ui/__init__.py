"""Terminal UI module for ananta.

Provides a Textual-based TUI for chatting with Ananta and keeping a journal.

Module structure (Parnas principle - each module hides a design decision):
- config.py: Display constants (suggested prompts, date formats)
- formatting.py: Timestamp and preview formatting
- widgets.py: Custom widgets (input bar, message rendering, journal list/editor)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- screens.py: Sign-in screen and confirmation dialog
- app.py: Application orchestration (user interaction flow)
"""

from .app import AnantaApp, run_textual_tui
from .screens import AuthScreen, ConfirmationScreen
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, JournalEditorPanel, JournalList

__all__ = [
    "AnantaApp",
    "AuthScreen",
    "ChatHistoryWidget",
    "ChatInputBar",
    "ConfirmationScreen",
    "DebugPanel",
    "JournalEditorPanel",
    "JournalList",
    "run_textual_tui",
]
