"""Main Textual TUI application.

Orchestrates the UI components and routes user intents to the chat
controller and the journal editor.
"""

import asyncio

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Static, TabbedContent, TabPane, TextArea

from ..auth import User
from ..chat import ChatController, ChatStatus
from ..cli.providers import Services
from ..debug import LogLevel
from ..prompts import get_disclaimer
from .config import CHAT_UNAVAILABLE_TEXT, SAVED_TOAST_SECONDS, TYPING_INDICATOR_TEXT
from .screens import AuthScreen, ConfirmationScreen
from .styles import APP_CSS
from .themes import ANANTA_DUSK
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    JournalEditorPanel,
    JournalList,
    SuggestionBar,
)


class AnantaApp(App):
    """Textual TUI for chatting with Ananta and keeping a journal."""

    CSS = APP_CSS
    TITLE = "Ananta"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "switch_view", "Chat/Journal"),
        Binding("ctrl+r", "new_session", "New Session"),
        Binding("ctrl+n", "new_entry", "New Entry"),
        Binding("ctrl+s", "save_entry", "Save Entry"),
        Binding("ctrl+o", "logout", "Logout"),
        Binding("ctrl+d", "toggle_debug", "Debug", priority=True),
    ]

    def __init__(self, services: Services, log_level: str | None = None) -> None:
        super().__init__()
        self._services = services
        self._log_level = log_level

    @property
    def controller(self) -> ChatController:
        return self._services.chat

    @property
    def _main(self) -> Screen:
        """The chat/journal screen, even while a dialog is on top."""
        return self.screen_stack[0]

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with TabbedContent(initial="chat-tab"):
            with TabPane("Chat", id="chat-tab"):
                with Vertical(id="chat-view"):
                    yield Static("", id="chat-status")
                    yield ChatHistoryWidget(id="chat-history")
                    yield SuggestionBar(id="suggestions")
                    yield ChatInputBar(id="chat-input-bar")
                    yield Static(get_disclaimer(), id="disclaimer")
            with TabPane("Journal", id="journal-tab"):
                with Horizontal(id="journal-view"):
                    with Vertical(id="journal-sidebar"):
                        yield Button("New Entry", id="new-entry-btn", variant="primary")
                        yield Static("Your journal is empty.", id="journal-empty")
                        yield JournalList(id="journal-list")
                    yield JournalEditorPanel(id="journal-editor")

        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(ANANTA_DUSK)
        self.theme = "ananta-dusk"
        self.sub_title = self._services.model_name or "offline"
        self._main.query_one("#journal-sidebar").border_title = "Reflections"

        log_panel = self._main.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")
        self._services.set_debug_callback(log_panel.callback)

        self.controller.add_listener(self._on_chat_changed)

        user = self._services.current_user.load()
        if user is not None:
            log_panel.info("TUI", f"Restored session for '{user.username}'")
            self._enter(user)
        else:
            self._show_auth()

    def on_unmount(self) -> None:
        self.controller.remove_listener(self._on_chat_changed)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def _show_auth(self) -> None:
        self.push_screen(AuthScreen(self._services.credentials), callback=self._on_authenticated)

    def _on_authenticated(self, user: User | None) -> None:
        if user is None:
            return
        self._services.current_user.remember(user)
        self._enter(user)

    def _enter(self, user: User) -> None:
        """Show the user's conversation and journal."""
        self.title = f"Ananta | {user.username}"
        self.controller.load_history(user)
        self._services.journal_editor.load(user.id)
        self._refresh_journal()
        if self.controller.credential_error:
            self.notify(
                CHAT_UNAVAILABLE_TEXT.format(reason=self.controller.credential_error),
                severity="warning",
                timeout=6,
            )
        self._main.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def action_logout(self) -> None:
        """Forget the user and return to the sign-in screen."""
        if self.controller.user is None:
            return
        self.controller.logout()
        self._services.current_user.forget()
        self._services.journal_editor.load(None)
        self._refresh_journal()
        self.title = "Ananta"
        self._show_auth()

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    def _on_chat_changed(self, controller: ChatController) -> None:
        """Re-render the chat view from controller state."""
        chat = self._main.query_one("#chat-history", ChatHistoryWidget)
        chat.sync(controller.messages)

        status = self._main.query_one("#chat-status", Static)
        busy = controller.status in (ChatStatus.WAITING, ChatStatus.STREAMING)
        status.set_class(controller.status is ChatStatus.WAITING, "-waiting")
        status.set_class(controller.credential_error is not None, "-unavailable")
        if controller.status is ChatStatus.WAITING:
            status.update(TYPING_INDICATOR_TEXT)
        elif controller.credential_error:
            status.update(CHAT_UNAVAILABLE_TEXT.format(reason=controller.credential_error))
        else:
            status.update("")

        self._main.query_one("#chat-input-bar", ChatInputBar).set_enabled(controller.can_send)
        self._main.query_one("#suggestions", SuggestionBar).display = (
            not busy and len(controller.messages) <= 1
        )

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        self._submit(event.value)

    def on_suggestion_bar_selected(self, event: SuggestionBar.Selected) -> None:
        self._submit(event.value)

    def _submit(self, text: str) -> None:
        if not self.controller.can_send:
            return
        self._send_message(text)

    @work(group="chat")
    async def _send_message(self, text: str) -> None:
        """Send a message as a background async worker."""
        if not await self.controller.send_message(text):
            self._main.query_one("#debug-panel", DebugPanel).info("TUI", "No reply recorded for last message")

    def action_new_session(self) -> None:
        """Start a new session with Ananta."""
        if self.controller.user is None:
            return
        self.workers.cancel_group(self, "chat")
        self.controller.reset_session()
        self.notify("New session started", timeout=2)

    # ------------------------------------------------------------------
    # Journal
    # ------------------------------------------------------------------

    @work(group="journal", exclusive=True)
    async def _refresh_journal(self) -> None:
        editor = self._services.journal_editor
        await self._main.query_one("#journal-list", JournalList).set_entries(
            editor.entries, editor.active_entry_id
        )
        self._main.query_one("#journal-empty", Static).display = not editor.entries
        self._main.query_one("#journal-editor", JournalEditorPanel).show_entry(
            editor.active_entry, editor.content
        )

    def on_journal_list_entry_selected(self, event: JournalList.EntrySelected) -> None:
        if self._services.journal_editor.select(event.entry_id):
            self._refresh_journal()

    @on(TextArea.Changed, "#journal-text")
    def _on_journal_text_changed(self, event: TextArea.Changed) -> None:
        self._services.journal_editor.content = event.text_area.text

    @on(Button.Pressed, "#new-entry-btn")
    def action_new_entry(self) -> None:
        """Open a blank draft in the journal."""
        if self._services.journal_editor.user_id is None:
            return
        self._services.journal_editor.new_entry()
        self._refresh_journal()
        self._main.query_one(TabbedContent).active = "journal-tab"
        self._main.query_one("#journal-editor", JournalEditorPanel).focus_editor()

    @on(Button.Pressed, "#save-entry-btn")
    def action_save_entry(self) -> None:
        """Save the open journal draft."""
        editor = self._services.journal_editor
        if editor.user_id is None:
            return
        editor.content = self._main.query_one("#journal-editor", JournalEditorPanel).text
        if editor.save() is None:
            return
        self._refresh_journal()
        self._main.query_one("#journal-editor", JournalEditorPanel).flash_saved(SAVED_TOAST_SECONDS)

    @on(Button.Pressed, "#delete-entry-btn")
    def _on_delete_pressed(self) -> None:
        entry = self._services.journal_editor.active_entry
        if entry is None:
            return

        def confirmed(yes: bool | None) -> None:
            if yes and self._services.journal_editor.delete(entry.id):
                self._refresh_journal()
                self.notify("Entry deleted", timeout=2)

        self.push_screen(
            ConfirmationScreen("Are you sure you want to delete this entry?"),
            callback=confirmed,
        )

    # ------------------------------------------------------------------
    # Misc
    # ------------------------------------------------------------------

    def action_switch_view(self) -> None:
        tabs = self._main.query_one(TabbedContent)
        tabs.active = "journal-tab" if tabs.active == "chat-tab" else "chat-tab"

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self._main.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(services: Services, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        services: Wired services (store, auth, chat, journal)
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = AnantaApp(services=services, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
