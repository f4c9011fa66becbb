"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management and the submit shortcut
- Chat message rendering and incremental re-rendering while streaming
- Journal list and editor layout
- Log rendering and scrolling
"""

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message as TextualMessage
from textual.widgets import Button, Label, ListItem, ListView, Markdown, RichLog, Static, TextArea

from ..chat import Message, Role
from ..debug import LogLevel, format_log_line
from ..journal import JournalEntry
from .config import SUGGESTED_PROMPTS
from .formatting import format_journal_date, format_message_time, preview


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button.

    Terminals do not report Shift+Enter, so Enter inserts a newline and
    Ctrl+J (or the Send button) submits.
    """

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._enabled = True

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="primary").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts."""
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        last_row = len(lines) - 1
        last_col = len(lines[-1]) if lines else 0
        return text_area.cursor_location == (last_row, last_col)

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:  # Up
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:  # Down
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        if not self._enabled:
            return
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text.strip()
        if value:
            if not self._history or self._history[-1] != value:
                self._history.append(value)
            self._history_index = -1
            text_area.text = ""
            self.post_message(self.Submitted(value))

    def set_enabled(self, enabled: bool) -> None:
        """Allow or block submission; typing stays possible."""
        self._enabled = enabled
        self.query_one("#send-btn", Button).disabled = not enabled

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class ChatMessageView(Vertical):
    """One rendered chat message, updated in place while it streams."""

    def __init__(self, message: Message, **kwargs) -> None:
        role_class = "user-message" if message.role is Role.USER else "model-message"
        super().__init__(classes=f"chat-message {role_class}", **kwargs)
        self._message = message

    def compose(self):
        yield Static(self._header(), classes="message-header")
        if self._message.role is Role.USER:
            yield Static(self._message.text, classes="message-content", markup=False)
        else:
            yield Markdown(self._message.text, classes="message-content")

    def on_mount(self) -> None:
        self.set_class(self._message.is_streaming, "-streaming")

    def _header(self) -> str:
        name = "You" if self._message.role is Role.USER else "Ananta"
        return f"{name} [{format_message_time(self._message.created_at)}]"

    def refresh_message(self, message: Message) -> None:
        """Re-render if the text or streaming flag changed."""
        if message == self._message:
            return
        changed_text = message.text != self._message.text
        self._message = message
        self.set_class(message.is_streaming, "-streaming")
        content = self.query(".message-content")
        # Not composed yet: compose() will pick up the new text
        if not changed_text or not content:
            return
        content.first().update(message.text)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable conversation mirroring the controller's message list.

    sync() reconciles by message id, so calling it after every state change
    only touches messages that were added, removed or changed.
    """

    BORDER_TITLE = "Ananta"
    BORDER_SUBTITLE = "Conversation"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._views: dict[str, ChatMessageView] = {}
        self._order: list[str] = []

    def sync(self, messages: list[Message]) -> None:
        """Bring the rendered conversation in line with messages."""
        ids = [m.id for m in messages]
        if ids[: len(self._order)] != self._order:
            # Something other than an append happened (removal or reset)
            self.clear_history()

        for message in messages:
            view = self._views.get(message.id)
            if view is None:
                view = ChatMessageView(message)
                self._views[message.id] = view
                self._order.append(message.id)
                self.mount(view)
            else:
                view.refresh_message(message)

        self.border_subtitle = f"{len(messages)} messages"
        self.scroll_end(animate=False)

    def clear_history(self) -> None:
        """Remove every rendered message."""
        self._views.clear()
        self._order.clear()
        self.remove_children()
        self.border_subtitle = "Conversation"


class SuggestionBar(Horizontal):
    """Starter prompts offered while the conversation is fresh."""

    class Selected(TextualMessage):
        """Message sent when a suggestion is chosen."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        for index, prompt in enumerate(SUGGESTED_PROMPTS):
            yield Button(prompt, id=f"suggestion-{index}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        label = str(event.button.label)
        self.post_message(self.Selected(label))


class JournalList(ListView):
    """Entries newest first; the open entry is highlighted."""

    class EntrySelected(TextualMessage):
        def __init__(self, entry_id: str) -> None:
            super().__init__()
            self.entry_id = entry_id

    async def set_entries(self, entries: list[JournalEntry], active_id: str | None) -> None:
        """Replace the list contents."""
        await self.clear()
        items = []
        for entry in entries:
            item = ListItem(
                Label(preview(entry.title), classes="entry-title", markup=False),
                Label(format_journal_date(entry.updated_at), classes="entry-date"),
                id=f"entry-{entry.id}",
            )
            item.set_class(entry.id == active_id, "-active")
            items.append(item)
        await self.extend(items)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        item_id = event.item.id or ""
        if item_id.startswith("entry-"):
            self.post_message(self.EntrySelected(item_id[len("entry-"):]))


class JournalEditorPanel(Vertical):
    """Text area for the open entry with save and delete actions."""

    BORDER_TITLE = "New Reflection"

    def compose(self):
        yield TextArea(id="journal-text", show_line_numbers=False, soft_wrap=True)
        with Horizontal(id="journal-actions"):
            yield Static("", id="journal-saved")
            yield Button("Delete", id="delete-entry-btn", variant="error")
            yield Button("Save", id="save-entry-btn", variant="primary").with_tooltip(
                "Save entry (Ctrl+S)"
            )

    @property
    def text(self) -> str:
        return self.query_one("#journal-text", TextArea).text

    def show_entry(self, entry: JournalEntry | None, content: str) -> None:
        """Display an entry (or a blank draft when entry is None)."""
        self.query_one("#journal-text", TextArea).text = content
        self.query_one("#delete-entry-btn", Button).display = entry is not None
        if entry is None:
            self.border_title = "New Reflection"
            self.border_subtitle = ""
        else:
            self.border_title = preview(entry.title, 40)
            self.border_subtitle = f"Last edited: {format_journal_date(entry.updated_at)}"

    def flash_saved(self, seconds: float) -> None:
        """Show the saved confirmation for a moment."""
        saved = self.query_one("#journal-saved", Static)
        saved.update("Reflection saved")
        self.set_timer(seconds, lambda: saved.update(""))

    def focus_editor(self) -> None:
        self.query_one("#journal-text", TextArea).focus()


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def record(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return
        self.write(format_log_line(level, component, message))

    def callback(self, level: str, component: str, message: str) -> None:
        """Debug callback signature used by the services."""
        self.record(component, message, LogLevel.from_string(level))

    def info(self, component: str, message: str) -> None:
        self.record(component, message, LogLevel.INFO)

    def error(self, component: str, message: str) -> None:
        self.record(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
