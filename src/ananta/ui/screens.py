"""Screens for the TUI.

This module hides the design decisions about:
- How sign-in and account creation are presented
- Confirmation dialog appearance (CSS, layout)
- Keyboard shortcuts for dialogs

To change how authentication or confirmations look, modify only this file.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, Input, Static

from ..auth import CredentialService, User
from ..errors import AuthError


class AuthScreen(Screen[User]):
    """Sign-in / account creation form.

    Dismisses with the authenticated User. Failures are shown inline and
    leave the form open.
    """

    CSS = """
    AuthScreen {
        align: center middle;
        background: $background;
    }

    #auth-dialog {
        width: 56;
        height: auto;
        border: round $primary;
        background: $surface;
        padding: 1 2;
    }

    #auth-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $primary;
    }

    #auth-tagline {
        width: 100%;
        text-align: center;
        color: $text-muted;
        margin-bottom: 1;
    }

    #auth-dialog Input {
        margin-bottom: 1;
    }

    #auth-error {
        width: 100%;
        height: auto;
        color: $error;
        text-align: center;
    }

    #auth-buttons {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    #auth-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(self, credentials: CredentialService) -> None:
        super().__init__()
        self._credentials = credentials
        self._registering = False

    def compose(self) -> ComposeResult:
        with Vertical(id="auth-dialog"):
            yield Static("Ananta", id="auth-title")
            yield Static("Welcome back, seeker.", id="auth-tagline")
            yield Input(placeholder="Username", id="auth-username")
            yield Input(placeholder="Password", password=True, id="auth-password")
            yield Static("", id="auth-error")
            with Horizontal(id="auth-buttons"):
                yield Button("Enter", id="auth-submit", variant="primary")
                yield Button("New here? Create an account", id="auth-toggle")

    def on_mount(self) -> None:
        self.query_one("#auth-username", Input).focus()

    def _set_mode(self, registering: bool) -> None:
        self._registering = registering
        self.query_one("#auth-tagline", Static).update(
            "Begin your journey." if registering else "Welcome back, seeker."
        )
        self.query_one("#auth-submit", Button).label = "Create Account" if registering else "Enter"
        self.query_one("#auth-toggle", Button).label = (
            "Already have an account? Sign in" if registering else "New here? Create an account"
        )
        self.query_one("#auth-error", Static).update("")

    def _submit(self) -> None:
        username = self.query_one("#auth-username", Input).value
        password = self.query_one("#auth-password", Input).value
        error = self.query_one("#auth-error", Static)

        if not username.strip() or not password.strip():
            error.update("Please fill in all fields")
            return

        try:
            if self._registering:
                user = self._credentials.register(username, password)
            else:
                user = self._credentials.login(username, password)
        except AuthError as e:
            error.update(str(e))
            return

        self.dismiss(user)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "auth-submit":
            self._submit()
        elif event.button.id == "auth-toggle":
            self._set_mode(not self._registering)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "auth-username":
            self.query_one("#auth-password", Input).focus()
        else:
            self._submit()


class ConfirmationScreen(ModalScreen[bool]):
    """Modal yes/no dialog.

    Features:
    - Semi-transparent backdrop
    - Rounded dialog with accent border
    - y / n / escape shortcuts
    """

    CSS = """
    ConfirmationScreen {
        align: center middle;
        background: $background 70%;
    }

    #confirmation-dialog {
        width: 60;
        height: auto;
        max-height: 20;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #confirmation-prompt {
        width: 100%;
        height: auto;
        text-align: center;
        padding: 1 2;
        background: $panel;
        border: round $border;
        color: $foreground;
        margin-bottom: 1;
    }

    #confirmation-buttons {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    #confirmation-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("y", "confirm_yes", "Yes", show=False),
        Binding("n", "confirm_no", "No", show=False),
        Binding("escape", "confirm_no", "Cancel", show=False),
    ]

    def __init__(self, prompt: str) -> None:
        super().__init__()
        self._prompt = prompt

    def compose(self) -> ComposeResult:
        with Vertical(id="confirmation-dialog"):
            yield Static(self._prompt, id="confirmation-prompt")
            with Horizontal(id="confirmation-buttons"):
                yield Button("Delete", id="btn-yes", variant="error")
                yield Button("Cancel", id="btn-no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-yes")

    def action_confirm_yes(self) -> None:
        self.dismiss(True)

    def action_confirm_no(self) -> None:
        self.dismiss(False)
