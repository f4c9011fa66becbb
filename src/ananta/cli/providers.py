"""Provider factory functions for CLI.

Centralizes creation of the record store, LLM provider and services from
environment variables. Hides configuration details from command
implementations.
"""

import os
from dataclasses import dataclass
from typing import Any

import typer
from rich.console import Console

from ..auth import CredentialService, CurrentUserStore, User
from ..chat import DEFAULT_TEMPERATURE, ChatController, ChatTransport, ConversationStore
from ..debug import DebugCallback
from ..journal import JournalEditor, JournalStore
from ..llm import create_llm_provider
from ..prompts import get_system_prompt
from ..storage import RecordStore, create_record_store

# Default console for output
_console = Console()

API_KEY_VARIABLES = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


@dataclass
class Services:
    """Everything a presentation layer needs, wired to one record store."""

    store: RecordStore
    credentials: CredentialService
    current_user: CurrentUserStore
    chat: ChatController
    journal: JournalStore
    journal_editor: JournalEditor
    model_name: str | None

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Route debug output of every service to one callback."""
        self.credentials.set_debug_callback(callback)
        self.chat.set_debug_callback(callback)
        self.journal.set_debug_callback(callback)


def get_store(data_dir: str | None = None, backend: str | None = None) -> RecordStore:
    """Create the record store from options or environment variables.

    Args:
        data_dir: Directory for the file backend (overrides ANANTA_DATA_DIR)
        backend: 'file' or 'memory' (overrides ANANTA_STORE)

    Environment variables:
        ANANTA_STORE: Store backend (default: file)
        ANANTA_DATA_DIR: Data directory (default: ~/.ananta)
    """
    backend = backend or os.getenv("ANANTA_STORE", "file")
    if backend == "memory":
        return create_record_store("memory")
    return create_record_store(
        "file",
        path=data_dir or os.getenv("ANANTA_DATA_DIR", "~/.ananta"),
    )


def get_api_key() -> str | None:
    """Return the first configured Gemini API key, if any."""
    for name in API_KEY_VARIABLES:
        value = os.getenv(name)
        if value:
            return value
    return None


def get_llm(console: Console | None = None) -> Any | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Gemini provider instance, or None if no API key is configured

    Environment variables:
        GEMINI_API_KEY: Gemini API key (GOOGLE_API_KEY and API_KEY also accepted)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
    """
    con = console or _console
    api_key = get_api_key()
    if not api_key:
        con.print("[yellow]Warning: GEMINI_API_KEY not set, chat replies disabled[/yellow]")
        return None
    model = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    return create_llm_provider("gemini", api_key=api_key, model=model)


def get_temperature() -> float:
    """Sampling temperature from ANANTA_TEMPERATURE (default: 0.7)."""
    raw = os.getenv("ANANTA_TEMPERATURE")
    if not raw:
        return DEFAULT_TEMPERATURE
    try:
        return float(raw)
    except ValueError:
        _console.print(f"[yellow]Warning: invalid ANANTA_TEMPERATURE '{raw}', using {DEFAULT_TEMPERATURE}[/yellow]")
        return DEFAULT_TEMPERATURE


def build_services(
    store: RecordStore,
    llm: Any | None = None,
    temperature: float = DEFAULT_TEMPERATURE,
) -> Services:
    """Wire services around a record store.

    Args:
        store: Record store shared by all services
        llm: LLM provider, or None to run without chat replies
        temperature: Sampling temperature for chat sessions

    Returns:
        Services bundle
    """
    transport = ChatTransport(llm, get_system_prompt(), temperature=temperature)
    journal = JournalStore(store)
    return Services(
        store=store,
        credentials=CredentialService(store),
        current_user=CurrentUserStore(store),
        chat=ChatController(transport, ConversationStore(store)),
        journal=journal,
        journal_editor=JournalEditor(journal),
        model_name=llm.model if llm is not None else None,
    )


def require_user(services: Services, console: Console | None = None) -> User:
    """Get the logged-in user, exiting if nobody is logged in.

    Raises:
        typer.Exit: If no user is remembered
    """
    con = console or _console
    user = services.current_user.load()
    if user is None:
        con.print("[red]Error: not logged in. Run 'ananta login' first.[/red]")
        raise typer.Exit(code=1)
    return user
