"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ..chat import ChatController, Role
from ..debug import ConsoleDebugCallback
from ..errors import AuthError
from ..journal import JournalEntry
from .providers import Services, build_services, get_llm, get_store, get_temperature, require_user

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="ananta",
    help="Spiritual guidance chat and private journal in your terminal",
    no_args_is_help=True,
    add_completion=True,
)

journal_app = typer.Typer(help="Read and write journal entries", no_args_is_help=True)
app.add_typer(journal_app, name="journal")

# Console for rich output
console = Console()

_options: dict[str, str | None] = {"data_dir": None, "store": None, "log_level": None}


@app.callback()
def main_options(
    data_dir: str | None = typer.Option(
        None,
        "--data-dir",
        help="Directory holding ananta data (default: $ANANTA_DATA_DIR or ~/.ananta)"
    ),
    store: str | None = typer.Option(
        None,
        "--store",
        help="Record store backend: 'file' or 'memory'"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print debug output at level: debug, info, warning, or error"
    ),
):
    """Spiritual guidance chat and private journal in your terminal."""
    _options["data_dir"] = data_dir
    _options["store"] = store
    _options["log_level"] = log_level


def _services(llm=None) -> Services:
    services = build_services(
        get_store(_options["data_dir"], _options["store"]),
        llm=llm,
        temperature=get_temperature(),
    )
    if _options["log_level"]:
        services.set_debug_callback(ConsoleDebugCallback(console, _options["log_level"]))
    return services


def _require_fields(username: str, password: str) -> None:
    if not username.strip() or not password.strip():
        console.print("[red]Error: Please fill in all fields[/red]")
        raise typer.Exit(code=1)


@app.command()
def register(
    username: str = typer.Option(..., "--username", "-u", prompt=True, help="Username"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True,
        help="Password"
    ),
):
    """Create an account and log in."""
    _require_fields(username, password)
    services = _services()
    try:
        user = services.credentials.register(username, password)
    except AuthError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    services.current_user.remember(user)
    console.print(f"[green]Welcome, {user.username}. Your account is ready.[/green]")


@app.command()
def login(
    username: str = typer.Option(..., "--username", "-u", prompt=True, help="Username"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True, help="Password"),
):
    """Log in to an existing account."""
    _require_fields(username, password)
    services = _services()
    try:
        user = services.credentials.login(username, password)
    except AuthError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    services.current_user.remember(user)
    console.print(f"[green]Namaste, {user.username}.[/green]")


@app.command()
def logout():
    """Forget the logged-in user."""
    services = _services()
    services.current_user.forget()
    console.print("[dim]Logged out.[/dim]")


@app.command()
def whoami():
    """Show the logged-in user."""
    services = _services()
    user = services.current_user.load()
    if user is None:
        console.print("[dim]Not logged in.[/dim]")
        raise typer.Exit(code=1)
    console.print(f"{user.username} [dim]({user.id})[/dim]")


@app.command()
def ask(
    message: str = typer.Argument(..., help="What is on your mind"),
):
    """Send one message and stream the reply."""
    if not message.strip():
        console.print("[red]Error: Please enter a message[/red]")
        raise typer.Exit(code=1)

    async def _ask():
        llm = get_llm(console)

        if not llm:
            console.print("[red]Error: LLM provider not configured[/red]")
            raise typer.Exit(code=1)

        services = _services(llm)
        user = require_user(services, console)
        controller = services.chat
        controller.load_history(user)

        printed = {"id": None, "chars": 0}

        def on_change(ctrl: ChatController) -> None:
            last = ctrl.messages[-1] if ctrl.messages else None
            if last is None or last.role is not Role.MODEL or not last.is_streaming:
                return
            if printed["id"] != last.id:
                printed["id"] = last.id
                printed["chars"] = 0
                console.print("[bold green]Ananta:[/bold green] ", end="")
            console.print(last.text[printed["chars"]:], end="", markup=False, highlight=False)
            printed["chars"] = len(last.text)

        before = len(controller.messages)
        controller.add_listener(on_change)
        try:
            ok = await controller.send_message(message)
        finally:
            controller.remove_listener(on_change)
            await llm.close()

        if ok:
            console.print()
            usage = controller.last_usage
            if usage:
                console.print(
                    f"[dim]Tokens: {usage.get('prompt_tokens', 0)} in, "
                    f"{usage.get('completion_tokens', 0)} out[/dim]"
                )
            return

        if len(controller.messages) > before:
            fallback = controller.messages[-1]
            console.print(f"[yellow]Ananta:[/yellow] {fallback.text}")
        raise typer.Exit(code=1)

    asyncio.run(_ask())


@app.command()
def history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of recent messages to show"),
):
    """Show the stored conversation."""
    services = _services()
    user = require_user(services, console)
    services.chat.load_history(user)
    messages = services.chat.messages[-limit:] if limit > 0 else services.chat.messages

    for msg in messages:
        timestamp = msg.created_at.astimezone().strftime("%Y-%m-%d %H:%M")
        if msg.role is Role.USER:
            console.print(Panel(msg.text, title=f"You [{timestamp}]", title_align="left", border_style="yellow"))
        else:
            console.print(Panel(Markdown(msg.text), title=f"Ananta [{timestamp}]", title_align="left", border_style="green"))


@app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Start a new session, replacing the stored conversation."""
    services = _services()
    user = require_user(services, console)
    if not yes and not typer.confirm("Replace your conversation with a new session?"):
        console.print("[dim]Aborted.[/dim]")
        return
    services.chat.load_history(user)
    services.chat.reset_session()
    console.print("[green]New session started.[/green]")


@app.command(name="chat")
def chat_command():
    """Launch the interactive TUI."""
    async def _tui():
        from ..ui import run_textual_tui

        llm = get_llm(console)
        services = _services(llm)

        try:
            await run_textual_tui(services, log_level=_options["log_level"])
        finally:
            if llm is not None:
                try:
                    await llm.close()
                except Exception as e:
                    console.print(f"[dim]Could not close LLM client: {e}[/dim]")
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


def _resolve_entry(entries: list[JournalEntry], entry_id: str) -> JournalEntry:
    """Find an entry by id or unique id prefix."""
    matches = [e for e in entries if e.id.startswith(entry_id)]
    if len(matches) != 1:
        reason = "No entry matches" if not matches else "Ambiguous id"
        console.print(f"[red]Error: {reason} '{entry_id}'[/red]")
        raise typer.Exit(code=1)
    return matches[0]


@journal_app.command("list")
def journal_list():
    """List journal entries, newest first."""
    services = _services()
    user = require_user(services, console)
    entries = services.journal.list_entries(user.id)

    if not entries:
        console.print("[dim]Your journal is empty.[/dim]")
        return

    table = Table(title="Journal")
    table.add_column("ID", style="cyan")
    table.add_column("Updated", style="magenta")
    table.add_column("Entry")
    for entry in entries:
        table.add_row(
            entry.id[:8],
            entry.updated_at.astimezone().strftime("%a %b %d %Y %H:%M"),
            entry.title[:60],
        )
    console.print(table)


@journal_app.command("show")
def journal_show(entry_id: str = typer.Argument(..., help="Entry id or prefix")):
    """Print one journal entry."""
    services = _services()
    user = require_user(services, console)
    entry = _resolve_entry(services.journal.list_entries(user.id), entry_id)
    updated = entry.updated_at.astimezone().strftime("%a %b %d %Y %H:%M")
    console.print(Panel(entry.content, title=f"Last edited: {updated}", title_align="left"))


@journal_app.command("write")
def journal_write(
    content: str | None = typer.Argument(None, help="Entry text (opens $EDITOR when omitted)"),
    entry_id: str | None = typer.Option(None, "--id", help="Update an existing entry"),
):
    """Write a new entry or update an existing one."""
    services = _services()
    user = require_user(services, console)

    target = None
    if entry_id is not None:
        target = _resolve_entry(services.journal.list_entries(user.id), entry_id)

    if content is None:
        content = typer.edit(target.content if target else "") or ""

    saved = services.journal.save(user.id, target.id if target else None, content)
    if saved is None:
        console.print("[dim]Nothing to save.[/dim]")
        return
    console.print(f"[green]Reflection saved[/green] [dim]({saved.id[:8]})[/dim]")


@journal_app.command("delete")
def journal_delete(
    entry_id: str = typer.Argument(..., help="Entry id or prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a journal entry."""
    services = _services()
    user = require_user(services, console)
    entry = _resolve_entry(services.journal.list_entries(user.id), entry_id)

    if not yes and not typer.confirm("Are you sure you want to delete this entry?"):
        console.print("[dim]Aborted.[/dim]")
        return

    services.journal.delete(user.id, entry.id)
    console.print("[green]Entry deleted.[/green]")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
