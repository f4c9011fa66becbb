"""Debug callback plumbing.

Components report what they are doing through a callback taking
(level, component, message), where level is one of 'debug', 'info',
'warning' or 'error'. The TUI routes these to its log panel and the CLI
to a Rich console.
"""

from collections.abc import Callable
from datetime import datetime

from rich.console import Console

DebugCallback = Callable[[str, str, str], None]


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


LEVEL_COLORS = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}

COMPONENT_COLORS = {
    "TUI": "cyan",
    "CLI": "cyan",
    "Auth": "green",
    "Chat": "magenta",
    "Transport": "bright_magenta",
    "LLM": "blue",
    "Journal": "bright_green",
}


def format_log_line(level: int, component: str, message: str) -> str:
    """Render one log entry as Rich markup."""
    timestamp = datetime.now().strftime("%H:%M:%S")
    level_color = LEVEL_COLORS.get(level, "white")
    comp_color = COMPONENT_COLORS.get(component, "white")
    return (
        f"[dim]{timestamp}[/] "
        f"[{level_color}]{LogLevel.name(level):<5}[/] "
        f"[{comp_color}]\\[{component}][/] {message}"
    )


class ConsoleDebugCallback:
    """Debug callback printing to a Rich console above a level threshold."""

    def __init__(self, console: Console, level: str = "info"):
        self._console = console
        self._threshold = LogLevel.from_string(level)

    def __call__(self, level: str, component: str, message: str) -> None:
        numeric = LogLevel.from_string(level)
        if numeric < self._threshold:
            return
        self._console.print(format_log_line(numeric, component, message))
