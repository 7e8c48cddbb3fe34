"""Rich rendering for execution trace entries.

Receives ``(level, component, message)`` entries from the conversation
manager and providers and prints those at or above a threshold.
"""

from datetime import datetime

from rich.console import Console
from rich.markup import escape

from ..config import LOG_MAX_MESSAGE_LENGTH, LOG_TIMESTAMP_FORMAT, LogLevel

_LEVEL_COLORS = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}

_COMPONENT_COLORS = {
    "Conversation": "green",
    "Provider": "magenta",
    "CLI": "cyan",
}


class ConsoleTrace:
    """Trace callback that prints timestamped, level-filtered entries."""

    def __init__(self, console: Console, log_level: LogLevel = LogLevel.DEBUG) -> None:
        self.console = console
        self.log_level = log_level

    def __call__(self, level: str, component: str, message: str) -> None:
        try:
            numeric = LogLevel.from_string(level)
        except ValueError:
            numeric = LogLevel.DEBUG
        if numeric < self.log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = _LEVEL_COLORS.get(numeric, "white")
        comp_color = _COMPONENT_COLORS.get(component, "white")
        self.console.print(
            f"[dim]{timestamp}[/dim] "
            f"[{level_color}]{numeric.name:<7}[/{level_color}] "
            f"[{comp_color}]{component}[/{comp_color}] "
            f"{escape(message)}"
        )
