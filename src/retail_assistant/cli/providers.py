"""Provider factory functions for CLI.

Centralizes creation of settings, providers and conversation managers
from environment variables and command-line overrides.
"""

from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ..config import AssistantSettings, LogLevel
from ..conversation import ConversationManager, Notification
from ..providers import ResponseProvider, create_response_provider
from .trace import ConsoleTrace

# Default console for output
_console = Console()


def get_settings(console: Console | None = None, **overrides: Any) -> AssistantSettings:
    """Read settings from the environment and apply non-None overrides.

    Raises:
        SystemExit: If the resulting settings are invalid
    """
    con = console or _console
    try:
        base = AssistantSettings.from_env().model_dump()
        base.update({key: value for key, value in overrides.items() if value is not None})
        return AssistantSettings(**base)
    except ValidationError as e:
        con.print(f"[red]Error: invalid settings: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def get_provider(settings: AssistantSettings, console: Console | None = None) -> ResponseProvider:
    """Create the configured response provider.

    Raises:
        SystemExit: If the provider is unknown or misconfigured
    """
    con = console or _console
    try:
        return create_response_provider(settings.provider, **settings.provider_config())
    except (TypeError, ValueError) as e:
        con.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def print_notification(notification: Notification, console: Console | None = None) -> None:
    """Render a failure notification."""
    con = console or _console
    con.print(f"[bold red]{notification.title}:[/bold red] {notification.description}")
    if notification.detail:
        con.print(f"[dim]{escape(notification.detail)}[/dim]")


def get_manager(settings: AssistantSettings, console: Console | None = None) -> ConversationManager:
    """Create a conversation manager wired to console notifications and tracing."""
    con = console or _console
    manager = ConversationManager(
        provider=get_provider(settings, con),
        notify_callback=lambda n: print_notification(n, con),
    )
    if settings.log_level is not None:
        manager.set_debug_callback(ConsoleTrace(con, LogLevel.from_string(settings.log_level)))
    return manager
