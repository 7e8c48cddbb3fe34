"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..config import EXIT_COMMANDS
from ..conversation import QUICK_ACTIONS, ConversationManager, MessageRole, get_quick_action
from ..intent import classify
from .providers import get_manager, get_settings

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="retail-assistant",
    help="Intent-routed retail assistant with canned analysis reports",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

_DELAY_HELP = "Artificial response delay in milliseconds"
_FAILURE_HELP = "Probability (0-1) that a simulated request fails"
_LOG_HELP = "Show trace output with level: debug (all), info, warning, or error"


def _print_reply(body: str) -> None:
    console.print(Panel(Markdown(body), title="AI Assistant", border_style="magenta"))


async def _exchange(manager: ConversationManager, prompt: str) -> bool:
    """Run one exchange with a spinner. Returns True if a reply was appended."""
    with console.status("[dim]AI is thinking...[/dim]"):
        reply = await manager.send(prompt)
    if reply is None:
        return False
    _print_reply(reply.body)
    return True


def _run_single(prompt: str, delay_ms: int | None, failure_rate: float | None,
                seed: int | None, log_level: str | None) -> None:
    settings = get_settings(
        console,
        delay_ms=delay_ms,
        failure_rate=failure_rate,
        seed=seed,
        log_level=log_level,
    )

    if not prompt.strip():
        console.print("[dim]Nothing to send.[/dim]")
        return

    async def _run() -> bool:
        manager = get_manager(settings, console)
        async with manager:
            console.print(f"[bold yellow]You:[/bold yellow] {escape(prompt)}")
            console.print(f"[dim]Intent: {classify(prompt).value}[/dim]")
            return await _exchange(manager, prompt)

    if not asyncio.run(_run()):
        raise typer.Exit(code=1)


@app.command()
def ask(
    text: str = typer.Argument(..., help="Question for the assistant"),
    delay_ms: int | None = typer.Option(None, "--delay-ms", "-d", help=_DELAY_HELP),
    failure_rate: float | None = typer.Option(None, "--failure-rate", "-f", help=_FAILURE_HELP),
    seed: int | None = typer.Option(None, "--seed", help="Seed for failure injection"),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=_LOG_HELP),
):
    """Ask a single question and print the reply."""
    _run_single(text, delay_ms, failure_rate, seed, log_level)


@app.command()
def action(
    key: str = typer.Argument(..., help="Quick action key (see 'actions')"),
    delay_ms: int | None = typer.Option(None, "--delay-ms", "-d", help=_DELAY_HELP),
    failure_rate: float | None = typer.Option(None, "--failure-rate", "-f", help=_FAILURE_HELP),
    seed: int | None = typer.Option(None, "--seed", help="Seed for failure injection"),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=_LOG_HELP),
):
    """Run a quick action (same pipeline as typing its prompt)."""
    try:
        quick_action = get_quick_action(key)
    except KeyError as e:
        console.print(f"[red]Error: {escape(e.args[0])}[/red]")
        raise typer.Exit(code=1)

    _run_single(quick_action.prompt, delay_ms, failure_rate, seed, log_level)


@app.command()
def actions():
    """List the available quick actions."""
    table = Table(title="Quick Actions")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Description")
    table.add_column("Prompt", style="dim")

    for quick_action in QUICK_ACTIONS:
        table.add_row(
            quick_action.key,
            quick_action.title,
            quick_action.description,
            quick_action.prompt,
        )

    console.print(table)


@app.command(name="classify")
def classify_command(
    text: str = typer.Argument(..., help="Text to classify"),
):
    """Print the intent category a prompt is routed to."""
    console.print(classify(text).value)


@app.command()
def chat(
    delay_ms: int | None = typer.Option(None, "--delay-ms", "-d", help=_DELAY_HELP),
    failure_rate: float | None = typer.Option(None, "--failure-rate", "-f", help=_FAILURE_HELP),
    seed: int | None = typer.Option(None, "--seed", help="Seed for failure injection"),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=_LOG_HELP),
):
    """Interactive chat mode with the assistant."""
    settings = get_settings(
        console,
        delay_ms=delay_ms,
        failure_rate=failure_rate,
        seed=seed,
        log_level=log_level,
    )

    async def _chat():
        manager = get_manager(settings, console)

        async with manager:
            console.print("[bold cyan]Retail Assistant Chat[/bold cyan]")
            console.print(
                "[dim]Type '/actions' to list quick actions, '/action KEY' to run one, "
                "'exit', 'quit', or 'q' to leave[/dim]\n"
            )
            for message in manager.transcript:
                if message.role == MessageRole.ASSISTANT:
                    _print_reply(message.body)

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                command = user_input.strip()
                if not command:
                    continue

                if command.lower() in EXIT_COMMANDS:
                    console.print("[dim]Goodbye![/dim]")
                    break

                if command == "/actions":
                    actions()
                    continue

                if command.startswith("/action"):
                    _, _, key = command.partition(" ")
                    try:
                        quick_action = get_quick_action(key.strip())
                    except KeyError as e:
                        console.print(f"[red]{escape(e.args[0])}[/red]")
                        continue
                    console.print(f"[dim]{quick_action.title}: {quick_action.prompt}[/dim]")
                    user_input = quick_action.prompt

                await _exchange(manager, user_input)

    asyncio.run(_chat())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
