"""Display utilities for the watcher startup screen."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from shellbridge import __version__

# stdout may be a pipe feeding another tool
console = Console(stderr=True)


def build_watcher_table(
    session_id: str,
    knowledge_url: str,
    checkpoint_minutes: float,
    log_dir: str,
    source: str,
) -> Table:
    """Key/value table describing the watcher run."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("Session", f"[cyan]{session_id}[/cyan]")
    table.add_row("Knowledge store", knowledge_url)
    table.add_row("Source", source)
    table.add_row("Checkpoint every", f"{checkpoint_minutes:g} minutes")
    table.add_row("Logs", log_dir)
    return table


def display_watcher_banner(
    session_id: str,
    knowledge_url: str,
    checkpoint_minutes: float,
    log_dir: str,
    source: str,
) -> None:
    """Print the startup panel to stderr."""
    table = build_watcher_table(session_id, knowledge_url, checkpoint_minutes, log_dir, source)
    console.print(
        Panel(
            table,
            title=f"[bold]shellbridge-watch[/bold] [dim]{__version__}[/dim]",
            border_style="cyan",
            padding=(0, 2),
        )
    )
