"""
Functions for formatting and displaying data in the console using Rich.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from satdownload import __version__
from satdownload.core.sequence import RetrievalState, RetrievalStep
from satdownload.models.config import RetrievalConfig
from satdownload.models.stats import RunStats
from satdownload.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Check the path given with --config.",
            "• username, password, org_id and local_directory are required.",
        ],
        "CounterReadError": [
            "• The counter file must hold a single non-negative number.",
            "• Fix or delete it, or start explicitly with --filenum.",
        ],
        "CounterWriteError": [
            "• Check that the counter file's directory is writable.",
        ],
        "InvalidDateError": [
            "• Use YYYYMMDD, YYYY-MM-DD or YYYY/MM/DD with --date.",
        ],
        "InvalidFileNumberError": [
            "• --filenum must be a whole number of 0 or more.",
        ],
        "LocalStorageError": [
            "• Check that local_directory is a directory you can write to.",
            "• Make sure the disk is not full.",
        ],
        "LinkResolutionError": [
            "• The requested file may not exist yet for this date.",
            "• Verify the username, password and org_id in the configuration.",
        ],
        "RequestTimeoutError": [
            "• The score download service did not answer in time.",
            "• Check your internet connection and try again later.",
        ],
        "TransportError": [
            "• A network connection issue occurred.",
            "• Check the host and port in the configuration.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -v for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_banner():
    """Prints the version and warranty notice shown at the start of every run."""
    console = Console()
    console.print(f"[bold]satdownload[/bold] [cyan]{__version__}[/cyan]")
    console.print(
        "[dim]This program comes with ABSOLUTELY NO WARRANTY. This is free software,"
        " and you are welcome to redistribute it under certain conditions.[/dim]\n"
    )


def print_run_settings(config: RetrievalConfig):
    """Displays the settings that shape the current run, hiding the password."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Server:", config.base_url)
    table.add_row("User:", config.username)
    table.add_row("Organization:", config.org_id)
    table.add_row("Save To:", f"[dim]{config.local_directory}[/dim]")
    table.add_row(
        "Consecutive:", "✓ Enabled" if config.consecutive_mode else "✗ Disabled"
    )
    if config.consecutive_mode and config.persist_progress:
        when = "download" if config.persist_after_download else "link"
        table.add_row(
            "Counter File:", f"[dim]{config.counter_file}[/dim] (after each {when})"
        )
    else:
        table.add_row("Counter File:", "✗ Not updated")

    console.print(Panel(table, title="[bold]Run Settings[/bold]", border_style="cyan"))


def print_summary_panel(stats: RunStats, step: RetrievalStep):
    """Displays the final summary of the run."""
    console = Console()
    duration_s = stats.elapsed

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=16)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row(
        "✓ Downloaded:", f"[bold green]{stats.files_downloaded}[/bold green]"
    )
    for path in stats.downloaded_paths:
        stats_table.add_row("", f"[dim]{path.name}[/dim]")

    stats_table.add_row("Total Size:", f"[cyan]{format_size(stats.bytes_downloaded)}[/cyan]")
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    if stats.last_persisted is not None:
        stats_table.add_row("Counter:", f"[cyan]{stats.last_persisted}[/cyan]")

    stats_table.add_row("Stopped At:", f"[dim]{step.identifier}[/dim]")

    titles = {
        RetrievalState.EXHAUSTED: ("[bold]No More Files[/bold]", "green"),
        RetrievalState.COMPLETED: ("[bold]Download Complete![/bold]", "green"),
        RetrievalState.HALTED: ("[bold]Download Stopped[/bold]", "yellow"),
        RetrievalState.FAILED: ("[bold]Download Failed[/bold]", "red"),
    }
    title, border_color = titles.get(step.state, ("[bold]Summary[/bold]", "white"))
    if step.state is RetrievalState.EXHAUSTED and stats.files_downloaded == 0:
        title, border_color = "[bold]File Not Available[/bold]", "red"

    console.print()
    console.print(
        Panel(
            stats_table,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
