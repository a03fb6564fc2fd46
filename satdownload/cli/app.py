"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import importlib
import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text
from typer.core import TyperCommand

from satdownload.api.client import ScoreDownloadClient
from satdownload.core.sequence import RetrievalStep, SequenceRunner, exit_status_for
from satdownload.core.start import apply_overrides, build_start_request, resolve_start
from satdownload.exceptions import ExitStatus, SatDownloadError
from satdownload.models.config import RetrievalConfig
from satdownload.models.identifier import FileIdentifier
from satdownload.models.stats import RunStats
from satdownload.storage.config_manager import ConfigManager
from satdownload.storage.counter import CounterStore
from satdownload.transfer.downloader import Downloader
from satdownload.utils.formatting import format_timestamp, strip_quotes

from .formatters import (
    format_error_with_suggestions,
    print_banner,
    print_run_settings,
    print_summary_panel,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            log_time_format=lambda moment: Text(format_timestamp(moment)),
            markup=True,
        )
    ],
)
log = logging.getLogger("satdownload")


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "satdownload"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"

# Usage errors of the click build typer parses with (bundled in newer releases).
_click_errors = importlib.import_module(
    TyperCommand.__mro__[1].__module__.rpartition(".")[0] + ".exceptions"
)


def _print_usage(ctx: typer.Context) -> None:
    # Rich-formatted help is printed directly and returns no text.
    help_text = ctx.get_help()
    if help_text:
        typer.echo(help_text)


class RetrievalCommand(TyperCommand):
    """Maps command-line mistakes onto the documented exit codes."""

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except _click_errors.UsageError as e:
            param = getattr(e, "param", None)
            if (
                isinstance(e, _click_errors.BadParameter)
                and param is not None
                and param.name == "filenum"
            ):
                console.print(
                    f"[red]Invalid file number specified:[/red] {e.format_message()}"
                )
                ctx.exit(int(ExitStatus.INVALID_FILE_NUM))
            if isinstance(e, _click_errors.NoSuchOption):
                console.print(f"Unknown option: {e.option_name}")
            else:
                console.print(f"[red]{e.format_message()}[/red]")
            _print_usage(ctx)
            ctx.exit(int(ExitStatus.UNKNOWN_OPTION))


app = typer.Typer(
    name="satdownload",
    help="Download score files from the score download API.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


@app.command(
    cls=RetrievalCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
def retrieve(
    date_value: Optional[str] = typer.Option(
        None,
        "--date",
        metavar="DATE",
        help=(
            "Date of the files to download (YYYYMMDD, YYYY-MM-DD or YYYY/MM/DD)."
            " Default is today's date."
        ),
    ),
    filenum: Optional[int] = typer.Option(
        None,
        "--filenum",
        metavar="NUM",
        help=(
            "File number to start searching from; the last part of the file name."
            " Default is the number after the one in the counter file."
            " The counter file is not updated."
        ),
    ),
    filename: Optional[str] = typer.Option(
        None,
        "--filename",
        metavar="FILENAME",
        help="Exact file name to download. Only that file is downloaded.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        metavar="CONFIGFILE",
        help=f"Path of the configuration file. Default is {CONFIG_FILE}.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity.",
    ),
):
    """Download score files from the score download API."""
    if verbose:
        logging.getLogger("satdownload").setLevel("DEBUG")

    print_banner()

    try:
        request = build_start_request(date_value, filenum, filename)
        config_file = CONFIG_FILE
        if config_path:
            config_file = Path(strip_quotes(config_path)).expanduser()
        config = apply_overrides(ConfigManager(config_file).load_config(), request)
        counter = CounterStore(config.counter_file)
        start = resolve_start(request, config, counter)
    except SatDownloadError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=int(e.exit_status)) from e

    print_run_settings(config)

    stats = RunStats()
    step = asyncio.run(_retrieve_async(config, counter, start, stats))

    print_summary_panel(stats, step)
    raise typer.Exit(code=int(exit_status_for(step)))


async def _retrieve_async(
    config: RetrievalConfig,
    counter: CounterStore,
    start: FileIdentifier,
    stats: RunStats,
) -> RetrievalStep:
    """Runs the retrieval chain with both HTTP sessions open."""
    async with (
        ScoreDownloadClient(config) as client,
        Downloader(verify_ssl=config.verify_ssl) as downloader,
    ):
        runner = SequenceRunner(config, client, downloader, counter, stats)
        return await runner.run(start)
