"""
Main entry point for the satdownload application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import asyncio
import logging
import os
import sys

import typer
from rich.console import Console

from satdownload.cli.app import app
from satdownload.cli.formatters import format_error_with_suggestions
from satdownload.exceptions import ExitStatus, SatDownloadError


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("satdownload")
    console = Console()

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print("\n[yellow]Operation cancelled by user.[/yellow]")
        sys.exit(int(ExitStatus.FAILURE))
    except SatDownloadError as e:
        console.print()
        console.print(format_error_with_suggestions(e))
        sys.exit(int(e.exit_status))
    except Exception as e:
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(int(ExitStatus.FAILURE))


if __name__ == "__main__":
    main()
