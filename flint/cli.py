"""
This file is the entry point for the 'flint' command-line tool.
Run 'flint start|stop|status <formula>' in your shell.
"""

import logging
from contextlib import contextmanager
from typing import Optional

import typer

from common.app_setup import print_error, setup_logging
from flint.config import FlintPaths
from flint.errors import FlintError
from flint.manager import ServiceManager, print_states

app = typer.Typer(add_completion=False, help="Start, stop and inspect Homebrew services and user launch agents.")


@contextmanager
def _handle_errors():
    """Turn flint and filesystem errors into a red message and exit code 1."""
    try:
        yield
    except (FlintError, OSError) as exc:
        message = exc.message if isinstance(exc, FlintError) else str(exc)
        print_error(f"Error: {message}")
        raise typer.Exit(1) from exc


@app.callback()
def main(ctx: typer.Context, verbose: bool = typer.Option(False, "--verbose", "-v", help="Write debug messages to the log file")):
    with _handle_errors():
        if ctx.obj is None:
            ctx.obj = FlintPaths.from_environment()
        setup_logging(
            app_name="flint",
            loglevel=logging.DEBUG if verbose else logging.INFO,
            logfile=str(ctx.obj.app_log_file),
        )


@app.command()
def start(ctx: typer.Context, formula: str = typer.Argument(..., help="Formula to start")):
    """Start a service by formula."""
    with _handle_errors():
        ServiceManager(formula, ctx.obj).start()


@app.command()
def stop(ctx: typer.Context, formula: str = typer.Argument(..., help="Formula to stop")):
    """Stop a service by formula."""
    with _handle_errors():
        ServiceManager(formula, ctx.obj).stop()


@app.command()
def status(ctx: typer.Context, formula: Optional[str] = typer.Argument(None, help="Formula to query (all if omitted)")):
    """Query the status of one formula, or of every known formula."""
    with _handle_errors():
        if formula is None:
            print_states(ctx.obj)
        else:
            ServiceManager(formula, ctx.obj).status()


if __name__ == "__main__":
    app()
