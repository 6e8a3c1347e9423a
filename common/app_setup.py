"""
Reusable logging and print setup for all parts of the project.

Functions:
    setup_logging      - Configure and return a logger.
    set_print_logger   - Set the logger for print_and_log and print_error.
    print_and_log      - Print and log an info message.
    print_error        - Print and log an error message.
"""

import logging
import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape

# Module-level variable to hold the logger for print_and_log and print_error
_print_logger: Optional[logging.Logger] = None


def setup_logging(app_name: str = "flint", loglevel: int = logging.INFO, logfile: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for the application.
    Logs to a file in ~/.<app_name>/log.txt or to a custom logfile.
    Returns the configured logger.
    """
    logger = logging.getLogger()
    logger.setLevel(loglevel)
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(process)d %(message)s')
    if logfile is None:
        log_dir = os.path.expanduser(f"~/.{app_name}")
        os.makedirs(log_dir, exist_ok=True)
        logfile = os.path.join(log_dir, "log.txt")
    else:
        os.makedirs(os.path.dirname(logfile) or ".", exist_ok=True)
    handler = logging.FileHandler(logfile)

    # Remove any existing handlers
    for h in logger.handlers[:]:
        logger.removeHandler(h)

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    set_print_logger(logger)
    logger.debug(f"Logger initialized for {app_name}, writing to {logfile}")
    return logger


def set_print_logger(logger: Optional[logging.Logger]):
    """
    Set the logger to be used by print_and_log and print_error.
    Call this after setting up logging in your app.
    """
    global _print_logger
    _print_logger = logger


def _console(stderr: bool = False) -> Console:
    """A rich console on the current stdout/stderr that never wraps long lines."""
    return Console(file=sys.stderr if stderr else sys.stdout, soft_wrap=True)


def print_and_log(message: str, **kwargs):
    """
    Print to console (via rich) and log as info. Markup is off unless markup=True is passed.
    """
    kwargs.setdefault("markup", False)
    _console().print(message, **kwargs)
    if _print_logger is not None:
        _print_logger.info(message)


def print_error(message: str, **kwargs):
    """
    Print and log an error message (stderr and error level), using the logger set by set_print_logger.
    """
    _console(stderr=True).print(f"[bold red]{escape(message)}[/bold red]", **kwargs)
    if _print_logger is not None:
        _print_logger.error(message)
