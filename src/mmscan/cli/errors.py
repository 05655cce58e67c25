"""
CLI Error Handling
==================

Maps exceptions to messages on stderr and process exit codes.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from mmscan.errors import MetamathError, SourceIOError


class ExitCode(IntEnum):
    """Exit codes for the mmscan CLI."""
    SUCCESS = 0
    SCAN_ERROR = 1       # Malformed source, or source cannot be loaded
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    if isinstance(error, SourceIOError) and isinstance(
        error.__cause__, (FileNotFoundError, PermissionError, IsADirectoryError)
    ):
        # The named file is unusable; treat like a bad argument
        click.echo(str(error), err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, MetamathError):
        # Errors already carry an "error:" prefix and location
        click.echo(str(error), err=True)
        sys.exit(ExitCode.SCAN_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
