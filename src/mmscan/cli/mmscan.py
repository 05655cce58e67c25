"""
mmscan - Metamath Front End Command-Line Interface
==================================================

Loads a Metamath database, scans it to completion, and exits with status 0
if the file is structurally well formed. The first error is reported with
its location and the scan stops.

Usage Examples
--------------
Check a database:
    $ mmscan set.mm

Print statistics:
    $ mmscan -v set.mm

List every statement:
    $ mmscan --list demo0.mm

Scan a file larger than the default 100,000,000 byte capacity:
    $ mmscan --capacity 200000000 big.mm

With no FILE argument the tool scans set.mm in the current directory, or
the file named by the MMSCAN_DEFAULT_PATH environment variable.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from mmscan import __version__
from mmscan.cli.errors import handle_cli_exception
from mmscan.config import ScanConfig
from mmscan.frontend.buffer import open_source
from mmscan.frontend.parser import Statement
from mmscan.frontend.scanner import Scanner


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-l", "--list", "list_statements",
    is_flag=True,
    help="Print one line per statement: line:column, keyword, label, body size",
)
@click.option(
    "--capacity",
    type=click.IntRange(min=1),
    default=None,
    help="Largest accepted source size in bytes (default: 100000000)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="mmscan")
def main(
    input_file: Optional[Path],
    list_statements: bool,
    capacity: Optional[int],
    verbose: bool,
) -> None:
    """
    Scan a Metamath database for lexical and structural errors.

    FILE is the .mm source to scan (default: set.mm).

    \b
    Examples:
        mmscan set.mm              # Check set.mm
        mmscan -v set.mm           # Check and print statistics
        mmscan --list demo0.mm     # List statements
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    config = ScanConfig.from_env()
    if capacity is not None:
        config.capacity = capacity
    config.keep_statements = False
    source = input_file if input_file is not None else config.default_path

    try:
        if verbose:
            click.echo(f"Scanning {source}...")

        buffer = open_source(source, capacity=config.capacity)

        def print_statement(statement: Statement) -> None:
            location = buffer.location(statement.offset)
            click.echo(
                f"{location.line}:{location.column}\t"
                f"{statement.keyword.value}\t"
                f"{statement.label or '-'}\t"
                f"{len(statement.body)}"
            )

        scanner = Scanner(config, handler=print_statement if list_statements else None)
        result = scanner.scan_buffer(buffer)

        if verbose:
            click.echo(result.summary())

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
