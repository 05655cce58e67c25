"""
Metamath Front End Driver
=========================

Ties the front end together: load a source buffer, run the statement
scanner over it to completion, and collect statistics. A statement
handler can be attached to receive every Statement as it is scanned; this
is where a symbol table or proof checker plugs in.

Example Usage
-------------
>>> from mmscan.frontend import Scanner
>>> scanner = Scanner()
>>> result = scanner.scan_bytes(b"$c wff $. ${ ax-1 $a wff $. $}")
>>> result.stats.statement_count
4
>>> result.stats.labels
['ax-1']

With a handler:
    def on_statement(statement):
        if statement.keyword is Keyword.PROVABLE:
            check_proof(statement.label, statement.body)

    Scanner(handler=on_statement).scan_file("set.mm")
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union
import logging

from mmscan.config import ScanConfig
from mmscan.frontend.buffer import SourceBuffer, open_source
from mmscan.frontend.lexer import Keyword, Tokenizer
from mmscan.frontend.parser import Statement, StatementScanner

# Logger for this module
logger = logging.getLogger(__name__)

StatementHandler = Callable[[Statement], None]


# =============================================================================
# Results
# =============================================================================

@dataclass
class ScanStats:
    """
    Counters collected during one scan.

    Attributes:
        source: Name of the scanned source
        byte_count: Length of the source buffer
        token_count: Tokens read, including comment tokens
        comment_count: Comments skipped
        statements: Statements scanned, per keyword
        labels: Statement labels in source order
    """
    source: str = "<input>"
    byte_count: int = 0
    token_count: int = 0
    comment_count: int = 0
    statements: Counter = field(default_factory=Counter)
    labels: list[str] = field(default_factory=list)

    @property
    def statement_count(self) -> int:
        return sum(self.statements.values())

    def count(self, keyword: Keyword) -> int:
        return self.statements[keyword]


@dataclass
class ScanResult:
    """
    Outcome of a successful scan.

    Attributes:
        stats: Scan counters
        statements: Every statement, in order (empty unless the scanner
            was configured with keep_statements)
    """
    stats: ScanStats
    statements: list[Statement] = field(default_factory=list)

    def summary(self) -> str:
        """Format the statistics for display."""
        stats = self.stats
        lines = [
            f"{stats.source}: {stats.byte_count} bytes, "
            f"{stats.token_count} tokens, {stats.comment_count} comments",
            f"{stats.statement_count} statements:",
        ]
        for keyword in Keyword:
            if stats.statements[keyword]:
                lines.append(f"  {keyword.value}  {stats.statements[keyword]}")
        return "\n".join(lines)


# =============================================================================
# Scanner
# =============================================================================

class Scanner:
    """
    Loads Metamath sources and scans them to completion.

    Each scan_* call is an independent session with its own buffer; the
    buffer is closed when the scan finishes or fails.

    Usage:
        scanner = Scanner(config=ScanConfig.from_env())
        result = scanner.scan_file("set.mm")
        print(result.summary())
    """

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        handler: Optional[StatementHandler] = None,
    ):
        """
        Initialize the scanner.

        Args:
            config: Scan configuration (default: ScanConfig())
            handler: Called with every Statement, in source order
        """
        self.config = config or ScanConfig()
        self.handler = handler

    def scan_file(self, filepath: Union[str, Path]) -> ScanResult:
        """
        Load and scan a source file.

        Raises:
            SourceIOError: If the file cannot be read or is too large
            ScanError: On the first malformed construct
        """
        buffer = open_source(filepath, capacity=self.config.capacity)
        return self.scan_buffer(buffer)

    def scan_bytes(self, data: bytes, name: str = "<input>") -> ScanResult:
        """Scan source bytes already in memory."""
        buffer = SourceBuffer.from_bytes(data, name, capacity=self.config.capacity)
        return self.scan_buffer(buffer)

    def scan_buffer(self, buffer: SourceBuffer) -> ScanResult:
        """
        Scan a buffer from its current position to end of input.

        The buffer is closed afterwards, whether or not the scan succeeds.
        """
        with buffer:
            tokenizer = Tokenizer.from_buffer(buffer)
            statement_scanner = StatementScanner(tokenizer)
            stats = ScanStats(source=buffer.name, byte_count=buffer.length)
            statements: list[Statement] = []

            try:
                for statement in statement_scanner:
                    stats.statements[statement.keyword] += 1
                    if statement.label is not None:
                        stats.labels.append(statement.label)
                    if self.config.keep_statements:
                        statements.append(statement)
                    if self.handler is not None:
                        self.handler(statement)
            finally:
                stats.token_count = tokenizer.token_count
                stats.comment_count = statement_scanner.comment_count

        logger.info(
            f"Scanned {stats.source}: {stats.statement_count} statements, "
            f"{stats.token_count} tokens"
        )
        return ScanResult(stats, statements)


def scan_file(filepath: Union[str, Path], config: Optional[ScanConfig] = None) -> ScanResult:
    """
    Convenience function to scan a file.

    Raises:
        MetamathError: If loading or scanning fails
    """
    return Scanner(config).scan_file(filepath)


def scan_bytes(data: bytes, name: str = "<input>") -> ScanResult:
    """Convenience function to scan bytes."""
    return Scanner().scan_bytes(data, name)
