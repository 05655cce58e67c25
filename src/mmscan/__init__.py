"""
mmscan - Metamath Source Front End
==================================

This package reads Metamath (.mm) proof databases: it loads a whole source
file into memory, splits it into whitespace-delimited tokens, skips
comments, and recognizes the top-level statements ($c, $v, $d, $f, $e,
$a, $p and the ${ $} block keywords).

Statement bodies are handed on uninterpreted. Symbol tables, proof
checking and scoping rules belong to whatever consumes the statements.

Quick Start
-----------
Scan a database:
    >>> from mmscan import Scanner
    >>> result = Scanner().scan_file("set.mm")
    >>> print(result.summary())

Walk the statements yourself:
    >>> from mmscan import open_source, Tokenizer, StatementScanner
    >>> with open_source("set.mm") as buffer:
    ...     for statement in StatementScanner(Tokenizer.from_buffer(buffer)):
    ...         print(statement.label, statement.keyword.value)

Or use the command-line tool:
    $ mmscan set.mm -v

Reference Documentation
-----------------------
- Metamath book: https://us.metamath.org/downloads/metamath.pdf
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from mmscan.config import ScanConfig, DEFAULT_CAPACITY
from mmscan.errors import (
    MetamathError,
    SourceLocation,
    ScanError,
    SourceIOError,
    BufferOverflowError,
    NonAsciiByteError,
    EndOfInputError,
    UnexpectedEndOfInputError,
    UnterminatedDeclarationError,
    UnterminatedCommentError,
    EmptyDeclarationListError,
    UnknownStatementKeywordError,
    MisplacedKeywordError,
)
from mmscan.frontend import (
    SourceBuffer,
    open_source,
    close_source,
    CharacterCursor,
    END_OF_INPUT,
    Keyword,
    Token,
    Tokenizer,
    is_whitespace,
    tokenize,
    Statement,
    StatementScanner,
    parse_source,
    Scanner,
    ScanResult,
    ScanStats,
    scan_file,
    scan_bytes,
)

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "ScanConfig",
    "DEFAULT_CAPACITY",
    # Exception hierarchy
    "MetamathError",
    "SourceLocation",
    "ScanError",
    "SourceIOError",
    "BufferOverflowError",
    "NonAsciiByteError",
    "EndOfInputError",
    "UnexpectedEndOfInputError",
    "UnterminatedDeclarationError",
    "UnterminatedCommentError",
    "EmptyDeclarationListError",
    "UnknownStatementKeywordError",
    "MisplacedKeywordError",
    # Front end
    "SourceBuffer",
    "open_source",
    "close_source",
    "CharacterCursor",
    "END_OF_INPUT",
    "Keyword",
    "Token",
    "Tokenizer",
    "is_whitespace",
    "tokenize",
    "Statement",
    "StatementScanner",
    "parse_source",
    "Scanner",
    "ScanResult",
    "ScanStats",
    "scan_file",
    "scan_bytes",
]
