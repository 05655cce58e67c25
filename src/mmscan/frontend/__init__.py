"""
Metamath Front End
==================

Lexical and top-level structural front end for Metamath (.mm) sources.

Main Components
---------------
- **SourceBuffer**: Owns the bytes of one source file (open_source/close_source)
- **CharacterCursor**: Peek/advance over a buffer with ASCII validation
- **Tokenizer**: Splits the buffer into whitespace-delimited tokens
- **StatementScanner**: Skips comments and reads statements up to '$.'
- **Scanner**: Loads a source, scans it to completion, collects statistics

Data flows one way:

    file bytes -> SourceBuffer -> CharacterCursor -> Tokenizer
               -> StatementScanner -> Statement handler (symbol table,
                  proof checker)
"""

from mmscan.frontend.buffer import SourceBuffer, open_source, close_source
from mmscan.frontend.cursor import CharacterCursor, END_OF_INPUT
from mmscan.frontend.lexer import (
    Keyword,
    Token,
    Tokenizer,
    is_whitespace,
    tokenize,
)
from mmscan.frontend.parser import Statement, StatementScanner, parse_source
from mmscan.frontend.scanner import (
    Scanner,
    ScanResult,
    ScanStats,
    scan_file,
    scan_bytes,
)

__all__ = [
    # Buffer
    "SourceBuffer",
    "open_source",
    "close_source",
    # Cursor
    "CharacterCursor",
    "END_OF_INPUT",
    # Lexer
    "Keyword",
    "Token",
    "Tokenizer",
    "is_whitespace",
    "tokenize",
    # Parser
    "Statement",
    "StatementScanner",
    "parse_source",
    # Driver
    "Scanner",
    "ScanResult",
    "ScanStats",
    "scan_file",
    "scan_bytes",
]
