"""
mmscan Error Hierarchy
======================

This module defines the exception hierarchy for the Metamath front end.
All exceptions inherit from MetamathError, allowing callers to catch all
scan-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
MetamathError (base)
└── ScanError (carries source location)
    ├── SourceIOError - file cannot be opened or read
    │   └── BufferOverflowError - file larger than the buffer capacity
    ├── NonAsciiByteError - byte value above 127
    ├── EndOfInputError - cursor advanced past the end of the buffer
    ├── UnexpectedEndOfInputError - statement body runs off the end
    │   ├── UnterminatedDeclarationError - $c without $.
    │   └── UnterminatedCommentError - $( without $)
    ├── EmptyDeclarationListError - $c with no constants
    └── UnknownStatementKeywordError - label followed by a non-statement token
        └── MisplacedKeywordError - keyword that cannot start a statement

Every error is fatal to the scan that raised it. There is no recovery or
partial-result mode: malformed input at this layer means the file is not
well-formed Metamath.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class MetamathError(Exception):
    """
    Base exception for all mmscan errors.

        try:
            scan_file("set.mm")
        except MetamathError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in a source buffer.

    Attributes:
        filename: Name of the source file (or "<input>" for in-memory data)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Byte offset from the start of the buffer (0-indexed)
    """
    filename: str
    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Scan Exceptions
# =============================================================================

class ScanError(MetamathError):
    """
    Base exception for errors raised while loading or scanning a source.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text of the offending line (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            set.mm:12:3: error: label 'ax-1' is followed by '$c', not a statement keyword
                ax-1 $c wff $.
                     ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class SourceIOError(ScanError):
    """
    The source file cannot be opened or read.

    The underlying OSError, when there is one, is available as __cause__.
    """

    def __init__(self, path: str, reason: str, hint: Optional[str] = None):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read '{path}': {reason}", hint=hint)


class BufferOverflowError(SourceIOError):
    """
    The source is larger than the buffer capacity.

    Oversized input is rejected instead of being silently truncated.
    """

    def __init__(self, path: str, capacity: int):
        self.capacity = capacity
        super().__init__(
            path,
            f"file exceeds buffer capacity of {capacity} bytes",
            hint="raise the capacity with --capacity or MMSCAN_CAPACITY",
        )


class NonAsciiByteError(ScanError):
    """
    A byte with the high bit set was found.

    Metamath sources are 7-bit ASCII; any byte above 127 is a hard error
    reported at the offset of that byte.
    """

    def __init__(
        self,
        value: int,
        offset: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.value = value
        self.offset = offset
        super().__init__(
            f"non-ASCII byte 0x{value:02X} at offset {offset}",
            location=location,
            hint="Metamath sources must be 7-bit ASCII",
            source_line=source_line,
        )


class EndOfInputError(ScanError):
    """The cursor was advanced while already at the end of the buffer."""

    def __init__(self, offset: int):
        self.offset = offset
        super().__init__(f"read past end of input at offset {offset}")


class UnexpectedEndOfInputError(ScanError):
    """
    Input ended in the middle of a statement.

    Raised when a statement body has no terminator before the end of the
    file, or when a label is the last token of the file.
    """
    pass


class UnterminatedDeclarationError(UnexpectedEndOfInputError):
    """A $c declaration reached end of input before its '$.'."""
    pass


class UnterminatedCommentError(UnexpectedEndOfInputError):
    """A comment opened with '$(' reached end of input before '$)'."""
    pass


class EmptyDeclarationListError(ScanError):
    """A $c statement declares no constants."""
    pass


class UnknownStatementKeywordError(ScanError):
    """
    A label is followed by a token that is not $f, $e, $a or $p.

    Attributes:
        label: The label that was read
        keyword: The token that followed it
    """

    def __init__(
        self,
        message: str,
        label: Optional[str] = None,
        keyword: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.label = label
        self.keyword = keyword
        super().__init__(
            message, location=location, hint=hint, source_line=source_line
        )


class MisplacedKeywordError(UnknownStatementKeywordError):
    """
    A reserved keyword appeared where a statement must start.

    Examples:
        - '$.' or '$)' at top level
        - '$a' without a preceding label
    """
    pass
