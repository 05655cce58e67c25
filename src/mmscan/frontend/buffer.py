"""
Source Buffer
=============

This module owns the raw bytes of one Metamath source file. The whole file
is read into memory in a single bulk operation and exposed through a
forward-only read position.

Lifecycle
---------
    >>> from mmscan.frontend.buffer import open_source, close_source
    >>> buffer = open_source("set.mm")
    >>> buffer.length
    41234567
    >>> close_source(buffer)

Buffers are also context managers, and can be built from bytes already in
memory (useful for tests and for callers that fetch sources themselves):

    >>> with SourceBuffer.from_bytes(b"$c wff $.") as buffer:
    ...     buffer.position
    0

Invariant: 0 <= position <= length <= capacity. The position only moves
forward, and only through skip().
"""

from bisect import bisect_right
from pathlib import Path
from typing import Optional, Union
import logging
import re

from mmscan.config import DEFAULT_CAPACITY
from mmscan.errors import (
    BufferOverflowError,
    EndOfInputError,
    SourceIOError,
    SourceLocation,
)

# Logger for this module
logger = logging.getLogger(__name__)


class SourceBuffer:
    """
    Immutable source bytes with a monotonic read position.

    Attributes:
        name: Source name used in error locations
        capacity: Largest number of bytes this buffer accepts
    """

    def __init__(
        self,
        data: bytes,
        name: str = "<input>",
        capacity: int = DEFAULT_CAPACITY,
    ):
        if len(data) > capacity:
            raise BufferOverflowError(name, capacity)

        self.name = name
        self.capacity = capacity
        self._data: Optional[bytes] = bytes(data)
        self._length = len(data)
        self._position = 0

        # Offsets of the first byte of each line, built on first use
        self._line_starts: Optional[list[int]] = None

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        name: str = "<input>",
        capacity: int = DEFAULT_CAPACITY,
    ) -> "SourceBuffer":
        """Create a buffer over bytes already in memory."""
        return cls(data, name=name, capacity=capacity)

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"{self._position}/{self._length}"
        return f"SourceBuffer({self.name!r}, {state})"

    def __enter__(self) -> "SourceBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # =========================================================================
    # State
    # =========================================================================

    @property
    def data(self) -> bytes:
        """The loaded bytes."""
        if self._data is None:
            raise ValueError(f"operation on closed source buffer {self.name!r}")
        return self._data

    @property
    def length(self) -> int:
        """Number of bytes actually loaded."""
        return self._length

    @property
    def position(self) -> int:
        """Offset of the next unread byte."""
        return self._position

    @property
    def remaining(self) -> int:
        return self._length - self._position

    @property
    def closed(self) -> bool:
        return self._data is None

    def skip(self, count: int = 1) -> None:
        """
        Move the read position forward by count bytes.

        Raises:
            ValueError: If count is negative or the buffer is closed
            EndOfInputError: If the move would pass the end of the buffer
        """
        if count < 0:
            raise ValueError("source position cannot move backwards")
        if self._data is None:
            raise ValueError(f"operation on closed source buffer {self.name!r}")
        if self._position + count > self._length:
            raise EndOfInputError(self._length)
        self._position += count

    def close(self) -> None:
        """Release the loaded bytes. Closing twice is harmless."""
        self._data = None
        self._line_starts = None

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def location(self, offset: int) -> SourceLocation:
        """
        Convert a byte offset to a 1-indexed line and column.

        The line index is computed once, on the first call, so scans that
        never report a location pay nothing for it.
        """
        starts = self._get_line_starts()
        line = bisect_right(starts, offset)
        column = offset - starts[line - 1] + 1
        return SourceLocation(self.name, line, column, offset)

    def line_text(self, offset: int) -> str:
        """Return the text of the line containing offset, for error context."""
        starts = self._get_line_starts()
        start = starts[bisect_right(starts, offset) - 1]
        end = self.data.find(b"\n", start)
        if end == -1:
            end = self._length
        return self.data[start:end].rstrip(b"\r").decode("ascii", errors="replace")

    def _get_line_starts(self) -> list[int]:
        if self._line_starts is None:
            starts = [0]
            starts.extend(m.end() for m in re.finditer(rb"\n", self.data))
            self._line_starts = starts
        return self._line_starts


# =============================================================================
# Loader
# =============================================================================

def open_source(
    path: Union[str, Path],
    capacity: int = DEFAULT_CAPACITY,
) -> SourceBuffer:
    """
    Load a whole source file into a new SourceBuffer.

    At most capacity + 1 bytes are read; anything longer than capacity is
    rejected rather than truncated.

    Args:
        path: Path to the .mm file
        capacity: Largest accepted file size in bytes

    Returns:
        A SourceBuffer positioned at offset 0

    Raises:
        SourceIOError: If the file cannot be opened or read
        BufferOverflowError: If the file is larger than capacity
    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            data = f.read(capacity + 1)
    except OSError as e:
        logger.debug(f"Failed to read {path}: {e}")
        raise SourceIOError(str(path), e.strerror or str(e)) from e

    if len(data) > capacity:
        logger.debug(f"{path} is larger than the {capacity} byte capacity")
        raise BufferOverflowError(str(path), capacity)

    logger.debug(f"Loaded {len(data)} bytes from {path}")
    return SourceBuffer(data, name=str(path), capacity=capacity)


def close_source(buffer: SourceBuffer) -> None:
    """Release a buffer returned by open_source()."""
    buffer.close()
