"""
Character Cursor
================

Peek/advance access to a SourceBuffer, one ASCII character at a time.
Byte values map to characters one-to-one for 0-127; any higher byte raises
NonAsciiByteError at the offset of that byte.
"""

import re

from mmscan.errors import EndOfInputError, NonAsciiByteError
from mmscan.frontend.buffer import SourceBuffer


# Returned by peek() when the buffer is exhausted.
END_OF_INPUT = ""


class CharacterCursor:
    """
    Reads characters from a SourceBuffer.

    The cursor borrows the buffer: it moves the buffer's position but never
    closes it.

    Usage:
        cursor = CharacterCursor(buffer)
        while cursor.peek() != END_OF_INPUT:
            char = cursor.advance()
    """

    def __init__(self, buffer: SourceBuffer):
        self.buffer = buffer

    @property
    def position(self) -> int:
        return self.buffer.position

    @property
    def at_end(self) -> bool:
        return self.buffer.position >= self.buffer.length

    def peek(self) -> str:
        """
        Return the character at the current position without consuming it.

        Returns END_OF_INPUT when the buffer is exhausted.

        Raises:
            NonAsciiByteError: If the byte at the position is above 127
        """
        position = self.buffer.position
        if position >= self.buffer.length:
            return END_OF_INPUT

        value = self.buffer.data[position]
        if value > 127:
            raise self._non_ascii(value, position)
        return chr(value)

    def advance(self) -> str:
        """
        Consume and return the character at the current position.

        Raises:
            EndOfInputError: If the buffer is exhausted
            NonAsciiByteError: If the byte at the position is above 127
        """
        char = self.peek()
        if char == END_OF_INPUT:
            raise EndOfInputError(self.buffer.position)
        self.buffer.skip()
        return char

    def advance_run(self, pattern: re.Pattern[bytes]) -> str:
        """
        Consume the longest run matched by pattern at the current position.

        pattern must only match ASCII bytes. The byte that ends the run is
        checked with peek(), so a high-bit byte directly after the run is
        reported at its own offset.

        Returns:
            The consumed characters (possibly empty)
        """
        position = self.buffer.position
        match = pattern.match(self.buffer.data, position)
        run = match.group() if match else b""
        if run:
            self.buffer.skip(len(run))
        self.peek()
        return run.decode("ascii")

    def _non_ascii(self, value: int, offset: int) -> NonAsciiByteError:
        return NonAsciiByteError(
            value,
            offset,
            location=self.buffer.location(offset),
            source_line=self.buffer.line_text(offset),
        )
