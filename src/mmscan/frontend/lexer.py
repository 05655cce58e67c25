"""
Metamath Lexer
==============

This module splits a Metamath source buffer into tokens. The grammar is
deliberately tiny: a token is a maximal run of non-whitespace characters,
and whitespace is anything that is a space or not a printable character.
There are no separators, quoting or escapes at this level.

Keywords
--------
A small closed set of tokens drives the statement scanner:

| Keyword | Meaning                    |
|---------|----------------------------|
| $c      | constant declaration       |
| $v      | variable declaration       |
| $d      | distinct variable group    |
| $f      | floating hypothesis        |
| $e      | essential hypothesis       |
| $a      | axiomatic assertion        |
| $p      | provable assertion         |
| $( $)   | comment open / close       |
| ${ $}   | block open / close         |
| $.      | statement terminator       |

Keywords are ordinary tokens as far as the tokenizer is concerned; each
Token is classified against the Keyword enum as it is produced.

Example
-------
>>> from mmscan.frontend.lexer import tokenize
>>> tokenize(b"  $c foo $. ")
['$c', 'foo', '$.']
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional
import re
import sys

from mmscan.frontend.buffer import SourceBuffer
from mmscan.frontend.cursor import END_OF_INPUT, CharacterCursor


# =============================================================================
# Whitespace Classifier
# =============================================================================

def is_whitespace(char: str) -> bool:
    """
    Return True if char separates tokens.

    Whitespace is the space character or any non-printable character
    (controls, DEL). Every printable non-space ASCII character is token
    material.
    """
    return char == " " or not char.isprintable()


# Byte tables for 0-127 derived from is_whitespace(). High-bit bytes are in
# neither table; the cursor rejects them.
WHITESPACE_BYTES = bytes(b for b in range(128) if is_whitespace(chr(b)))
TOKEN_BYTES = bytes(b for b in range(128) if not is_whitespace(chr(b)))

_WHITESPACE_RUN = re.compile(b"[" + re.escape(WHITESPACE_BYTES) + b"]*")
_TOKEN_RUN = re.compile(b"[" + re.escape(TOKEN_BYTES) + b"]+")


# =============================================================================
# Keywords
# =============================================================================

class Keyword(Enum):
    """Reserved Metamath keywords, valued by their spelling."""

    CONSTANT = "$c"
    VARIABLE = "$v"
    DISJOINT = "$d"
    FLOATING = "$f"
    ESSENTIAL = "$e"
    AXIOM = "$a"
    PROVABLE = "$p"
    COMMENT_OPEN = "$("
    COMMENT_CLOSE = "$)"
    BLOCK_OPEN = "${"
    BLOCK_CLOSE = "$}"
    TERMINATOR = "$."

    @classmethod
    def classify(cls, text: str) -> Optional["Keyword"]:
        """Return the keyword spelled by text, or None for ordinary tokens."""
        return _KEYWORDS_BY_SPELLING.get(text)

    @property
    def is_labelled(self) -> bool:
        """True for statement types that must be preceded by a label."""
        return self in LABELLED_KEYWORDS


_KEYWORDS_BY_SPELLING: dict[str, Keyword] = {k.value: k for k in Keyword}

LABELLED_KEYWORDS = frozenset({
    Keyword.FLOATING,
    Keyword.ESSENTIAL,
    Keyword.AXIOM,
    Keyword.PROVABLE,
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single whitespace-delimited token.

    Tokens compare equal by text alone; offset and keyword are excluded from
    equality and hashing. Texts are interned, so equal tokens share one
    string object.

    Attributes:
        text: The token characters
        offset: Byte offset of the first character in the buffer
        keyword: The Keyword this token spells, or None
    """
    text: str
    offset: int = field(default=0, compare=False)
    keyword: Optional[Keyword] = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Token({self.text!r}, @{self.offset})"


# =============================================================================
# Tokenizer
# =============================================================================

class Tokenizer:
    """
    Produces tokens from a CharacterCursor.

    The token stream is lazy, finite and forward-only: every read consumes
    input and there is no rewind.

    Usage:
        tokenizer = Tokenizer(CharacterCursor(buffer))
        for token in tokenizer:
            print(token.text)
    """

    def __init__(self, cursor: CharacterCursor):
        self.cursor = cursor
        self.token_count = 0

    @classmethod
    def from_buffer(cls, buffer: SourceBuffer) -> "Tokenizer":
        return cls(CharacterCursor(buffer))

    @property
    def buffer(self) -> SourceBuffer:
        return self.cursor.buffer

    def __iter__(self) -> Iterator[Token]:
        while (token := self.read_token()) is not None:
            yield token

    def read_token(self) -> Optional[Token]:
        """
        Read the next token.

        Leading whitespace is discarded, then the maximal run of
        non-whitespace characters is returned.

        Returns:
            The next Token, or None at end of input

        Raises:
            NonAsciiByteError: If a byte above 127 is reached
        """
        self.cursor.advance_run(_WHITESPACE_RUN)
        if self.cursor.peek() == END_OF_INPUT:
            return None

        offset = self.cursor.position
        text = sys.intern(self.cursor.advance_run(_TOKEN_RUN))
        self.token_count += 1
        return Token(text, offset, Keyword.classify(text))


def tokenize(data: bytes, name: str = "<input>") -> list[str]:
    """
    Tokenize bytes and return the token texts.

    Comments are not skipped; this is the raw token stream.
    """
    with SourceBuffer.from_bytes(data, name) as buffer:
        return [token.text for token in Tokenizer.from_buffer(buffer)]
