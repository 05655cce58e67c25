"""
Metamath Statement Scanner
==========================

This module drives the token stream from the lexer through the top-level
structure of a Metamath database and produces one Statement per
declaration, hypothesis or assertion.

Statement Forms
---------------
```
$( any tokens $)              comment, skipped
$c c1 c2 ... $.               constants (at least one)
$v v1 v2 ... $.               variables
$d x y ... $.                 distinct variable group
${  $}                        block open / close
label $f tc x $.              floating hypothesis
label $e tc ... $.            essential hypothesis
label $a tc ... $.            axiomatic assertion
label $p tc ... $= proof $.   provable assertion
```

Statement bodies are not interpreted here. Each Statement carries the
keyword, the optional label and the ordered body tokens (comments and the
terminator removed), which is everything a semantic layer needs to build
declarations and check proofs.

The scanner keeps no scope stack. Block keywords are reported as
body-less statements and their nesting is left to the consumer.

Example
-------
>>> from mmscan.frontend.parser import parse_source
>>> for stmt in parse_source(b"$c wff $. ax-1 $a wff $."):
...     print(stmt)
$c wff $.
ax-1 $a wff $.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from mmscan.errors import (
    EmptyDeclarationListError,
    MisplacedKeywordError,
    ScanError,
    UnexpectedEndOfInputError,
    UnknownStatementKeywordError,
    UnterminatedCommentError,
    UnterminatedDeclarationError,
)
from mmscan.frontend.buffer import SourceBuffer
from mmscan.frontend.lexer import Keyword, Token, Tokenizer


# =============================================================================
# Statement Data Class
# =============================================================================

@dataclass
class Statement:
    """
    One top-level Metamath statement.

    Attributes:
        keyword: The statement type
        body: Token texts between the keyword and '$.', comments removed
        label: The statement label ($f, $e, $a, $p only)
        offset: Byte offset of the first token of the statement
    """
    keyword: Keyword
    body: tuple[str, ...] = ()
    label: Optional[str] = None
    offset: int = field(default=0, compare=False)

    def __str__(self) -> str:
        parts = [self.label] if self.label else []
        parts.append(self.keyword.value)
        parts.extend(self.body)
        if self.keyword not in (Keyword.BLOCK_OPEN, Keyword.BLOCK_CLOSE):
            parts.append(Keyword.TERMINATOR.value)
        return " ".join(parts)


# =============================================================================
# Statement Scanner
# =============================================================================

class StatementScanner:
    """
    Scans a token stream into Statements.

    The scanner has a single resting state, "awaiting the next top-level
    token". Each keyword starts a sub-scan that always returns to it. The
    first error aborts the scan.

    Usage:
        tokenizer = Tokenizer.from_buffer(buffer)
        scanner = StatementScanner(tokenizer)
        for statement in scanner:
            ...

    Attributes:
        tokenizer: The token source (borrowed)
        comment_count: Number of comments skipped so far
    """

    def __init__(self, tokenizer: Tokenizer):
        self.tokenizer = tokenizer
        self.comment_count = 0

    @property
    def buffer(self) -> SourceBuffer:
        return self.tokenizer.buffer

    def __iter__(self) -> Iterator[Statement]:
        while (statement := self.next_statement()) is not None:
            yield statement

    def scan(self) -> list[Statement]:
        """Scan to end of input and return every statement."""
        return list(self)

    def next_statement(self) -> Optional[Statement]:
        """
        Scan the next statement.

        Returns:
            The next Statement, or None at a clean end of input

        Raises:
            ScanError: On the first malformed construct
        """
        while True:
            token = self.tokenizer.read_token()
            if token is None:
                return None

            keyword = token.keyword
            if keyword is None:
                return self._read_labelled(token)
            if keyword is Keyword.COMMENT_OPEN:
                self.skip_comment(token)
            elif keyword is Keyword.CONSTANT:
                return self._read_constants(token)
            elif keyword in (Keyword.VARIABLE, Keyword.DISJOINT):
                return self._read_body(token)
            elif keyword in (Keyword.BLOCK_OPEN, Keyword.BLOCK_CLOSE):
                return Statement(keyword, offset=token.offset)
            else:
                raise self._misplaced(token)

    # =========================================================================
    # Shared Readers
    # =========================================================================

    def skip_comment(self, opener: Token) -> None:
        """
        Consume tokens up to and including the next '$)'.

        Nested '$(' tokens have no special meaning; only '$)' closes.

        Raises:
            UnterminatedCommentError: If input ends inside the comment
        """
        while True:
            token = self.tokenizer.read_token()
            if token is None:
                raise self._error(
                    UnterminatedCommentError,
                    "comment is not closed before end of input",
                    opener,
                    hint="close the comment with '$)'",
                )
            if token.keyword is Keyword.COMMENT_CLOSE:
                self.comment_count += 1
                return

    def read_to_terminator(
        self,
        opener: Optional[Token] = None,
        terminator: Keyword = Keyword.TERMINATOR,
        error_class: type[UnexpectedEndOfInputError] = UnexpectedEndOfInputError,
    ) -> list[str]:
        """
        Collect token texts up to the terminator.

        Comments inside the body are skipped and excluded. The terminator is
        consumed but not returned.

        Args:
            opener: Token that started the statement, for error locations
            terminator: Keyword that ends the body
            error_class: Exception raised if input ends first

        Raises:
            UnexpectedEndOfInputError: (or error_class) if input ends before
                the terminator
        """
        tokens: list[str] = []
        while True:
            token = self.tokenizer.read_token()
            if token is None:
                what = f"'{opener.text}' statement" if opener else "statement"
                raise self._error(
                    error_class,
                    f"{what} is not terminated by '{terminator.value}' "
                    "before end of input",
                    opener,
                )
            if token.keyword is terminator:
                return tokens
            if token.keyword is Keyword.COMMENT_OPEN:
                self.skip_comment(token)
                continue
            tokens.append(token.text)

    # =========================================================================
    # Statement Readers
    # =========================================================================

    def _read_constants(self, opener: Token) -> Statement:
        constants = self.read_to_terminator(
            opener, error_class=UnterminatedDeclarationError
        )
        if not constants:
            raise self._error(
                EmptyDeclarationListError,
                "'$c' statement declares no constants",
                opener,
            )
        return Statement(Keyword.CONSTANT, tuple(constants), offset=opener.offset)

    def _read_body(self, opener: Token) -> Statement:
        body = self.read_to_terminator(opener)
        return Statement(opener.keyword, tuple(body), offset=opener.offset)

    def _read_labelled(self, label: Token) -> Statement:
        token = self.tokenizer.read_token()
        if token is None:
            raise self._error(
                UnexpectedEndOfInputError,
                f"label '{label.text}' is not followed by a statement",
                label,
            )

        if token.keyword is None or not token.keyword.is_labelled:
            raise UnknownStatementKeywordError(
                f"label '{label.text}' is followed by '{token.text}', "
                "not a statement keyword",
                label=label.text,
                keyword=token.text,
                location=self.buffer.location(token.offset),
                hint="expected one of $f, $e, $a, $p",
                source_line=self.buffer.line_text(token.offset),
            )

        body = self.read_to_terminator(token)
        return Statement(token.keyword, tuple(body), label.text, label.offset)

    # =========================================================================
    # Errors
    # =========================================================================

    def _misplaced(self, token: Token) -> MisplacedKeywordError:
        if token.keyword.is_labelled:
            hint = f"'{token.text}' statements need a label"
        else:
            hint = None
        return MisplacedKeywordError(
            f"unexpected '{token.text}' at start of statement",
            keyword=token.text,
            location=self.buffer.location(token.offset),
            hint=hint,
            source_line=self.buffer.line_text(token.offset),
        )

    def _error(
        self,
        error_class: type[ScanError],
        message: str,
        token: Optional[Token],
        hint: Optional[str] = None,
    ) -> ScanError:
        """Build an error located at token (or at end of input)."""
        offset = token.offset if token is not None else self.buffer.length
        location = self.buffer.location(offset)
        return error_class(
            message,
            location=location,
            hint=hint,
            source_line=self.buffer.line_text(offset),
        )


def parse_source(data: bytes, name: str = "<input>") -> list[Statement]:
    """
    Convenience function to scan bytes into statements.

    Raises:
        ScanError: On the first malformed construct
    """
    with SourceBuffer.from_bytes(data, name) as buffer:
        return StatementScanner(Tokenizer.from_buffer(buffer)).scan()
