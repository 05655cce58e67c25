# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the Metamath tokenizer.
#
# Test coverage includes:
#   - Whitespace classification
#   - Keyword classification
#   - Token boundaries, equality and interning
#   - Position invariants while tokenizing
#   - Non-ASCII bytes inside and between tokens
# =============================================================================

import pytest

from mmscan.errors import NonAsciiByteError
from mmscan.frontend.buffer import SourceBuffer
from mmscan.frontend.lexer import (
    Keyword,
    Token,
    Tokenizer,
    TOKEN_BYTES,
    WHITESPACE_BYTES,
    is_whitespace,
    tokenize,
)


# =============================================================================
# Helper Function
# =============================================================================

def make_tokenizer(source: bytes) -> Tokenizer:
    """Build a tokenizer over an in-memory buffer."""
    return Tokenizer.from_buffer(SourceBuffer.from_bytes(source, "<test>"))


# =============================================================================
# Whitespace Classifier Tests
# =============================================================================

class TestWhitespaceClassifier:
    """Test the whitespace/token character split."""

    @pytest.mark.parametrize("char", [" ", "\t", "\n", "\r", "\x0c", "\x00", "\x1b", "\x7f"])
    def test_whitespace(self, char):
        assert is_whitespace(char)

    @pytest.mark.parametrize("char", ["a", "Z", "0", "$", ".", "(", "~", "!", "|", "-"])
    def test_token_characters(self, char):
        assert not is_whitespace(char)

    def test_byte_tables_partition_ascii(self):
        """Every 7-bit byte is in exactly one table."""
        assert len(WHITESPACE_BYTES) == 34  # 0-32 and DEL
        assert len(TOKEN_BYTES) == 94       # '!' through '~'
        assert set(WHITESPACE_BYTES) | set(TOKEN_BYTES) == set(range(128))
        assert not set(WHITESPACE_BYTES) & set(TOKEN_BYTES)


# =============================================================================
# Keyword Tests
# =============================================================================

class TestKeywords:
    """Test keyword classification."""

    def test_all_keywords_classified(self):
        for spelling in ["$c", "$v", "$d", "$f", "$e", "$a", "$p",
                         "$(", "$)", "${", "$}", "$."]:
            keyword = Keyword.classify(spelling)
            assert keyword is not None
            assert keyword.value == spelling

    def test_ordinary_tokens(self):
        for text in ["wff", "ax-1", "$=", "$[", "$", "$cc", "c"]:
            assert Keyword.classify(text) is None

    def test_labelled_keywords(self):
        labelled = {k for k in Keyword if k.is_labelled}
        assert labelled == {
            Keyword.FLOATING,
            Keyword.ESSENTIAL,
            Keyword.AXIOM,
            Keyword.PROVABLE,
        }

    def test_token_carries_keyword(self):
        tokenizer = make_tokenizer(b"$c wff")
        assert tokenizer.read_token().keyword is Keyword.CONSTANT
        assert tokenizer.read_token().keyword is None


# =============================================================================
# Tokenizer Tests
# =============================================================================

class TestTokenizer:
    """Test token boundaries."""

    def test_empty_input(self):
        """An empty buffer yields no token immediately."""
        assert make_tokenizer(b"").read_token() is None

    def test_whitespace_only(self):
        assert make_tokenizer(b"  \t\n\r\n ").read_token() is None

    def test_statement(self):
        """Surrounding whitespace is discarded."""
        assert tokenize(b"  $c foo $. ") == ["$c", "foo", "$."]

    def test_mixed_separators(self):
        """Tabs, newlines and runs of spaces are all just whitespace."""
        assert tokenize(b"a\tb\n\nc   d\r\ne\x0cf") == ["a", "b", "c", "d", "e", "f"]

    def test_control_characters_separate(self):
        assert tokenize(b"a\x00b\x7fc") == ["a", "b", "c"]

    def test_punctuation_is_token_material(self):
        assert tokenize(b"|- ( ph -> ps )") == ["|-", "(", "ph", "->", "ps", ")"]

    def test_long_token(self):
        """A single run of non-whitespace is one token, however long."""
        text = b"x" * 100_000
        assert tokenize(b" " + text + b" ") == [text.decode()]

    def test_token_at_end_of_input(self):
        assert tokenize(b"$c a") == ["$c", "a"]

    def test_offsets(self):
        tokenizer = make_tokenizer(b"  $c foo\n$.")
        offsets = [token.offset for token in tokenizer]
        assert offsets == [2, 5, 9]

    def test_stream_is_not_restartable(self):
        tokenizer = make_tokenizer(b"a b")
        assert [t.text for t in tokenizer] == ["a", "b"]
        assert list(tokenizer) == []
        assert tokenizer.read_token() is None

    def test_token_count(self):
        tokenizer = make_tokenizer(b"$c a b $.")
        list(tokenizer)
        assert tokenizer.token_count == 4


# =============================================================================
# Token Equality Tests
# =============================================================================

class TestTokenEquality:
    """Tokens compare by text only."""

    def test_equal_text_different_offsets(self):
        assert Token("wff", 0) == Token("wff", 42)
        assert hash(Token("wff", 0)) == hash(Token("wff", 42))

    def test_different_text(self):
        assert Token("wff", 0) != Token("class", 0)

    def test_interned(self):
        """Identical spellings anywhere in the file share one string."""
        tokens = list(make_tokenizer(b"wff ph\n\n  wff ps wff"))
        assert tokens[0] == tokens[2] == tokens[4]
        assert tokens[0].text is tokens[2].text
        assert tokens[2].text is tokens[4].text

    def test_str(self):
        assert str(Token("ax-mp", 3)) == "ax-mp"


# =============================================================================
# Position Invariant Tests
# =============================================================================

class TestPositionInvariants:
    """The read position stays within the buffer."""

    @pytest.mark.parametrize("source", [
        b"",
        b" ",
        b"a",
        b"$c a $.",
        b"\n\n$( comment $)\n$v x y $.\n",
        b"tok" * 50 + b"   ",
    ])
    def test_position_in_bounds(self, source):
        buffer = SourceBuffer.from_bytes(source)
        tokenizer = Tokenizer.from_buffer(buffer)
        while True:
            token = tokenizer.read_token()
            assert 0 <= buffer.position <= buffer.length
            if token is None:
                break
        assert buffer.position == buffer.length

    def test_round_trip(self):
        """Joining tokens with single spaces and re-tokenizing is stable."""
        source = b"$c ( ) -> wff $.\n\t$v ph ps $.\n wi $a wff ( ph -> ps ) $.\n"
        tokens = tokenize(source)
        normalized = " ".join(tokens).encode("ascii")
        assert tokenize(normalized) == tokens


# =============================================================================
# Non-ASCII Tests
# =============================================================================

class TestNonAscii:
    """Bytes above 127 are reported exactly where they occur."""

    def test_inside_token(self):
        tokenizer = make_tokenizer(b"$c a\xc8b $.")
        assert tokenizer.read_token().text == "$c"
        with pytest.raises(NonAsciiByteError) as exc_info:
            tokenizer.read_token()
        assert exc_info.value.offset == 4
        assert exc_info.value.value == 200

    def test_in_whitespace(self):
        tokenizer = make_tokenizer(b"$c  \xc8 a")
        assert tokenizer.read_token().text == "$c"
        with pytest.raises(NonAsciiByteError) as exc_info:
            tokenizer.read_token()
        assert exc_info.value.offset == 4

    def test_first_byte(self):
        with pytest.raises(NonAsciiByteError) as exc_info:
            make_tokenizer(b"\xc8").read_token()
        assert exc_info.value.offset == 0

    def test_not_reported_early(self):
        """Tokens before the bad byte are all produced."""
        tokenizer = make_tokenizer(b"a b c \xff")
        assert [tokenizer.read_token().text for _ in range(3)] == ["a", "b", "c"]
        with pytest.raises(NonAsciiByteError) as exc_info:
            tokenizer.read_token()
        assert exc_info.value.offset == 6

    def test_position_left_at_bad_byte(self):
        buffer = SourceBuffer.from_bytes(b"ab\xc8")
        tokenizer = Tokenizer.from_buffer(buffer)
        with pytest.raises(NonAsciiByteError):
            tokenizer.read_token()
        assert buffer.position == 2
