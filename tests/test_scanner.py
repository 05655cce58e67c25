"""
Tests for the Scanner driver and ScanConfig
===========================================

These tests verify that whole sources are loaded, scanned to completion,
counted, and handed to a statement handler, and that configuration is
read from the environment.
"""

from pathlib import Path

import pytest

from mmscan import (
    BufferOverflowError,
    EmptyDeclarationListError,
    Keyword,
    NonAsciiByteError,
    ScanConfig,
    Scanner,
    SourceBuffer,
    SourceIOError,
    scan_bytes,
    scan_file,
)
from mmscan.config import DEFAULT_CAPACITY, DEFAULT_SOURCE_PATH


SOURCE = b"""\
$( demo $)
$c wff |- $.
$v ph ps $.
wph $f wff ph $.
wps $f wff ps $.
${
  min $e |- ph $.
  ax-mp $a |- ps $.
$}
"""


# =============================================================================
# Scanner Tests
# =============================================================================

class TestScanner:
    """Tests for Scanner.scan_bytes() and scan_file()."""

    def test_statistics(self):
        result = scan_bytes(SOURCE, "demo.mm")
        stats = result.stats

        assert stats.source == "demo.mm"
        assert stats.byte_count == len(SOURCE)
        assert stats.comment_count == 1
        assert stats.statement_count == 8
        assert stats.count(Keyword.FLOATING) == 2
        assert stats.count(Keyword.PROVABLE) == 0
        assert stats.labels == ["wph", "wps", "min", "ax-mp"]

    def test_token_count_includes_comments(self):
        result = scan_bytes(b"$( x $) $c a $.")
        assert result.stats.token_count == 6

    def test_statements_kept(self):
        result = scan_bytes(SOURCE)
        assert len(result.statements) == 8
        assert result.statements[0].keyword is Keyword.CONSTANT

    def test_statements_not_kept(self):
        scanner = Scanner(ScanConfig(keep_statements=False))
        result = scanner.scan_bytes(SOURCE)
        assert result.statements == []
        assert result.stats.statement_count == 8

    def test_handler_sees_every_statement_in_order(self):
        seen = []
        Scanner(handler=lambda s: seen.append((s.label, s.keyword))).scan_bytes(SOURCE)

        assert seen[0] == (None, Keyword.CONSTANT)
        assert seen[2] == ("wph", Keyword.FLOATING)
        assert seen[-1] == (None, Keyword.BLOCK_CLOSE)
        assert len(seen) == 8

    def test_handler_error_propagates(self):
        def reject(statement):
            raise RuntimeError(f"rejected {statement.keyword.value}")

        with pytest.raises(RuntimeError, match=r"rejected \$c"):
            Scanner(handler=reject).scan_bytes(SOURCE)

    def test_scan_file(self, tmp_path):
        source = tmp_path / "demo.mm"
        source.write_bytes(SOURCE)

        result = scan_file(source)

        assert result.stats.source == str(source)
        assert result.stats.statement_count == 8

    def test_scan_missing_file(self, tmp_path):
        with pytest.raises(SourceIOError):
            Scanner().scan_file(tmp_path / "missing.mm")

    def test_capacity_from_config(self, tmp_path):
        source = tmp_path / "demo.mm"
        source.write_bytes(SOURCE)

        with pytest.raises(BufferOverflowError):
            Scanner(ScanConfig(capacity=16)).scan_file(source)

    def test_buffer_closed_after_scan(self):
        buffer = SourceBuffer.from_bytes(SOURCE)
        Scanner().scan_buffer(buffer)
        assert buffer.closed

    def test_buffer_closed_after_error(self):
        buffer = SourceBuffer.from_bytes(b"$c a $. $c $.")
        with pytest.raises(EmptyDeclarationListError):
            Scanner().scan_buffer(buffer)
        assert buffer.closed

    def test_error_aborts_scan(self):
        seen = []
        with pytest.raises(NonAsciiByteError):
            Scanner(handler=seen.append).scan_bytes(b"$c a $. $v \xe9 $. $v y $.")
        assert len(seen) == 1

    def test_scanner_reusable(self):
        """Each scan is an independent session."""
        scanner = Scanner()
        first = scanner.scan_bytes(b"$c a $.")
        second = scanner.scan_bytes(b"$v x $. $v y $.")
        assert first.stats.statement_count == 1
        assert second.stats.statement_count == 2

    def test_summary(self):
        summary = scan_bytes(SOURCE, "demo.mm").summary()
        assert summary.startswith("demo.mm:")
        assert "8 statements" in summary
        assert "$f  2" in summary
        assert "$p" not in summary


# =============================================================================
# Configuration Tests
# =============================================================================

class TestScanConfig:
    """Tests for ScanConfig defaults and from_env()."""

    def test_defaults(self):
        config = ScanConfig()
        assert config.capacity == DEFAULT_CAPACITY == 100_000_000
        assert config.default_path == DEFAULT_SOURCE_PATH == Path("set.mm")
        assert config.keep_statements

    def test_from_env_empty(self, monkeypatch):
        monkeypatch.delenv("MMSCAN_CAPACITY", raising=False)
        monkeypatch.delenv("MMSCAN_DEFAULT_PATH", raising=False)
        assert ScanConfig.from_env() == ScanConfig()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MMSCAN_CAPACITY", "4096")
        monkeypatch.setenv("MMSCAN_DEFAULT_PATH", "/data/iset.mm")

        config = ScanConfig.from_env()

        assert config.capacity == 4096
        assert config.default_path == Path("/data/iset.mm")

    @pytest.mark.parametrize("value", ["lots", "-5", "0", ""])
    def test_invalid_capacity_ignored(self, monkeypatch, value):
        monkeypatch.setenv("MMSCAN_CAPACITY", value)
        assert ScanConfig.from_env().capacity == DEFAULT_CAPACITY
