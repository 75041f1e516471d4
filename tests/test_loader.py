"""Tests for almanac.loader."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from almanac.loader import TimelineDecodeError, TimelineNotFoundError, load_timeline
from almanac.parse import parse_timeline


class TestLoadTimeline:
    def test_reads_and_parses(self, tmp_path: Path) -> None:
        path = tmp_path / "timeline.md"
        path.write_text("# Work\nJan, 2020: Did X [http://x]\n", encoding="utf-8")
        entries = load_timeline(path)
        assert len(entries) == 1
        assert entries[0].category == "Work"
        assert entries[0].link == "http://x"

    def test_unicode_titles(self, tmp_path: Path) -> None:
        path = tmp_path / "timeline.md"
        path.write_text("# Café\nSep, 2018: Moved to Zürich\n", encoding="utf-8")
        entry = load_timeline(path)[0]
        assert entry.title == "Moved to Zürich"
        assert entry.category == "Café"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(TimelineNotFoundError, match="Timeline not found"):
            load_timeline(tmp_path / "nope.md")

    def test_directory_is_not_a_timeline(self, tmp_path: Path) -> None:
        with pytest.raises(TimelineNotFoundError):
            load_timeline(tmp_path)

    def test_lone_carriage_return_is_not_a_line_break(self, tmp_path: Path) -> None:
        path = tmp_path / "timeline.md"
        path.write_bytes(b"# Work\rJan, 2020: X\n")
        assert load_timeline(path) == parse_timeline("# Work\rJan, 2020: X\n") == []

    def test_crlf_matches_parse(self, tmp_path: Path) -> None:
        path = tmp_path / "timeline.md"
        path.write_bytes(b"# Work\r\nJan, 2020: X\r\n")
        entries = load_timeline(path)
        assert entries == parse_timeline("# Work\r\nJan, 2020: X\r\n")
        assert entries[0].category == "Work"

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "timeline.md"
        path.write_bytes(b"Jan, 2020: \xff\xfe\n")
        with pytest.raises(TimelineDecodeError, match="not valid UTF-8"):
            load_timeline(path)

    def test_logs_counts(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "timeline.md"
        path.write_text("# A\nJan, 2020: x\n# B\nFeb, 2020: y\nnoise\n")
        with caplog.at_level(logging.DEBUG, logger="almanac.loader"):
            load_timeline(path)
        assert "Loaded 2 entries in 2 categories" in caplog.text
        assert "Ignored 1 non-entry line(s)" in caplog.text
