"""
Unit tests for text and timestamp utilities.
"""

from datetime import datetime, timezone

import pytest

from autoresume.utils.text_processing import split_csv, strip_url, truncate
from autoresume.utils.timestamp import format_timestamp, now, parse_github_timestamp

REFERENCE = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.mark.unit
class TestStripUrl:
    """Tests for strip_url()."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://www.linkedin.com/in/jane/", "linkedin.com/in/jane"),
            ("http://github.com/jane", "github.com/jane"),
            ("jane.dev/", "jane.dev"),
            ("https://jane.dev", "jane.dev"),
        ],
    )
    def test_strip_url(self, url, expected):
        assert strip_url(url) == expected


@pytest.mark.unit
class TestTextHelpers:
    """Tests for split_csv() and truncate()."""

    def test_split_csv_trims(self):
        assert split_csv(" 1, 2 ,3 ") == ["1", "2", "3"]

    def test_split_csv_keeps_empty_tokens(self):
        assert split_csv("1,,3") == ["1", "", "3"]

    def test_truncate(self):
        assert truncate("abcdef", limit=3) == "abc..."
        assert truncate("abc", limit=3) == "abc"


@pytest.mark.unit
class TestTimestamps:
    """Tests for GitHub timestamp parsing and formatting."""

    def test_parse_zulu(self):
        dt = parse_github_timestamp("2024-03-01T12:00:00Z")

        assert dt == datetime(2024, 3, 1, 12, tzinfo=timezone.utc)

    def test_parse_invalid(self):
        assert parse_github_timestamp("yesterday") is None
        assert parse_github_timestamp("") is None

    def test_format_date(self):
        assert format_timestamp("2024-03-01T12:00:00Z") == "2024-03-01"

    def test_format_unparseable_passthrough(self):
        assert format_timestamp("unknown") == "unknown"

    @pytest.mark.parametrize(
        "iso, expected",
        [
            ("2024-12-27T00:00:00Z", "5d ago"),
            ("2024-10-01T00:00:00Z", "3mo ago"),
            ("2022-06-01T00:00:00Z", "2y ago"),
            ("2025-06-01T00:00:00Z", "in the future"),
        ],
    )
    def test_relative(self, iso, expected):
        assert format_timestamp(iso, relative=True, reference=REFERENCE) == expected

    def test_now_format(self):
        stamp = now()

        assert len(stamp) == 15
        assert stamp[8] == "_"
