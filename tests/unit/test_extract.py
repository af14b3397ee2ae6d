"""Unit tests for version extraction."""

import re

import pytest

from corrator.core.extract import extract_version
from corrator.utils.errors import ExtractionError


class TestExtractVersion:
    """Tests for extract_version."""

    def test_extracts_named_group(self):
        """Test the version group is returned."""
        pattern = re.compile(r"test: (?P<version>[0-9.]+)")
        assert extract_version(pattern, "test: 1.2.3") == "1.2.3"

    def test_bash_version_output(self):
        """Test extraction from real bash output."""
        output = "bash, version 5.1.16(1)-release"
        pattern = r"version (?P<version>[0-9]+\.[0-9]+\.[0-9]+)"
        assert extract_version(pattern, output) == "5.1.16"

    def test_uses_first_match(self):
        """Test the first occurrence wins."""
        pattern = r"v(?P<version>[0-9]+)"
        assert extract_version(pattern, "v1 then v2") == "1"

    def test_matches_across_lines(self):
        """Test the pattern is searched in multi-line output."""
        output = "OpenSSL\nversion: 3.0.2 15 Mar 2022\n"
        assert extract_version(r"version: (?P<version>\S+)", output) == "3.0.2"

    def test_no_match_raises(self):
        """Test a non-matching pattern raises ExtractionError."""
        with pytest.raises(ExtractionError) as exc_info:
            extract_version(r"Python (?P<version>[0-9.]+)", "command not found")

        assert exc_info.value.code == "NO_MATCH"
        assert exc_info.value.text == "command not found"
        assert exc_info.value.pattern == r"Python (?P<version>[0-9.]+)"

    def test_missing_named_group_raises(self):
        """Test a pattern without a version group raises ExtractionError."""
        with pytest.raises(ExtractionError):
            extract_version(r"[0-9.]+", "1.2.3")

    def test_optional_group_not_participating_raises(self):
        """Test an optional version group that did not match raises."""
        with pytest.raises(ExtractionError):
            extract_version(r"tool(?: (?P<version>[0-9.]+))?", "tool")

    def test_empty_output_raises(self):
        """Test empty command output raises."""
        with pytest.raises(ExtractionError):
            extract_version(r"(?P<version>[0-9.]+)", "")
