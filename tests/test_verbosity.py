"""Tests for verbosity filtering of output sections."""

import pytest
from pydantic import ValidationError

from gsd_orchestrator.verbosity import (
    DEFAULT_VERBOSITY,
    OutputSection,
    VerbosityLevel,
    clamp_verbosity,
    filter_by_verbosity,
)

SECTIONS = [
    OutputSection(tag="command", content="gsd:plan-phase", min_level=1),
    OutputSection(tag="confidence", content="0.77", min_level=2),
    OutputSection(tag="description", content="Create a plan"),
    OutputSection(tag="lifecycle", content="executing", min_level=4),
    OutputSection(tag="alternatives", content="...", min_level=5),
]


def tags(sections):
    return [section.tag for section in sections]


class TestFilterByVerbosity:
    """Tests for filter_by_verbosity."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            (1, ["command"]),
            (2, ["command", "confidence"]),
            (3, ["command", "confidence", "description"]),
            (4, ["command", "confidence", "description", "lifecycle"]),
            (5, ["command", "confidence", "description", "lifecycle", "alternatives"]),
        ],
    )
    def test_levels(self, level, expected):
        assert tags(filter_by_verbosity(SECTIONS, level)) == expected

    def test_returns_new_list(self):
        sections = list(SECTIONS)
        result = filter_by_verbosity(sections, 5)
        assert result == sections
        assert result is not sections
        assert sections == SECTIONS

    def test_empty(self):
        assert filter_by_verbosity([], 3) == []

    def test_named_levels(self):
        assert tags(filter_by_verbosity(SECTIONS, VerbosityLevel.SILENT)) == ["command"]
        assert VerbosityLevel.TRANSPARENT == 5


class TestOutputSection:
    """Tests for OutputSection validation."""

    def test_default_level(self):
        assert OutputSection(tag="t", content="c").min_level == DEFAULT_VERBOSITY

    @pytest.mark.parametrize("level", [0, 6, "3", 2.5, True])
    def test_rejects_bad_levels(self, level):
        with pytest.raises(ValidationError):
            OutputSection(tag="t", content="c", min_level=level)

    def test_extra_fields_kept(self):
        section = OutputSection(tag="t", content="c", source="bayes")
        assert section.source == "bayes"


class TestClampVerbosity:
    """Tests for clamp_verbosity."""

    def test_clamps(self):
        assert clamp_verbosity(0) == 1
        assert clamp_verbosity(3) == 3
        assert clamp_verbosity(42) == 5
