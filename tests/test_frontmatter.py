"""Tests for command/agent frontmatter parsing."""

from gsd_orchestrator.discovery.frontmatter import (
    extract_objective,
    parse_frontmatter,
    split_frontmatter,
)


class TestParseFrontmatter:
    """Tests for parse_frontmatter."""

    def test_scalar_fields(self):
        content = "---\nname: gsd:help\ndescription: Show help\n---\nBody"
        assert parse_frontmatter(content) == {"name": "gsd:help", "description": "Show help"}

    def test_hyphenated_keys(self):
        content = '---\nargument-hint: "[phase]"\n---\n'
        assert parse_frontmatter(content) == {"argument-hint": "[phase]"}

    def test_block_list(self):
        content = "---\nallowed-tools:\n  - Read\n  - Write\nname: x\n---\n"
        meta = parse_frontmatter(content)
        assert meta["allowed-tools"] == ["Read", "Write"]
        assert meta["name"] == "x"

    def test_inline_list(self):
        content = "---\nargument-hint: [phase, plan]\n---\n"
        assert parse_frontmatter(content)["argument-hint"] == ["phase", "plan"]

    def test_quoted_values_are_unquoted(self):
        content = "---\nname: 'gsd:quick'\ndescription: \"Quick task\"\n---\n"
        meta = parse_frontmatter(content)
        assert meta["name"] == "gsd:quick"
        assert meta["description"] == "Quick task"

    def test_comments_and_blank_lines_ignored(self):
        content = "---\n# comment\n\nname: a\n---\n"
        assert parse_frontmatter(content) == {"name": "a"}

    def test_list_item_without_open_key_ignored(self):
        content = "---\nname: a\n  - stray\ndescription: b\n---\n"
        assert parse_frontmatter(content) == {"name": "a", "description": "b"}

    def test_empty_block_list(self):
        content = "---\ntools:\nname: a\n---\n"
        assert parse_frontmatter(content) == {"tools": [], "name": "a"}

    def test_no_frontmatter(self):
        assert parse_frontmatter("# Just markdown\n") == {}

    def test_unterminated_frontmatter(self):
        assert parse_frontmatter("---\nname: a\nno closing delimiter\n") == {}

    def test_crlf_line_endings(self):
        content = "---\r\nname: gsd:help\r\ndescription: Help\r\n---\r\nBody"
        meta = parse_frontmatter(content)
        assert meta["name"] == "gsd:help"


class TestSplitFrontmatter:
    """Tests for split_frontmatter."""

    def test_returns_header_and_body(self):
        header, body = split_frontmatter("---\nname: a\n---\nBody text\n")
        assert header == "name: a"
        assert body == "Body text\n"

    def test_without_header_returns_whole_content(self):
        header, body = split_frontmatter("Body only")
        assert header is None
        assert body == "Body only"


class TestExtractObjective:
    """Tests for extract_objective."""

    def test_extracts_and_strips(self):
        body = "<objective>\n  Plan the phase.\n</objective>\n<process>x</process>"
        assert extract_objective(body) == "Plan the phase."

    def test_only_first_block(self):
        body = "<objective>First</objective>\n<objective>Second</objective>"
        assert extract_objective(body) == "First"

    def test_missing_block(self):
        assert extract_objective("<process>Do it</process>") is None

    def test_empty_block(self):
        assert extract_objective("<objective>   </objective>") is None
