"""
Unit tests for directive body helpers.

Covers the header/content split, which has to guess where a YAML header
ends without a blank line to separate it from prose.
"""
import pytest

from mdexercises.core.errors import StructuredHeaderError
from mdexercises.parsing.body import (
    extract_code_block,
    extract_markdown_list,
    find_header_end,
    parse_mapping,
    split_body,
)


class TestSplitBody:
    """Test separating a leading header from markdown content."""

    def test_header_then_blank_then_prose(self):
        """Header ends at the blank line before the prose."""
        body = split_body("scenario", ["organization: Acme", "", "Acme is a hospital."])
        assert body.header == {"organization": "Acme"}
        assert body.content == "Acme is a hospital."
        assert body.header_line_count == 1

    def test_prose_directly_after_header(self):
        """No blank line is needed between header and prose."""
        body = split_body(
            "scenario",
            ["organization: Acme", "constraints:", "  - HIPAA", "Acme is a hospital."],
        )
        assert body.header == {"organization": "Acme", "constraints": ["HIPAA"]}
        assert body.content == "Acme is a hospital."

    def test_blank_line_inside_nested_list(self):
        """A blank line inside a list does not end the header."""
        body = split_body(
            "scenario",
            ["stakeholders:", "  - CISO", "", "  - Patients", "Text"],
        )
        assert body.header == {"stakeholders": ["CISO", "Patients"]}
        assert body.content == "Text"

    def test_unfamiliar_first_key(self):
        """Any well-formed key starts the header, not only the ones a block reads."""
        body = split_body("scenario", ["location: Boston", "organization: Acme", "", "Acme is a hospital."])
        assert body.header == {"location": "Boston", "organization": "Acme"}
        assert body.content == "Acme is a hospital."
        assert body.header_line_count == 2

    def test_heading_is_not_header(self):
        body = split_body("scenario", ["# Background", "Acme is a hospital."])
        assert body.header == {}
        assert body.content == "# Background\nAcme is a hospital."

    def test_any_key(self):
        body = split_body("block", ["anything: here", "", "Prose"])
        assert body.header == {"anything": "here"}
        assert body.content == "Prose"

    def test_no_header(self):
        body = split_body("prompt", ["Just a question?"])
        assert body.header == {}
        assert body.content == "Just a question?"
        assert body.header_line_count == 0

    def test_invalid_yaml(self):
        with pytest.raises(StructuredHeaderError) as exc_info:
            split_body("scenario", ["organization: [unclosed"])
        assert exc_info.value.block == "scenario"
        assert "YAML parse error in scenario block" in str(exc_info.value)


class TestFindHeaderEnd:
    """Test header boundary detection."""

    def test_leading_blank_lines_skipped(self):
        assert find_header_end(["", "id: x", "Text"]) == (1, 2)

    def test_empty_body(self):
        assert find_header_end([]) == (0, 0)
        assert find_header_end(["", ""]) == (2, 2)

    def test_block_scalar_continues(self):
        lines = ["expected_score: 1", "notes: |", "  first", "  second", "Answer"]
        assert find_header_end(lines) == (0, 4)


class TestParseMapping:
    """Test whole-body YAML mappings."""

    def test_mapping(self):
        assert parse_mapping("exercise", ["id: a", "difficulty: beginner"]) == {
            "id": "a",
            "difficulty": "beginner",
        }

    def test_empty_body(self):
        assert parse_mapping("objectives", []) == {}

    def test_non_mapping(self):
        with pytest.raises(StructuredHeaderError):
            parse_mapping("objectives", ["- a", "- b"])


class TestExtractCodeBlock:
    """Test pulling the first fenced code block out of a body."""

    def test_code_with_surroundings(self):
        fenced = extract_code_block(["Intro", "```rust,filename=a.rs", "fn main() {}", "```", "After"])
        assert fenced.info == "rust,filename=a.rs"
        assert fenced.code == "fn main() {}"
        assert fenced.before == ("Intro",)
        assert fenced.after == ("After",)

    def test_unterminated_fence(self):
        fenced = extract_code_block(["```", "x", "y"])
        assert fenced.code == "x\ny"
        assert fenced.after == ()

    def test_longer_outer_fence(self):
        fenced = extract_code_block(["````md", "```", "inner", "```", "````"])
        assert fenced.code == "```\ninner\n```"

    def test_no_fence(self):
        assert extract_code_block(["plain text"]) is None


class TestExtractMarkdownList:
    """Test list item extraction."""

    def test_bullets_and_numbers(self):
        lines = ["- a", "* b", "1. c", "2) d", "plain text", "-"]
        assert extract_markdown_list(lines) == ["a", "b", "c", "d"]

    def test_no_items(self):
        assert extract_markdown_list(["nothing here"]) == []
