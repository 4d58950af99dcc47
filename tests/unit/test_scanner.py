"""
Unit tests for the directive line scanner.

Run: pytest tests/unit/test_scanner.py -v
"""
import pytest

from mdexercises.core.errors import UnclosedBlockError
from mdexercises.parsing.attributes import Bare
from mdexercises.parsing.scanner import (
    CodeFenceTracker,
    ContentSegment,
    DirectiveRegion,
    match_directive_start,
    scan,
)


def _regions(segments):
    return [s for s in segments if isinstance(s, DirectiveRegion)]


class TestDirectiveRegions:
    """Test recognition of ::: kind ... ::: spans."""

    def test_single_region(self):
        """A directive becomes one region with its attributes and body."""
        segments = scan("::: hint level=1\nA\n:::")
        assert len(segments) == 1
        region = segments[0]
        assert isinstance(region, DirectiveRegion)
        assert region.kind == "hint"
        assert region.attributes == {"level": Bare("1")}
        assert region.body == ("A",)
        assert region.start_line == 1
        assert region.end_line == 3

    def test_content_between_regions(self):
        """Plain markdown around directives becomes content segments."""
        text = "Intro\n::: exercise\nid: a\n:::\nMiddle\n::: hint level=1\nB\n:::\nOutro"
        segments = scan(text)
        kinds = [type(s).__name__ for s in segments]
        assert kinds == [
            "ContentSegment",
            "DirectiveRegion",
            "ContentSegment",
            "DirectiveRegion",
            "ContentSegment",
        ]
        assert segments[2].text == "Middle"
        assert segments[2].start_line == 5

    def test_indented_directive(self):
        """Leading whitespace before ::: is ignored."""
        region = _regions(scan("  ::: hint level=2\n  Text\n  :::"))[0]
        assert region.kind == "hint"
        assert region.body == ("  Text",)

    def test_hyphenated_kind(self):
        """Kinds may contain hyphens (sample-answer)."""
        region = _regions(scan("::: sample-answer\nAnswer\n:::"))[0]
        assert region.kind == "sample-answer"

    def test_crlf_line_endings(self):
        """Carriage returns are stripped from every line."""
        region = _regions(scan("::: hint level=1\r\nA\r\n:::\r\n"))[0]
        assert region.body == ("A",)

    def test_body_text(self):
        """body_text joins body lines verbatim."""
        region = _regions(scan("::: context\nline one\n\n  line two\n:::"))[0]
        assert region.body_text == "line one\n\n  line two"


class TestCodeFences:
    """Test that fenced code is never scanned for directives."""

    def test_directive_inside_content_fence(self):
        """A ::: line inside a code block outside any region is content."""
        segments = scan("```markdown\n::: hint level=1\n:::\n```")
        assert _regions(segments) == []
        assert isinstance(segments[0], ContentSegment)
        assert all(segments[0].fenced)

    def test_closing_marker_inside_region_fence(self):
        """A ::: line inside a code block does not close the region."""
        region = _regions(scan("::: solution\n```text\n:::\n```\n:::"))[0]
        assert region.body == ("```text", ":::", "```")
        assert region.end_line == 5

    def test_tilde_fence(self):
        """Tilde fences protect their content too."""
        segments = scan("~~~\n::: hint level=1\n~~~")
        assert _regions(segments) == []

    def test_fence_tracker_needs_matching_marker(self):
        """A shorter or different fence does not close the block."""
        tracker = CodeFenceTracker()
        assert tracker.feed("````")
        assert tracker.feed("```")
        assert tracker.inside
        assert tracker.feed("~~~~")
        assert tracker.inside
        assert tracker.feed("````")
        assert not tracker.inside


class TestFenceLength:
    """Test longer colon runs."""

    def test_longer_fence_contains_short_close(self):
        """A :::: region is only closed by ::::."""
        region = _regions(scan(":::: context\n:::\ninner\n::::"))[0]
        assert region.fence == "::::"
        assert region.body == (":::", "inner")

    def test_match_directive_start(self):
        """Opening lines need a space between the colons and the kind."""
        assert match_directive_start("::: hint level=1").group(2) == "hint"
        assert match_directive_start(":::hint") is None
        assert match_directive_start(":::") is None


class TestMalformedInput:
    """Test unclosed, stray and nested directives."""

    def test_unclosed_region(self):
        """An open region at end of input reports its opening line."""
        with pytest.raises(UnclosedBlockError) as exc_info:
            scan("Text\n\n::: hint level=1\nNever closed")
        assert exc_info.value.line == 3
        assert exc_info.value.kind == "hint"
        assert "starting at line 3" in str(exc_info.value)

    def test_stray_close_is_dropped(self, log_messages):
        """A closing ::: outside any region is dropped with a warning."""
        segments = scan("a\n:::\nb")
        assert _regions(segments) == []
        assert segments[0].lines == ("a", "b")
        assert any("without an open directive" in m for m in log_messages)

    def test_nested_opening_kept_as_body(self, log_messages):
        """A nested opening is body text; the first ::: closes the outer region."""
        segments = scan("::: hint level=1\n::: context\nX\n:::\nafter")
        region = _regions(segments)[0]
        assert region.kind == "hint"
        assert region.body == ("::: context", "X")
        assert segments[-1].text == "after"
        assert any("nested directives are kept as text" in m for m in log_messages)

    def test_empty_document(self):
        """Empty input gives one empty content segment."""
        segments = scan("")
        assert _regions(segments) == []
