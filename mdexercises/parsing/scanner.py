"""
Line scanner for exercise markdown.

Splits a document into content segments (plain markdown outside any
directive) and directive regions:

    ::: hint level=1
    Body lines, kept verbatim.
    :::

A region opened with a longer colon run (``::::``) is only closed by the
same run, so its body may contain literal ``:::`` lines. Lines inside
fenced code blocks are never treated as directive openings or closings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

from loguru import logger

from mdexercises.core.errors import UnclosedBlockError

from .attributes import AttributeValue, parse_attributes

OPEN_PATTERN = re.compile(r"^(:{3,})[ ]+([a-z][a-z0-9-]*)(.*)$")
CLOSE_PATTERN = re.compile(r"^:{3,}$")
CODE_FENCE_PATTERN = re.compile(r"^\s*(`{3,}|~{3,})(.*)$")


@dataclass(frozen=True)
class ContentSegment:
    """Consecutive lines outside any directive."""

    start_line: int
    lines: tuple[str, ...]
    fenced: tuple[bool, ...]  # per line: inside a fenced code block

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class DirectiveRegion:
    """A ``::: kind attrs`` ... ``:::`` span."""

    kind: str
    attributes: dict[str, AttributeValue]
    body: tuple[str, ...]
    start_line: int
    end_line: int
    fence: str = ":::"

    @property
    def body_text(self) -> str:
        return "\n".join(self.body)


Segment = Union[ContentSegment, DirectiveRegion]


class CodeFenceTracker:
    """Tracks whether successive lines sit inside a fenced code block."""

    def __init__(self) -> None:
        self.marker: str | None = None

    @property
    def inside(self) -> bool:
        return self.marker is not None

    def feed(self, line: str) -> bool:
        """Consume a line; True if it belongs to a code block (fences included)."""
        match = CODE_FENCE_PATTERN.match(line)

        if self.marker is None:
            if match:
                self.marker = match.group(1)
                return True
            return False

        if (
            match
            and match.group(1)[0] == self.marker[0]
            and len(match.group(1)) >= len(self.marker)
            and not match.group(2).strip()
        ):
            self.marker = None
        return True


@dataclass
class _OpenRegion:
    kind: str
    attributes: dict[str, AttributeValue]
    fence: str
    start_line: int
    body: list[str] = field(default_factory=list)


def match_directive_start(line: str) -> re.Match[str] | None:
    """Match a directive opening line (leading/trailing whitespace ignored)."""
    return OPEN_PATTERN.match(line.strip())


def scan(text: str) -> list[Segment]:
    """
    Scan markdown into content segments and directive regions.

    Raises:
        UnclosedBlockError: If a directive is still open at end of input.
    """
    segments: list[Segment] = []
    content_lines: list[str] = []
    content_fenced: list[bool] = []
    content_start = 1
    region: _OpenRegion | None = None
    fences = CodeFenceTracker()

    def flush_content() -> None:
        if content_lines:
            segments.append(
                ContentSegment(
                    start_line=content_start,
                    lines=tuple(content_lines),
                    fenced=tuple(content_fenced),
                )
            )
            content_lines.clear()
            content_fenced.clear()

    for number, raw in enumerate(text.split("\n"), start=1):
        line = raw.rstrip("\r")
        in_code = fences.feed(line)
        stripped = line.strip()

        if region is not None:
            if not in_code and stripped == region.fence:
                segments.append(
                    DirectiveRegion(
                        kind=region.kind,
                        attributes=region.attributes,
                        body=tuple(region.body),
                        start_line=region.start_line,
                        end_line=number,
                        fence=region.fence,
                    )
                )
                logger.debug(f"Closed '{region.kind}' block (lines {region.start_line}-{number})")
                region = None
                content_start = number + 1
                continue

            if not in_code:
                nested = match_directive_start(line)
                if nested and nested.group(1) == region.fence:
                    logger.warning(
                        f"Line {number}: '{nested.group(2)}' opened inside '{region.kind}' "
                        f"(line {region.start_line}); nested directives are kept as text"
                    )

            region.body.append(line)
            continue

        if not in_code:
            opening = match_directive_start(line)
            if opening:
                flush_content()
                region = _OpenRegion(
                    kind=opening.group(2),
                    attributes=parse_attributes(opening.group(3)),
                    fence=opening.group(1),
                    start_line=number,
                )
                continue

            if CLOSE_PATTERN.match(stripped):
                logger.warning(f"Line {number}: closing '{stripped}' without an open directive, ignored")
                continue

        if not content_lines:
            content_start = number
        content_lines.append(line)
        content_fenced.append(in_code)

    if region is not None:
        raise UnclosedBlockError(region.kind, region.start_line)

    flush_content()
    logger.debug(
        f"Scanned {sum(isinstance(s, DirectiveRegion) for s in segments)} directive regions"
    )
    return segments
