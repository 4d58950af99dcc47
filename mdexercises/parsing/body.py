"""
Directive body helpers.

A directive body may start with a YAML-like header and continue with
free-form markdown, with no blank line required between the two:

    ::: scenario
    organization: Acme
    constraints:
      - HIPAA
    Acme is a hospital network.
    :::

``split_body`` finds where the header stops by looking at line shapes,
rolls back over trailing blank lines, then parses the header once with
PyYAML. The remaining helpers pull fenced code and list items out of
markdown bodies.
"""

from __future__ import annotations

import re
import textwrap
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import yaml

from mdexercises.core.errors import StructuredHeaderError

from .scanner import CODE_FENCE_PATTERN

HEADER_KEY_PATTERN = re.compile(r"^(\s*)([A-Za-z_][A-Za-z0-9_-]*)\s*:(?:\s+(.*))?$")
BLOCK_SCALAR_PATTERN = re.compile(r"^[|>][+-]?\d*$")
LIST_ITEM_PATTERN = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+(.*)$")


@dataclass(frozen=True)
class SplitBody:
    """A directive body separated into header mapping and markdown content."""

    header: dict[str, Any] = field(default_factory=dict)
    content: str = ""
    header_line_count: int = 0


@dataclass(frozen=True)
class FencedCode:
    """The first fenced code block of a body."""

    info: str
    code: str
    before: tuple[str, ...]
    after: tuple[str, ...]


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def _load_mapping(block: str, text: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise StructuredHeaderError(block, str(e).replace("\n", " ")) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise StructuredHeaderError(block, f"expected a mapping, got {type(data).__name__}")
    return {str(key): value for key, value in data.items()}


class _HeaderShape:
    """Line-shape rules for a header starting at ``base_indent``."""

    def __init__(self, base_indent: int):
        self.base_indent = base_indent
        self.nested = False

    def top_level_key(self, line: str) -> re.Match[str] | None:
        match = HEADER_KEY_PATTERN.match(line)
        if not match or len(match.group(1)) != self.base_indent:
            return None
        return match

    def continues(self, line: str) -> bool:
        if self.top_level_key(line):
            return True
        if not self.nested:
            return False
        stripped = line.lstrip()
        return _indent(line) > self.base_indent or stripped == "-" or stripped.startswith("- ")

    def accept(self, line: str) -> bool:
        """Consume a non-blank line; False once the header has ended."""
        match = self.top_level_key(line)
        if match:
            value = (match.group(3) or "").strip()
            self.nested = not value or bool(BLOCK_SCALAR_PATTERN.match(value))
            return True
        return self.continues(line)


def find_header_end(lines: Sequence[str]) -> tuple[int, int]:
    """
    Locate the structured header at the start of ``lines``.

    Returns ``(start, end)`` indices; ``start == end`` when there is no header.
    """
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1

    if start == len(lines):
        return start, start

    shape = _HeaderShape(_indent(lines[start]))
    if not shape.top_level_key(lines[start]):
        return start, start

    end = start
    index = start
    while index < len(lines):
        line = lines[index]
        if not line.strip():
            ahead = index + 1
            while ahead < len(lines) and not lines[ahead].strip():
                ahead += 1
            # Blank lines stay in the header only if it carries on after them.
            if ahead < len(lines) and shape.continues(lines[ahead]):
                index = ahead
                continue
            break

        if not shape.accept(line):
            break
        end = index + 1
        index += 1

    return start, end


def split_body(block: str, lines: Sequence[str]) -> SplitBody:
    """
    Separate a leading YAML header from the markdown that follows it.

    Args:
        block: Block kind, used in error messages.
        lines: Raw body lines.

    Raises:
        StructuredHeaderError: If the header is not a valid YAML mapping.
    """
    start, end = find_header_end(lines)
    header: dict[str, Any] = {}
    if end > start:
        header = _load_mapping(block, textwrap.dedent("\n".join(lines[start:end])))

    content_lines = lines[end:] if end > start else lines
    return SplitBody(
        header=header,
        content="\n".join(content_lines).strip(),
        header_line_count=end - start,
    )


def parse_mapping(block: str, lines: Sequence[str]) -> dict[str, Any]:
    """Parse a whole body as a YAML mapping (empty body -> {})."""
    return _load_mapping(block, textwrap.dedent("\n".join(lines)))


def extract_code_block(lines: Sequence[str]) -> FencedCode | None:
    """Return the first fenced code block, or None if the body has none."""
    for index, line in enumerate(lines):
        opening = CODE_FENCE_PATTERN.match(line)
        if not opening:
            continue

        marker = opening.group(1)
        code: list[str] = []
        for offset, inner in enumerate(lines[index + 1 :], start=index + 1):
            closing = CODE_FENCE_PATTERN.match(inner)
            if (
                closing
                and closing.group(1)[0] == marker[0]
                and len(closing.group(1)) >= len(marker)
                and not closing.group(2).strip()
            ):
                return FencedCode(
                    info=opening.group(2).strip(),
                    code="\n".join(code),
                    before=tuple(lines[:index]),
                    after=tuple(lines[offset + 1 :]),
                )
            code.append(inner)

        # Unterminated fence: the code runs to the end of the body.
        return FencedCode(
            info=opening.group(2).strip(),
            code="\n".join(code),
            before=tuple(lines[:index]),
            after=(),
        )
    return None


def extract_markdown_list(lines: Sequence[str]) -> list[str]:
    """Collect bullet and numbered list item texts."""
    items = []
    for line in lines:
        match = LIST_ITEM_PATTERN.match(line)
        if match and match.group(1).strip():
            items.append(match.group(1).strip())
    return items
