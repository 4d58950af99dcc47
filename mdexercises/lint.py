"""
Lint for exercise markdown: flags ``tests`` blocks without any test code.

An empty tests block renders as a runnable section with nothing to run,
so book builds check for it before publishing.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from mdexercises.blocks import BlockKind
from mdexercises.core.errors import ExerciseParseError
from mdexercises.parsing.body import extract_code_block
from mdexercises.parsing.scanner import DirectiveRegion, scan


@dataclass(frozen=True)
class LintViolation:
    """An empty tests block."""

    file: Path
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


def find_empty_tests(text: str) -> list[int]:
    """
    Opening lines of ``tests`` blocks with no fenced code or only blank code.

    Raises:
        UnclosedBlockError: If the document has an unclosed directive.
    """
    lines = []
    for segment in scan(text):
        if not isinstance(segment, DirectiveRegion) or segment.kind != BlockKind.TESTS.value:
            continue
        fenced = extract_code_block(segment.body)
        if fenced is None or not fenced.code.strip():
            lines.append(segment.start_line)
    return lines


def iter_markdown_files(paths: Iterable[Path | str]) -> Iterator[Path]:
    """Yield markdown files; directories are walked recursively in sorted order."""
    for path in map(Path, paths):
        if path.is_dir():
            yield from sorted(p for p in path.rglob("*.md") if p.is_file())
        elif path.is_file() and path.suffix == ".md":
            yield path
        else:
            logger.warning(f"Skipping {path}: not a markdown file or directory")


def lint_paths(paths: Iterable[Path | str]) -> list[LintViolation]:
    """Lint every markdown file under ``paths``."""
    violations: list[LintViolation] = []
    for file in iter_markdown_files(paths):
        try:
            lines = find_empty_tests(file.read_text(encoding="utf-8"))
        except ExerciseParseError as e:
            logger.warning(f"Skipping {file}: {e}")
            continue
        violations.extend(LintViolation(file=file, line=line) for line in lines)

    logger.debug(f"Lint found {len(violations)} empty tests blocks")
    return violations
