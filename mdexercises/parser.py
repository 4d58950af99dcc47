"""
Exercise document assembler.

Turns exercise markdown into a typed document:

    # Exercise: Hello World          <- title

    ::: exercise                     <- metadata (exercise or usecase)
    id: hello-world
    difficulty: beginner
    :::

    Write a greeting function.       <- description

    ::: starter
    ```rust
    fn greet() { todo!() }
    ```
    :::

The metadata block decides the variant: ``exercise`` gives a CodeExercise,
``usecase`` a UseCaseExercise. Every call is independent and does no I/O.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from loguru import logger

from mdexercises.blocks import METADATA_KINDS, BlockKind, get_builder
from mdexercises.blocks.base import CODE, USECASE, BlockBuilder
from mdexercises.config import Settings, get_settings
from mdexercises.core.errors import (
    ConflictingMetadataError,
    DuplicateBlockError,
    ExerciseParseError,
    MissingMetadataError,
)
from mdexercises.core.models import CodeExercise, UseCaseExercise
from mdexercises.parsing.scanner import DirectiveRegion, Segment, scan

HEADING_PATTERN = re.compile(r"^\s{0,3}(#{1,6})\s+(.+?)(?:\s+#+)?\s*$")


def validate_regions(regions: Sequence[DirectiveRegion]) -> DirectiveRegion:
    """
    Check document-level block rules before anything is built.

    Returns:
        The metadata region (exercise or usecase).

    Raises:
        DuplicateBlockError: A singular block kind appears twice.
        MissingMetadataError: No exercise or usecase block.
        ConflictingMetadataError: Both an exercise and a usecase block.
    """
    seen: dict[str, DirectiveRegion] = {}
    for region in regions:
        builder = get_builder(region.kind)
        if builder is None or builder.repeatable:
            continue
        if region.kind in seen:
            raise DuplicateBlockError(region.kind, line=region.start_line)
        seen[region.kind] = region

    metadata = sorted(
        (region for kind, region in seen.items() if kind in METADATA_KINDS),
        key=lambda r: r.start_line,
    )
    if not metadata:
        raise MissingMetadataError()
    if len(metadata) > 1:
        raise ConflictingMetadataError(line=metadata[1].start_line)
    return metadata[0]


def extract_title_and_description(segments: Sequence[Segment]) -> tuple[str | None, str]:
    """
    Title is the first heading before any directive; description is the
    content before the first non-metadata directive, minus the title line.
    """
    title = None
    description: list[str] = []
    seen_directive = False

    for segment in segments:
        if isinstance(segment, DirectiveRegion):
            seen_directive = True
            if segment.kind not in METADATA_KINDS:
                break
            continue

        for line, fenced in zip(segment.lines, segment.fenced):
            if title is None and not seen_directive and not fenced:
                heading = HEADING_PATTERN.match(line)
                if heading:
                    title = heading.group(2).strip()
                    continue
            description.append(line)

    return title, "\n".join(description).strip()


def _build(builder: BlockBuilder, region: DirectiveRegion, settings: Settings) -> Any:
    try:
        return builder.build(region, settings)
    except ExerciseParseError as e:
        if e.line is None:
            e.line = region.start_line
        raise


def parse_exercise(markdown: str, settings: Settings | None = None) -> CodeExercise | UseCaseExercise:
    """
    Parse exercise markdown into a CodeExercise or UseCaseExercise.

    Args:
        markdown: Document text.
        settings: Parser settings; defaults to the environment-derived settings.

    Raises:
        ExerciseParseError: On the first problem found (see core.errors).
    """
    settings = settings or get_settings()
    segments = scan(markdown)
    regions = [s for s in segments if isinstance(s, DirectiveRegion)]

    metadata_region = validate_regions(regions)
    variant = CODE if metadata_region.kind == BlockKind.EXERCISE.value else USECASE

    title, description = extract_title_and_description(segments)
    fields: dict[str, Any] = {"title": title, "description": description, "hints": []}

    for region in regions:
        builder = get_builder(region.kind)
        if builder is None:
            logger.debug(f"Line {region.start_line}: unknown block '{region.kind}' ignored")
            continue
        if variant not in builder.variants:
            logger.warning(
                f"Line {region.start_line}: '{region.kind}' block is not used in {variant} exercises, ignored"
            )
            continue

        value = _build(builder, region, settings)
        if builder.repeatable:
            fields[builder.field].append(value)
        elif value is not None:
            fields[builder.field] = value

    model = CodeExercise if variant == CODE else UseCaseExercise
    exercise = model(**fields)
    logger.debug(
        f"Parsed {variant} exercise '{exercise.metadata.id}' "
        f"({len(regions)} blocks, {len(exercise.hints)} hints)"
    )
    return exercise


def parse_file(path: Path | str, settings: Settings | None = None) -> CodeExercise | UseCaseExercise:
    """Read and parse an exercise markdown file."""
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Exercise file not found: {path}")

    return parse_exercise(path.read_text(encoding="utf-8"), settings)


def has_exercise_directive(markdown: str) -> bool:
    """
    Whether a document has an exercise or usecase block outside code fences.

    Documents whose directives do not scan count as exercises, so that
    parse_exercise reports the problem.
    """
    try:
        segments = scan(markdown)
    except ExerciseParseError:
        return True
    return any(
        isinstance(segment, DirectiveRegion) and segment.kind in METADATA_KINDS
        for segment in segments
    )


__all__ = [
    "extract_title_and_description",
    "has_exercise_directive",
    "parse_exercise",
    "parse_file",
    "validate_regions",
]
