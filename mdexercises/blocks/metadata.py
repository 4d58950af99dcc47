"""
Metadata block builders (exercise, usecase).

    ::: exercise
    id: hello-world
    difficulty: beginner
    time: 10 minutes
    prerequisites:
      - variables
    :::
"""

from __future__ import annotations

from typing import Any

from mdexercises.config import Settings
from mdexercises.core.models import Difficulty, ExerciseMetadata, UseCaseDomain, UseCaseMetadata
from mdexercises.parsing.body import parse_mapping
from mdexercises.parsing.scanner import DirectiveRegion

from . import BlockKind, register
from .base import CODE, USECASE, parse_enum, parse_time, require, string_list


def _common_fields(block: str, header: dict[str, Any]) -> dict[str, Any]:
    """Fields shared by both metadata variants."""
    fields: dict[str, Any] = {
        "id": str(require(block, header, "id")).strip(),
        "difficulty": parse_enum(Difficulty, "difficulty", require(block, header, "difficulty")),
        "prerequisites": string_list("prerequisites", header.get("prerequisites")),
    }
    if header.get("time") is not None:
        fields["time_minutes"] = parse_time(header["time"])
    return fields


@register(BlockKind.EXERCISE)
class ExerciseMetadataBuilder:
    """Builds metadata for code exercises."""

    field = "metadata"
    repeatable = False
    variants = frozenset({CODE})

    def build(self, region: DirectiveRegion, settings: Settings) -> ExerciseMetadata:
        header = parse_mapping(BlockKind.EXERCISE.value, region.body)
        return ExerciseMetadata(**_common_fields(BlockKind.EXERCISE.value, header))


@register(BlockKind.USECASE)
class UseCaseMetadataBuilder:
    """Builds metadata for use-case exercises; ``domain`` is required."""

    field = "metadata"
    repeatable = False
    variants = frozenset({USECASE})

    def build(self, region: DirectiveRegion, settings: Settings) -> UseCaseMetadata:
        block = BlockKind.USECASE.value
        header = parse_mapping(block, region.body)
        fields = _common_fields(block, header)
        fields["domain"] = parse_enum(UseCaseDomain, "domain", require(block, header, "domain"))
        return UseCaseMetadata(**fields)
