"""
Guidance block builders: hints, objectives, discussion and reflection.
"""

from __future__ import annotations

from mdexercises.config import Settings
from mdexercises.core.errors import MissingFieldError
from mdexercises.core.models import Hint, Objectives
from mdexercises.parsing.attributes import attribute_text
from mdexercises.parsing.body import extract_markdown_list, parse_mapping
from mdexercises.parsing.scanner import DirectiveRegion

from . import BlockKind, register
from .base import CODE, USECASE, parse_int, string_list


@register(BlockKind.HINT)
class HintBuilder:
    """
    Progressive hint.

    ``level`` is required; gaps and out-of-order levels are kept as written.
    """

    field = "hints"
    repeatable = True
    variants = frozenset({CODE, USECASE})

    def build(self, region: DirectiveRegion, settings: Settings) -> Hint:
        level = attribute_text(region.attributes, "level")
        if level is None:
            raise MissingFieldError(BlockKind.HINT.value, "level")

        return Hint(
            level=parse_int("level", level, minimum=1),
            title=attribute_text(region.attributes, "title"),
            content=region.body_text.strip(),
        )


@register(BlockKind.OBJECTIVES)
class ObjectivesBuilder:
    """Thinking (conceptual) and doing (practical) objectives."""

    field = "objectives"
    repeatable = False
    variants = frozenset({CODE, USECASE})

    def build(self, region: DirectiveRegion, settings: Settings) -> Objectives:
        header = parse_mapping(BlockKind.OBJECTIVES.value, region.body)
        return Objectives(
            thinking=string_list("thinking", header.get("thinking")),
            doing=string_list("doing", header.get("doing")),
        )


class _ListBuilder:
    """A markdown list of prompts; an empty list leaves the field unset."""

    repeatable = False
    variants = frozenset({CODE})

    def build(self, region: DirectiveRegion, settings: Settings) -> list[str] | None:
        return extract_markdown_list(region.body) or None


@register(BlockKind.DISCUSSION)
class DiscussionBuilder(_ListBuilder):
    field = "discussion"


@register(BlockKind.REFLECTION)
class ReflectionBuilder(_ListBuilder):
    field = "reflection"
