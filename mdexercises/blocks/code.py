"""
Code block builders: starter, solution and tests.

Language and filename may come from the directive or the code fence:

    ::: starter file="src/lib.rs"
    ```rust,filename=src/main.rs
    fn main() {}
    ```
    :::

The directive attribute wins (filename here is ``src/lib.rs``); the fence
only fills what the directive leaves out, and the configured default
language applies last.
"""

from __future__ import annotations

from mdexercises.config import Settings
from mdexercises.core.models import Solution, SolutionReveal, StarterCode, TestBlock, TestMode
from mdexercises.parsing.attributes import attribute_text, parse_fence_info
from mdexercises.parsing.body import FencedCode, extract_code_block
from mdexercises.parsing.scanner import DirectiveRegion

from . import BlockKind, register
from .base import CODE, merge_properties, parse_enum

EXPLANATION_HEADING = "### Explanation"


def _code_properties(
    region: DirectiveRegion, fenced: FencedCode, settings: Settings
) -> dict[str, str | None]:
    """Resolve language and filename from directive, fence and settings."""
    fence_language, fence_attrs = parse_fence_info(fenced.info)
    return merge_properties(
        directive={
            "language": attribute_text(region.attributes, "language", "lang"),
            "filename": attribute_text(region.attributes, "file", "filename"),
        },
        fence={
            "language": fence_language or None,
            "filename": fence_attrs.get("filename") or fence_attrs.get("file"),
        },
        defaults={"language": settings.default_language},
    )


def _fenced_code(region: DirectiveRegion) -> FencedCode | None:
    fenced = extract_code_block(region.body)
    if fenced is None or not fenced.code.strip():
        return None
    return fenced


def parse_reveal(region: DirectiveRegion) -> SolutionReveal:
    """Reveal policy from the ``reveal`` attribute (default on-demand)."""
    reveal = attribute_text(region.attributes, "reveal")
    if reveal is None:
        return SolutionReveal.ON_DEMAND
    return parse_enum(SolutionReveal, "reveal", reveal.replace("_", "-"))


@register(BlockKind.STARTER)
class StarterBuilder:
    """Code the student starts from."""

    field = "starter"
    repeatable = False
    variants = frozenset({CODE})

    def build(self, region: DirectiveRegion, settings: Settings) -> StarterCode | None:
        fenced = _fenced_code(region)
        if fenced is None:
            return None

        props = _code_properties(region, fenced, settings)
        return StarterCode(
            filename=props["filename"],
            language=props["language"],
            code=fenced.code,
        )


@register(BlockKind.SOLUTION)
class SolutionBuilder:
    """Reference solution; markdown after the code is the explanation."""

    field = "solution"
    repeatable = False
    variants = frozenset({CODE})

    def build(self, region: DirectiveRegion, settings: Settings) -> Solution | None:
        fenced = _fenced_code(region)
        if fenced is None:
            return None

        explanation = "\n".join(fenced.after).strip()
        if explanation.startswith(EXPLANATION_HEADING):
            explanation = explanation[len(EXPLANATION_HEADING) :].strip()

        props = _code_properties(region, fenced, settings)
        return Solution(
            code=fenced.code,
            language=props["language"],
            explanation=explanation or None,
            reveal=parse_reveal(region),
        )


@register(BlockKind.TESTS)
class TestsBuilder:
    """Test code and how to run it (playground or local)."""

    __test__ = False

    field = "tests"
    repeatable = False
    variants = frozenset({CODE})

    def build(self, region: DirectiveRegion, settings: Settings) -> TestBlock | None:
        fenced = _fenced_code(region)
        if fenced is None:
            return None

        mode = attribute_text(region.attributes, "mode")
        props = _code_properties(region, fenced, settings)
        return TestBlock(
            language=props["language"],
            code=fenced.code,
            mode=parse_enum(TestMode, "mode", mode) if mode is not None else TestMode.PLAYGROUND,
        )
