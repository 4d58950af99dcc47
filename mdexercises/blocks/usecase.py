"""
Use-case block builders: scenario, prompt, evaluation, sample answer, context.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from mdexercises.config import Settings
from mdexercises.core.errors import InvalidAttributeValueError, MissingFieldError
from mdexercises.core.models import (
    Criterion,
    EvaluationCriteria,
    SampleAnswer,
    Scenario,
    UseCasePrompt,
)
from mdexercises.parsing.body import parse_mapping, split_body
from mdexercises.parsing.scanner import DirectiveRegion

from . import BlockKind, register
from .base import USECASE, optional_text, parse_float, parse_int, require, string_list
from .code import parse_reveal


@register(BlockKind.SCENARIO)
class ScenarioBuilder:
    """Organization details header followed by the scenario narrative."""

    field = "scenario"
    repeatable = False
    variants = frozenset({USECASE})

    def build(self, region: DirectiveRegion, settings: Settings) -> Scenario:
        body = split_body(BlockKind.SCENARIO.value, region.body)
        header = body.header
        return Scenario(
            organization=optional_text(header.get("organization")),
            industry=optional_text(header.get("industry")),
            stakeholders=string_list("stakeholders", header.get("stakeholders")),
            constraints=string_list("constraints", header.get("constraints")),
            content=body.content,
        )


@register(BlockKind.PROMPT)
class PromptBuilder:
    """The question; ``aspects`` and ``hints`` may precede it."""

    field = "prompt"
    repeatable = False
    variants = frozenset({USECASE})

    def build(self, region: DirectiveRegion, settings: Settings) -> UseCasePrompt:
        body = split_body(BlockKind.PROMPT.value, region.body)
        return UseCasePrompt(
            prompt=body.content,
            aspects=string_list("aspects", body.header.get("aspects")),
            hints=string_list("hints", body.header.get("hints")),
        )


@register(BlockKind.EVALUATION)
class EvaluationBuilder:
    """
    Grading rubric (pure YAML).

        criteria:
          - name: Threat identification
            weight: 40
            description: Identifies the main attack vectors
        key_points:
          - Patient data exposure
        min_words: 150
        pass_threshold: 0.7

    Weights conventionally add up to 100; a different total is logged, or
    rejected when ``enforce_weight_sum`` is set.
    """

    field = "evaluation"
    repeatable = False
    variants = frozenset({USECASE})

    def build(self, region: DirectiveRegion, settings: Settings) -> EvaluationCriteria:
        block = BlockKind.EVALUATION.value
        header = parse_mapping(block, region.body)

        raw_criteria = require(block, header, "criteria")
        if not isinstance(raw_criteria, list):
            raise InvalidAttributeValueError("criteria", raw_criteria)
        criteria = [self._criterion(block, index, item) for index, item in enumerate(raw_criteria)]

        key_points = string_list("key_points", require(block, header, "key_points"))

        fields: dict[str, Any] = {"criteria": criteria, "key_points": key_points}
        for name in ("min_words", "max_words"):
            if header.get(name) is not None:
                fields[name] = parse_int(name, header[name], minimum=0)
        if (
            fields.get("min_words") is not None
            and fields.get("max_words") is not None
            and fields["min_words"] > fields["max_words"]
        ):
            raise InvalidAttributeValueError("max_words", fields["max_words"])
        if header.get("pass_threshold") is not None:
            fields["pass_threshold"] = parse_float(
                "pass_threshold", header["pass_threshold"], low=0.0, high=1.0
            )

        evaluation = EvaluationCriteria(**fields)
        self._check_weights(evaluation, settings)
        return evaluation

    def _criterion(self, block: str, index: int, item: Any) -> Criterion:
        if not isinstance(item, dict):
            raise InvalidAttributeValueError(f"criteria[{index}]", item)

        name = optional_text(item.get("name"))
        if name is None:
            raise MissingFieldError(block, f"criteria[{index}].name")

        weight = item.get("weight")
        return Criterion(
            name=name,
            weight=parse_int("weight", weight, minimum=0) if weight is not None else 0,
            description=optional_text(item.get("description")) or "",
        )

    def _check_weights(self, evaluation: EvaluationCriteria, settings: Settings) -> None:
        total = evaluation.total_weight
        if total == settings.expected_weight_total:
            return
        if settings.enforce_weight_sum:
            raise InvalidAttributeValueError("weight", total, allowed=[str(settings.expected_weight_total)])
        logger.warning(
            f"Rubric weights sum to {total}, expected {settings.expected_weight_total}"
        )


@register(BlockKind.SAMPLE_ANSWER)
class SampleAnswerBuilder:
    """Model answer, with an optional ``expected_score`` header."""

    field = "sample_answer"
    repeatable = False
    variants = frozenset({USECASE})

    def build(self, region: DirectiveRegion, settings: Settings) -> SampleAnswer:
        body = split_body(BlockKind.SAMPLE_ANSWER.value, region.body)
        score = body.header.get("expected_score")
        return SampleAnswer(
            content=body.content,
            expected_score=parse_float("expected_score", score) if score is not None else None,
            reveal=parse_reveal(region),
        )


@register(BlockKind.CONTEXT)
class ContextBuilder:
    """Background material, kept as markdown."""

    field = "context"
    repeatable = False
    variants = frozenset({USECASE})

    def build(self, region: DirectiveRegion, settings: Settings) -> str | None:
        return region.body_text.strip() or None
