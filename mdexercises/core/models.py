"""
Typed exercise documents.

A parsed document is one of two variants:

- CodeExercise: starter code, hints, solution and tests for a coding task
- UseCaseExercise: a scenario with a free-text prompt and a grading rubric

Both are frozen pydantic models discriminated by ``kind`` so collaborators
(renderers, book integrations) can match on the variant and round-trip the
document through JSON with ``EXERCISE_ADAPTER``.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Difficulty(str, Enum):
    """Difficulty level of an exercise."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class UseCaseDomain(str, Enum):
    """Industry domain of a use-case exercise."""

    HEALTHCARE = "healthcare"
    DEFENSE = "defense"
    FINANCIAL = "financial"
    GENERAL = "general"


class TestMode(str, Enum):
    """How tests should be executed."""

    __test__ = False  # not a pytest test class

    PLAYGROUND = "playground"  # run in the browser via a playground service
    LOCAL = "local"  # display only, run locally


class SolutionReveal(str, Enum):
    """When a solution or sample answer is shown."""

    ON_DEMAND = "on-demand"
    ALWAYS = "always"
    NEVER = "never"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ========================================
# Metadata
# ========================================


class ExerciseMetadata(_Frozen):
    """Metadata of a code exercise."""

    id: str = Field(..., min_length=1)
    difficulty: Difficulty
    time_minutes: int | None = Field(None, gt=0)
    prerequisites: tuple[str, ...] = ()


class UseCaseMetadata(_Frozen):
    """Metadata of a use-case exercise."""

    id: str = Field(..., min_length=1)
    difficulty: Difficulty
    domain: UseCaseDomain
    time_minutes: int | None = Field(None, gt=0)
    prerequisites: tuple[str, ...] = ()


# ========================================
# Shared blocks
# ========================================


class Objectives(_Frozen):
    """Learning objectives (conceptual and practical)."""

    thinking: tuple[str, ...] = ()
    doing: tuple[str, ...] = ()


class Hint(_Frozen):
    """A progressive hint."""

    level: int = Field(..., gt=0)
    title: str | None = None
    content: str = ""


# ========================================
# Code exercise blocks
# ========================================


class StarterCode(_Frozen):
    """Code the student starts from."""

    filename: str | None = None
    language: str = "rust"
    code: str = ""


class Solution(_Frozen):
    """Reference solution with optional explanation."""

    code: str = ""
    language: str = "rust"
    explanation: str | None = None
    reveal: SolutionReveal = SolutionReveal.ON_DEMAND


class TestBlock(_Frozen):
    """Test code used to verify a solution."""

    __test__ = False

    language: str = "rust"
    code: str = ""
    mode: TestMode = TestMode.PLAYGROUND


# ========================================
# Use-case blocks
# ========================================


class Scenario(_Frozen):
    """Situation the learner must analyse."""

    organization: str | None = None
    industry: str | None = None
    stakeholders: tuple[str, ...] = ()
    constraints: tuple[str, ...] = ()
    content: str = ""


class UseCasePrompt(_Frozen):
    """The question the learner answers."""

    prompt: str = ""
    aspects: tuple[str, ...] = ()
    hints: tuple[str, ...] = ()


class Criterion(_Frozen):
    """One weighted rubric criterion."""

    name: str
    weight: int = Field(0, ge=0)
    description: str = ""


class EvaluationCriteria(_Frozen):
    """Rubric used by an external evaluator."""

    criteria: tuple[Criterion, ...] = ()
    key_points: tuple[str, ...] = ()
    min_words: int | None = Field(None, ge=0)
    max_words: int | None = Field(None, ge=0)
    pass_threshold: float | None = Field(None, ge=0.0, le=1.0)

    @property
    def total_weight(self) -> int:
        return sum(c.weight for c in self.criteria)


class SampleAnswer(_Frozen):
    """Model answer shown after submission."""

    content: str = ""
    expected_score: float | None = None
    reveal: SolutionReveal = SolutionReveal.ON_DEMAND


# ========================================
# Documents
# ========================================


class CodeExercise(_Frozen):
    """A code-based exercise."""

    kind: Literal["code"] = "code"
    metadata: ExerciseMetadata
    title: str | None = None
    description: str = ""
    objectives: Objectives | None = None
    discussion: tuple[str, ...] | None = None
    starter: StarterCode | None = None
    hints: tuple[Hint, ...] = ()
    solution: Solution | None = None
    tests: TestBlock | None = None
    reflection: tuple[str, ...] | None = None


class UseCaseExercise(_Frozen):
    """A scenario-based exercise graded against a rubric."""

    kind: Literal["usecase"] = "usecase"
    metadata: UseCaseMetadata
    title: str | None = None
    description: str = ""
    scenario: Scenario = Field(default_factory=Scenario)
    prompt: UseCasePrompt = Field(default_factory=UseCasePrompt)
    hints: tuple[Hint, ...] = ()
    evaluation: EvaluationCriteria = Field(default_factory=EvaluationCriteria)
    sample_answer: SampleAnswer | None = None
    context: str | None = None
    objectives: Objectives | None = None


ParsedExercise = Annotated[Union[CodeExercise, UseCaseExercise], Field(discriminator="kind")]

EXERCISE_ADAPTER: TypeAdapter[CodeExercise | UseCaseExercise] = TypeAdapter(ParsedExercise)


def load_exercise_json(data: str | bytes) -> CodeExercise | UseCaseExercise:
    """Rebuild a parsed exercise from its JSON dump."""
    return EXERCISE_ADAPTER.validate_json(data)
