"""
Core exercise types and errors.
"""

from .errors import (
    ConflictingMetadataError,
    DuplicateBlockError,
    ExerciseParseError,
    InvalidAttributeValueError,
    MissingFieldError,
    MissingMetadataError,
    StructuredHeaderError,
    UnclosedBlockError,
)
from .models import (
    EXERCISE_ADAPTER,
    CodeExercise,
    Criterion,
    Difficulty,
    EvaluationCriteria,
    ExerciseMetadata,
    Hint,
    Objectives,
    ParsedExercise,
    SampleAnswer,
    Scenario,
    Solution,
    SolutionReveal,
    StarterCode,
    TestBlock,
    TestMode,
    UseCaseDomain,
    UseCaseExercise,
    UseCaseMetadata,
    UseCasePrompt,
    load_exercise_json,
)

__all__ = [
    # Errors
    "ExerciseParseError",
    "MissingFieldError",
    "InvalidAttributeValueError",
    "UnclosedBlockError",
    "DuplicateBlockError",
    "StructuredHeaderError",
    "MissingMetadataError",
    "ConflictingMetadataError",
    # Enums
    "Difficulty",
    "UseCaseDomain",
    "TestMode",
    "SolutionReveal",
    # Blocks
    "ExerciseMetadata",
    "UseCaseMetadata",
    "Objectives",
    "Hint",
    "StarterCode",
    "Solution",
    "TestBlock",
    "Scenario",
    "UseCasePrompt",
    "Criterion",
    "EvaluationCriteria",
    "SampleAnswer",
    # Documents
    "CodeExercise",
    "UseCaseExercise",
    "ParsedExercise",
    "EXERCISE_ADAPTER",
    "load_exercise_json",
]
