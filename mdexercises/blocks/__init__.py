"""
Directive block builders.

Each block kind (exercise, starter, hint, scenario, ...) has a builder that
turns a scanned directive region into one field of the exercise document:
- field: the document field it fills
- repeatable: whether the kind may appear more than once (hints only)
- variants: the document kinds that accept it
- build(): parse attributes, header and content into a typed value
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BlockBuilder


class BlockKind(str, Enum):
    """Supported directive kinds."""
    # Metadata (exactly one per document)
    EXERCISE = "exercise"
    USECASE = "usecase"
    # Shared
    OBJECTIVES = "objectives"
    HINT = "hint"
    # Code exercises
    DISCUSSION = "discussion"
    STARTER = "starter"
    SOLUTION = "solution"
    TESTS = "tests"
    REFLECTION = "reflection"
    # Use-case exercises
    SCENARIO = "scenario"
    PROMPT = "prompt"
    EVALUATION = "evaluation"
    SAMPLE_ANSWER = "sample-answer"
    CONTEXT = "context"


METADATA_KINDS = frozenset({BlockKind.EXERCISE.value, BlockKind.USECASE.value})

# Builder registry - populated by @register decorator
BUILDERS: dict[BlockKind, "BlockBuilder"] = {}


def register(kind: BlockKind):
    """Decorator to register a block builder."""
    def decorator(cls):
        BUILDERS[kind] = cls()
        return cls
    return decorator


def get_builder(kind: str | BlockKind) -> "BlockBuilder | None":
    """Get the builder for a block kind."""
    if isinstance(kind, str) and not isinstance(kind, BlockKind):
        try:
            kind = BlockKind(kind.lower())
        except ValueError:
            return None
    return BUILDERS.get(kind)


# Import builders to trigger registration
from . import metadata
from . import guidance
from . import code
from . import usecase

__all__ = [
    "BlockKind",
    "BUILDERS",
    "METADATA_KINDS",
    "get_builder",
    "register",
]
