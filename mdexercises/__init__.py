"""
mdexercises - interactive exercise parsing for markdown books.

Parses ``::: kind`` directive blocks in exercise markdown into typed
documents: a CodeExercise (starter code, hints, solution, tests) or a
UseCaseExercise (scenario, prompt, rubric).

    from mdexercises import parse_exercise

    exercise = parse_exercise(markdown)
    print(exercise.metadata.id)
"""

from mdexercises.config import Settings, get_settings
from mdexercises.core import *  # noqa: F401,F403
from mdexercises.core import __all__ as _core_all
from mdexercises.lint import LintViolation, find_empty_tests, lint_paths
from mdexercises.parser import parse_exercise, parse_file

__version__ = "0.1.0"

__all__ = [
    "parse_exercise",
    "parse_file",
    "find_empty_tests",
    "lint_paths",
    "LintViolation",
    "Settings",
    "get_settings",
    *_core_all,
]
