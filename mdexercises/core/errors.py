"""
Parse errors for exercise documents.

Parsing is all-or-nothing: the first error aborts the parse and is raised
to the caller with the block kind and, where known, the source line.
"""

from __future__ import annotations

from collections.abc import Iterable


class ExerciseParseError(Exception):
    """Base class for every error raised while parsing an exercise."""

    def __init__(self, message: str, line: int | None = None):
        self.message = message
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line})"


class MissingFieldError(ExerciseParseError):
    """A required field was absent from a block."""

    def __init__(self, block: str, field: str, line: int | None = None):
        self.block = block
        self.field = field
        super().__init__(f"Missing required field '{field}' in {block} block", line)


class InvalidAttributeValueError(ExerciseParseError):
    """An enumerated or typed value could not be interpreted."""

    def __init__(
        self,
        attribute: str,
        value: object,
        allowed: Iterable[str] | None = None,
        line: int | None = None,
    ):
        self.attribute = attribute
        self.value = value
        self.allowed = tuple(allowed) if allowed is not None else None
        message = f"Invalid attribute value '{value}' for '{attribute}'"
        if self.allowed:
            message += f" (expected one of: {', '.join(self.allowed)})"
        super().__init__(message, line)


class UnclosedBlockError(ExerciseParseError):
    """A directive was opened but never closed before end of input."""

    def __init__(self, kind: str, line: int):
        self.kind = kind
        super().__init__(f"Unclosed directive block '{kind}' starting at line {line}", line)

    def __str__(self) -> str:
        # The line number is already part of the message.
        return self.message


class DuplicateBlockError(ExerciseParseError):
    """A singular block kind appeared more than once."""

    def __init__(self, kind: str, line: int | None = None):
        self.kind = kind
        super().__init__(f"Duplicate block type '{kind}' (only one allowed)", line)


class StructuredHeaderError(ExerciseParseError):
    """The YAML header of a block is not a valid mapping."""

    def __init__(self, block: str, detail: str, line: int | None = None):
        self.block = block
        self.detail = detail
        super().__init__(f"YAML parse error in {block} block: {detail}", line)


class MissingMetadataError(ExerciseParseError):
    """Neither an exercise nor a usecase block was found."""

    def __init__(self):
        super().__init__(
            "Unknown exercise type. Must contain either '::: exercise' or '::: usecase'"
        )


class ConflictingMetadataError(ExerciseParseError):
    """Both an exercise and a usecase block were found."""

    def __init__(self, line: int | None = None):
        super().__init__(
            "Conflicting exercise type. A document may contain '::: exercise' "
            "or '::: usecase', not both",
            line,
        )
