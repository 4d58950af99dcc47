"""
Base protocol and shared value parsers for block builders.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

from mdexercises.config import Settings
from mdexercises.core.errors import InvalidAttributeValueError, MissingFieldError
from mdexercises.parsing.scanner import DirectiveRegion

# Document variants a block may belong to
CODE = "code"
USECASE = "usecase"

E = TypeVar("E", bound=Enum)

TIME_PATTERN = re.compile(r"^(\d+)\s*([a-z]*)$", re.IGNORECASE)


class BlockBuilder(Protocol):
    """Protocol for directive block builders."""

    field: str  # document field the built value is stored in
    repeatable: bool  # only hints may appear more than once
    variants: frozenset[str]  # document kinds that accept this block

    def build(self, region: DirectiveRegion, settings: Settings) -> BaseModel | list[str] | str | None:
        """Build the field value from a directive region. None leaves the field unset."""
        ...


def merge_properties(
    directive: Mapping[str, str | None],
    fence: Mapping[str, str | None],
    defaults: Mapping[str, str | None] | None = None,
) -> dict[str, str | None]:
    """
    Resolve properties that can come from several sources.

    The directive attribute wins; the code fence fills properties the
    directive leaves out; ``defaults`` fills whatever is still missing.
    """
    resolved: dict[str, str | None] = dict(defaults or {})
    for source in (fence, directive):
        for key, value in source.items():
            if value:
                resolved[key] = value
            else:
                resolved.setdefault(key, None)
    return resolved


def parse_enum(enum_cls: type[E], attribute: str, value: Any) -> E:
    """Parse an enum value case-insensitively."""
    text = str(value).strip().lower()
    try:
        return enum_cls(text)
    except ValueError:
        raise InvalidAttributeValueError(
            attribute, value, allowed=[member.value for member in enum_cls]
        ) from None


def require(block: str, header: Mapping[str, Any], name: str) -> Any:
    """Fetch a required header value."""
    value = header.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingFieldError(block, name)
    return value


def optional_text(value: Any) -> str | None:
    """Scalar header value as stripped text; None for missing or empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def string_list(attribute: str, value: Any) -> list[str]:
    """Header value as a list of strings; a lone scalar becomes one item."""
    if value is None:
        return []
    if isinstance(value, (str, int, float)):
        text = str(value).strip()
        return [text] if text else []
    if isinstance(value, list):
        items = []
        for item in value:
            if isinstance(item, (dict, list)):
                raise InvalidAttributeValueError(attribute, item)
            if item is not None and str(item).strip():
                items.append(str(item).strip())
        return items
    raise InvalidAttributeValueError(attribute, value)


def parse_int(attribute: str, value: Any, minimum: int = 0) -> int:
    """Parse an integer no smaller than ``minimum``."""
    if isinstance(value, bool):
        raise InvalidAttributeValueError(attribute, value)
    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidAttributeValueError(attribute, value) from None
    if number < minimum:
        raise InvalidAttributeValueError(attribute, value)
    return number


def parse_float(attribute: str, value: Any, low: float | None = None, high: float | None = None) -> float:
    """Parse a float, optionally bounded (inclusive)."""
    if isinstance(value, bool):
        raise InvalidAttributeValueError(attribute, value)
    try:
        number = float(str(value).strip())
    except ValueError:
        raise InvalidAttributeValueError(attribute, value) from None
    if not math.isfinite(number):
        raise InvalidAttributeValueError(attribute, value)
    if (low is not None and number < low) or (high is not None and number > high):
        raise InvalidAttributeValueError(attribute, value)
    return number


def parse_time(value: Any) -> int:
    """
    Parse an estimated time into minutes.

    Accepts 45, "45", "10 minutes", "30 min", "1 hour", "2 hours".
    """
    if isinstance(value, bool):
        raise InvalidAttributeValueError("time", value)
    if isinstance(value, int):
        minutes = value
    else:
        match = TIME_PATTERN.match(str(value).strip())
        if not match:
            raise InvalidAttributeValueError("time", value)
        minutes = int(match.group(1))
        unit = match.group(2).lower()
        if unit.startswith(("hour", "hr", "h")):
            minutes *= 60
        elif unit and not unit.startswith("m"):
            raise InvalidAttributeValueError("time", value)

    if minutes <= 0:
        raise InvalidAttributeValueError("time", value)
    return minutes
