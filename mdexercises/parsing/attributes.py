"""
Inline attribute parsing.

Directive opening lines carry attributes after the block kind:

    ::: hint level=2 title="Think about ownership" collapsed

Each token becomes a Bare, Quoted or Flag value. Code fences carry a
similar, comma-separated info string (``rust,filename=src/main.rs``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Union


@dataclass(frozen=True)
class Bare:
    """Unquoted ``key=value``."""

    value: str

    @property
    def text(self) -> str:
        return self.value


@dataclass(frozen=True)
class Quoted:
    """Quoted ``key="value with spaces"`` (quotes stripped)."""

    value: str

    @property
    def text(self) -> str:
        return self.value


@dataclass(frozen=True)
class Flag:
    """Bare ``key`` with no value."""

    @property
    def text(self) -> str:
        return "true"


AttributeValue = Union[Bare, Quoted, Flag]
Attributes = Mapping[str, AttributeValue]

FENCE_TOKEN = re.compile(r'(?P<key>[^,\s=]+)(?:=(?P<value>"[^"]*"?|[^,\s]*))?')


def parse_attributes(text: str) -> dict[str, AttributeValue]:
    """Tokenize the trailing text of a directive opening line."""
    attrs: dict[str, AttributeValue] = {}
    remaining = text.strip()

    while remaining:
        key_end = 0
        while key_end < len(remaining) and remaining[key_end] != "=" and not remaining[key_end].isspace():
            key_end += 1

        key = remaining[:key_end]
        remaining = remaining[key_end:]

        if remaining.startswith("="):
            remaining = remaining[1:]
            if remaining.startswith('"'):
                close = remaining.find('"', 1)
                if close == -1:
                    value: AttributeValue = Quoted(remaining[1:])
                    remaining = ""
                else:
                    value = Quoted(remaining[1:close])
                    remaining = remaining[close + 1 :]
            else:
                match = re.search(r"\s", remaining)
                end = match.start() if match else len(remaining)
                value = Bare(remaining[:end])
                remaining = remaining[end:]
        else:
            value = Flag()

        if key:
            attrs[key] = value
        remaining = remaining.lstrip()

    return attrs


def attribute_text(attrs: Attributes, *keys: str) -> str | None:
    """Return the text of the first present key, or None."""
    for key in keys:
        if key in attrs:
            return attrs[key].text
    return None


def parse_fence_info(info: str) -> tuple[str, dict[str, str]]:
    """
    Split a code-fence info string into language and attributes.

    ``rust,filename=src/main.rs`` -> ("rust", {"filename": "src/main.rs"})

    Quoted values may hold commas and spaces.
    """
    language = ""
    attrs: dict[str, str] = {}

    for index, match in enumerate(FENCE_TOKEN.finditer(info)):
        key, value = match.group("key", "value")
        if value is not None:
            attrs[key] = value.strip('"')
        elif index == 0:
            language = key
        else:
            attrs[key] = "true"

    return language, attrs
