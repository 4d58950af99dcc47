"""
Low-level markdown parsing: directive scanning, attributes and body splitting.
"""

from .attributes import (
    AttributeValue,
    Bare,
    Flag,
    Quoted,
    attribute_text,
    parse_attributes,
    parse_fence_info,
)
from .body import (
    FencedCode,
    SplitBody,
    extract_code_block,
    extract_markdown_list,
    find_header_end,
    parse_mapping,
    split_body,
)
from .scanner import ContentSegment, DirectiveRegion, Segment, scan

__all__ = [
    # Scanner
    "scan",
    "Segment",
    "ContentSegment",
    "DirectiveRegion",
    # Attributes
    "AttributeValue",
    "Bare",
    "Quoted",
    "Flag",
    "parse_attributes",
    "attribute_text",
    "parse_fence_info",
    # Body
    "SplitBody",
    "FencedCode",
    "split_body",
    "find_header_end",
    "parse_mapping",
    "extract_code_block",
    "extract_markdown_list",
]
