"""Docstring parsing for managed docstrings and native doc comments.

``parse_docstring`` understands three conventions and picks one per block:

* underlined headers (``Parameters`` followed by a line of dashes),
* header-colon sections (``Args:``, ``Returns:``, ...),
* plain prose (summary and description only).

``parse_native_doc`` handles ``# Header`` sections used in native doc comments.
Both functions are total: any input yields a ``ParsedDocstring``.
"""

from __future__ import annotations

import inspect
from enum import Enum
from typing import List, Sequence

from ..models import ParsedDocstring
from .google_style import parse_google
from .native_style import parse_native
from .numpy_style import parse_numpy
from .sections import extract_summary, is_underline

# Markers that switch a block to the header-colon grammar.
HEADER_COLON_MARKERS = (
    "Args:",
    "Arguments:",
    "Parameters:",
    "Returns:",
    "Raises:",
    "Example:",
    "Examples:",
    "Attributes:",
    "Note:",
    "Notes:",
    "Yields:",
)


class DocstringStyle(str, Enum):
    UNDERLINED = "underlined"
    HEADER_COLON = "header_colon"
    PLAIN = "plain"


def _no_header(lines: Sequence[str], index: int) -> bool:
    return False


def _split_lines(text: str) -> List[str]:
    return inspect.cleandoc(text).splitlines()


def detect_style(text: str) -> DocstringStyle:
    """Detect which grammar a docstring uses.

    Underlined headers win over header-colon markers so that a stray
    ``Returns:`` inside a paragraph cannot flip an underlined block.
    """
    lines = _split_lines(text)
    for previous, current in zip(lines, lines[1:]):
        if previous.strip() and not is_underline(previous) and is_underline(current):
            return DocstringStyle.UNDERLINED

    if any(marker in text for marker in HEADER_COLON_MARKERS):
        return DocstringStyle.HEADER_COLON
    return DocstringStyle.PLAIN


def parse_docstring(text: str | None) -> ParsedDocstring:
    """Parse a managed-language docstring into structured form."""
    if text is None or not text.strip():
        return ParsedDocstring()

    lines = _split_lines(text)
    style = detect_style(text)
    if style is DocstringStyle.UNDERLINED:
        return parse_numpy(lines)
    if style is DocstringStyle.HEADER_COLON:
        return parse_google(lines)

    summary, description, _ = extract_summary(lines, _no_header)
    return ParsedDocstring(summary=summary, description=description)


def parse_native_doc(text: str | None) -> ParsedDocstring:
    """Parse a native doc comment using ``# Header`` sections."""
    if text is None or not text.strip():
        return ParsedDocstring()
    return parse_native(_split_lines(text))


__all__ = [
    "DocstringStyle",
    "HEADER_COLON_MARKERS",
    "detect_style",
    "parse_docstring",
    "parse_native_doc",
]
