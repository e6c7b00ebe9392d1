"""Header-colon ("Google") docstring grammar: ``Args:``, ``Returns:``, ``Raises:``."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..models import ParamDoc, ParsedDocstring, RaisesDoc, ReturnDoc
from .sections import (
    EXAMPLE_SECTIONS,
    PARAM_SECTIONS,
    RAISES_SECTIONS,
    RETURN_SECTIONS,
    EntryBuilder,
    colon_header_name,
    collect_examples,
    extract_summary,
    indentation,
    is_colon_header,
)

# Entry lines may sit at most this deep; anything deeper continues the
# previous entry.
_ENTRY_INDENT = 4


def parse_google(lines: Sequence[str]) -> ParsedDocstring:
    summary, description, index = extract_summary(lines, is_colon_header)

    params: List[ParamDoc] = []
    returns: Optional[ReturnDoc] = None
    raises: List[RaisesDoc] = []
    examples: List[str] = []

    while index < len(lines):
        section = colon_header_name(lines[index])
        if section in PARAM_SECTIONS:
            params, index = _parse_params(lines, index + 1)
        elif section in RETURN_SECTIONS:
            returns, index = _parse_returns(lines, index + 1)
        elif section in RAISES_SECTIONS:
            raises, index = _parse_raises(lines, index + 1)
        elif section in EXAMPLE_SECTIONS:
            examples, index = collect_examples(lines, index + 1, is_colon_header)
        else:
            index += 1

    return ParsedDocstring(
        summary=summary,
        description=description,
        params=tuple(params),
        returns=returns,
        raises=tuple(raises),
        examples=tuple(examples),
    )


def parse_param_line(line: str) -> Tuple[str, Optional[str], str]:
    """Split ``name (type): description`` or ``name: description``."""
    if ":" not in line:
        return line.strip(), None, ""
    before, _, after = line.partition(":")
    open_paren = before.find("(")
    close_paren = before.rfind(")")
    if 0 <= open_paren < close_paren:
        name = before[:open_paren].strip()
        type_ = before[open_paren + 1 : close_paren].strip()
        return name, type_ or None, after.strip()
    return before.strip(), None, after.strip()


def _parse_params(lines: Sequence[str], start: int) -> Tuple[List[ParamDoc], int]:
    params: List[ParamDoc] = []
    entry = EntryBuilder()
    index = start

    while index < len(lines):
        line = lines[index]
        stripped = line.strip()

        if not stripped:
            entry.flush_param(params)
            index += 1
            continue

        if is_colon_header(lines, index):
            break

        if indentation(line) <= _ENTRY_INDENT and ":" in stripped:
            entry.flush_param(params)
            name, type_, desc = parse_param_line(stripped)
            entry.start(name, type_, desc)
        elif entry.active:
            entry.append(stripped)
        index += 1

    entry.flush_param(params)
    return params, index


def _parse_returns(lines: Sequence[str], start: int) -> Tuple[Optional[ReturnDoc], int]:
    type_: Optional[str] = None
    desc_lines: List[str] = []
    index = start

    while index < len(lines):
        stripped = lines[index].strip()

        if not stripped:
            if desc_lines:
                break
            index += 1
            continue

        if is_colon_header(lines, index):
            break

        if not desc_lines and ":" in stripped:
            candidate, _, rest = stripped.partition(":")
            if " " not in candidate or "[" in candidate:
                type_ = candidate.strip()
                desc_lines.append(rest.strip())
            else:
                desc_lines.append(stripped)
        else:
            desc_lines.append(stripped)
        index += 1

    if not desc_lines:
        return None, index
    return ReturnDoc(type=type_, description=" ".join(desc_lines).strip()), index


def _parse_raises(lines: Sequence[str], start: int) -> Tuple[List[RaisesDoc], int]:
    raises: List[RaisesDoc] = []
    entry = EntryBuilder()
    index = start

    while index < len(lines):
        line = lines[index]
        stripped = line.strip()

        if not stripped:
            entry.flush_raises(raises)
            index += 1
            continue

        if is_colon_header(lines, index):
            break

        if indentation(line) <= _ENTRY_INDENT and ":" in stripped:
            entry.flush_raises(raises)
            error_type, _, desc = stripped.partition(":")
            entry.start(error_type.strip(), None, desc.strip())
        elif entry.active:
            entry.append(stripped)
        index += 1

    entry.flush_raises(raises)
    return raises, index
