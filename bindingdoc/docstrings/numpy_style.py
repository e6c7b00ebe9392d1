"""Underlined-header ("NumPy") docstring grammar."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..models import ParamDoc, ParsedDocstring, RaisesDoc, ReturnDoc
from .sections import (
    EXAMPLE_SECTIONS,
    PARAM_SECTIONS,
    RAISES_SECTIONS,
    EntryBuilder,
    collect_examples,
    extract_summary,
    indentation,
    is_underlined_header,
    underlined_header_name,
)

_RETURN_SECTIONS = frozenset({"returns", "return"})


def parse_numpy(lines: Sequence[str]) -> ParsedDocstring:
    summary, description, index = extract_summary(lines, is_underlined_header)

    params: List[ParamDoc] = []
    returns: Optional[ReturnDoc] = None
    raises: List[RaisesDoc] = []
    examples: List[str] = []

    while index < len(lines):
        section = underlined_header_name(lines, index)
        if section is None:
            index += 1
            continue
        # Skip the header and its underline.
        body = index + 2
        if section in PARAM_SECTIONS:
            params, index = _parse_params(lines, body)
        elif section in _RETURN_SECTIONS:
            returns, index = _parse_returns(lines, body)
        elif section in RAISES_SECTIONS:
            raises, index = _parse_raises(lines, body)
        elif section in EXAMPLE_SECTIONS:
            examples, index = collect_examples(lines, body, is_underlined_header)
        else:
            index = body

    return ParsedDocstring(
        summary=summary,
        description=description,
        params=tuple(params),
        returns=returns,
        raises=tuple(raises),
        examples=tuple(examples),
    )


def _parse_params(lines: Sequence[str], start: int) -> Tuple[List[ParamDoc], int]:
    params: List[ParamDoc] = []
    entry = EntryBuilder()
    index = start

    while index < len(lines):
        line = lines[index]
        stripped = line.strip()

        if is_underlined_header(lines, index):
            break
        if not stripped:
            index += 1
            continue

        if indentation(line) == 0:
            entry.flush_param(params)
            name, _, type_part = stripped.partition(":")
            entry.start(name.strip(), type_part.strip() or None)
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
        line = lines[index]
        stripped = line.strip()

        if is_underlined_header(lines, index):
            break
        if not stripped:
            if desc_lines or type_ is not None:
                break
            index += 1
            continue

        if type_ is None and indentation(line) == 0:
            # Either a bare ``type`` or ``name : type``.
            if ":" in stripped:
                type_ = stripped.partition(":")[2].strip() or None
            else:
                type_ = stripped
        elif indentation(line) > 0:
            desc_lines.append(stripped)
        index += 1

    if type_ is None and not desc_lines:
        return None, index
    return ReturnDoc(type=type_, description=" ".join(desc_lines).strip()), index


def _parse_raises(lines: Sequence[str], start: int) -> Tuple[List[RaisesDoc], int]:
    raises: List[RaisesDoc] = []
    entry = EntryBuilder()
    index = start

    while index < len(lines):
        line = lines[index]
        stripped = line.strip()

        if is_underlined_header(lines, index):
            break
        if not stripped:
            index += 1
            continue

        if indentation(line) == 0:
            entry.flush_raises(raises)
            entry.start(stripped, None)
        elif entry.active:
            entry.append(stripped)
        index += 1

    entry.flush_raises(raises)
    return raises, index
