"""Markdown-header grammar used by native doc comments.

Sections are introduced by ``# Header`` (up to three levels)::

    # Arguments
    * `capacity` - Initial capacity.

    # Errors
    * `IoError` - When the file cannot be read.

``Safety`` and ``Panics`` sections are kept as raw text.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..models import ParamDoc, ParsedDocstring, RaisesDoc, ReturnDoc
from .sections import EntryBuilder, collect_examples, extract_summary, is_fence

_PARAM_HEADERS = frozenset({"arguments", "parameters", "args", "params"})
_RETURN_HEADERS = frozenset({"returns", "return"})
_ERROR_HEADERS = frozenset({"errors", "error"})
_PANIC_HEADERS = frozenset({"panics", "panic"})
_EXAMPLE_HEADERS = frozenset({"examples", "example"})
_DEFAULT_ERROR_TYPE = "Error"


def markdown_header(line: str) -> Optional[str]:
    """Return the header text of ``# X``, ``## X`` or ``### X`` lines."""
    stripped = line.strip()
    for prefix in ("### ", "## ", "# "):
        if stripped.startswith(prefix):
            return stripped[len(prefix) :].strip()
    return None


def _is_header(lines: Sequence[str], index: int) -> bool:
    return markdown_header(lines[index]) is not None


def parse_native(lines: Sequence[str]) -> ParsedDocstring:
    summary, description, index = extract_summary(lines, _is_header)

    params: List[ParamDoc] = []
    returns: Optional[ReturnDoc] = None
    raises: List[RaisesDoc] = []
    examples: List[str] = []
    safety: List[str] = []
    panics: List[str] = []
    in_fence = False

    while index < len(lines):
        line = lines[index]
        header = None if in_fence else markdown_header(line)
        if header is None:
            if is_fence(line):
                in_fence = not in_fence
            index += 1
            continue

        section = header.lower()
        body = index + 1
        if section in _PARAM_HEADERS:
            params, index = _parse_arguments(lines, body)
        elif section in _RETURN_HEADERS:
            text_lines, index = _section_lines(lines, body)
            text = " ".join(line for line in text_lines if line)
            returns = ReturnDoc(type=None, description=text) if text else None
        elif section in _ERROR_HEADERS:
            parsed, index = _parse_errors(lines, body)
            raises.extend(parsed)
        elif section in _PANIC_HEADERS:
            text_lines, index = _section_lines(lines, body)
            if text_lines:
                panics.append("\n".join(text_lines))
        elif section == "safety":
            text_lines, index = _section_lines(lines, body)
            if text_lines:
                safety.append("\n".join(text_lines))
        elif section in _EXAMPLE_HEADERS:
            examples, index = collect_examples(lines, body, _is_header)
        else:
            index = body

    return ParsedDocstring(
        summary=summary,
        description=description,
        params=tuple(params),
        returns=returns,
        raises=tuple(raises),
        examples=tuple(examples),
        safety="\n\n".join(safety) or None,
        panics="\n\n".join(panics) or None,
    )


def _is_list_item(text: str) -> bool:
    return text.startswith(("*", "-"))


def parse_argument_line(line: str) -> Optional[Tuple[str, str]]:
    """Parse ``* `name` - desc``, ``- `name`: desc``, ``* name - desc`` or ``* name: desc``."""
    stripped = line.strip()
    if not _is_list_item(stripped):
        return None
    rest = stripped[1:].strip()

    if rest.startswith("`"):
        end_tick = rest.find("`", 1)
        if end_tick > 0:
            name = rest[1:end_tick]
            after = rest[end_tick + 1 :].strip()
            if after.startswith(("-", ":")):
                after = after[1:].strip()
            return name, after

    if " - " in rest:
        name, _, desc = rest.partition(" - ")
        return name.strip(), desc.strip()
    if ":" in rest:
        name, _, desc = rest.partition(":")
        return name.strip(), desc.strip()
    return None


def _parse_arguments(lines: Sequence[str], start: int) -> Tuple[List[ParamDoc], int]:
    params: List[ParamDoc] = []
    entry = EntryBuilder()
    index = start
    in_fence = False

    while index < len(lines):
        stripped = lines[index].strip()
        if is_fence(stripped):
            in_fence = not in_fence
            index += 1
            continue
        if in_fence:
            index += 1
            continue
        if markdown_header(stripped) is not None:
            break

        if not stripped:
            entry.flush_param(params)
            index += 1
            continue

        parsed = parse_argument_line(stripped)
        if parsed is not None:
            entry.flush_param(params)
            entry.start(parsed[0], None, parsed[1])
        elif entry.active and not _is_list_item(stripped):
            entry.append(stripped)
        index += 1

    entry.flush_param(params)
    return params, index


def _parse_errors(lines: Sequence[str], start: int) -> Tuple[List[RaisesDoc], int]:
    raises: List[RaisesDoc] = []
    error_type = ""
    desc: List[str] = []
    index = start
    in_fence = False

    def flush() -> None:
        nonlocal error_type, desc
        if error_type or desc:
            raises.append(
                RaisesDoc(
                    error_type=error_type or _DEFAULT_ERROR_TYPE,
                    description=" ".join(desc).strip(),
                )
            )
        error_type = ""
        desc = []

    while index < len(lines):
        stripped = lines[index].strip()
        if is_fence(stripped):
            in_fence = not in_fence
            index += 1
            continue
        if in_fence:
            index += 1
            continue
        if markdown_header(stripped) is not None:
            break

        if not stripped:
            flush()
            index += 1
            continue

        if _is_list_item(stripped):
            flush()
            rest = stripped[1:].strip()
            end_tick = rest.find("`", 1) if rest.startswith("`") else -1
            if end_tick > 0:
                error_type = rest[1:end_tick]
                after = rest[end_tick + 1 :].strip().lstrip("-").lstrip(":").strip()
                desc = [after]
            else:
                error_type = _DEFAULT_ERROR_TYPE
                desc = [rest]
        else:
            if not desc:
                error_type = _DEFAULT_ERROR_TYPE
            desc.append(stripped)
        index += 1

    flush()
    return raises, index


def _section_lines(lines: Sequence[str], start: int) -> Tuple[List[str], int]:
    """Collect stripped section lines, dropping leading and trailing blanks.

    Header-like lines inside a code fence belong to the section.
    """
    collected: List[str] = []
    index = start
    in_fence = False

    while index < len(lines):
        stripped = lines[index].strip()
        if is_fence(stripped):
            in_fence = not in_fence
        elif not in_fence and markdown_header(stripped) is not None:
            break
        if stripped or collected:
            collected.append(stripped)
        index += 1

    while collected and not collected[-1]:
        collected.pop()
    return collected, index
