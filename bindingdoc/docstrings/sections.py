"""Helpers shared by the docstring grammars."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from ..models import ParamDoc, RaisesDoc

# Section names recognised by both the header-colon and underlined grammars.
KNOWN_SECTIONS = frozenset(
    {
        "args",
        "arguments",
        "parameters",
        "params",
        "returns",
        "return",
        "raises",
        "raise",
        "exceptions",
        "except",
        "example",
        "examples",
        "attributes",
        "note",
        "notes",
        "yields",
        "yield",
        "see also",
        "references",
        "warnings",
        "warning",
    }
)

PARAM_SECTIONS = frozenset({"args", "arguments", "parameters", "params"})
RETURN_SECTIONS = frozenset({"returns", "return"})
RAISES_SECTIONS = frozenset({"raises", "raise", "exceptions", "except"})
EXAMPLE_SECTIONS = frozenset({"example", "examples"})

HeaderPredicate = Callable[[Sequence[str], int], bool]


def indentation(line: str) -> int:
    return len(line) - len(line.lstrip())


def is_fence(line: str) -> bool:
    return line.strip().startswith("```")


def is_underline(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and set(stripped) == {"-"}


def colon_header_name(line: str) -> Optional[str]:
    """Return the lowercased section name of a ``Word:`` header line, if known."""
    stripped = line.strip()
    if not stripped.endswith(":") or " " in stripped:
        return None
    name = stripped[:-1].lower()
    return name if name in KNOWN_SECTIONS else None


def underlined_header_name(lines: Sequence[str], index: int) -> Optional[str]:
    """Return the section name when ``lines[index]`` is underlined with dashes."""
    if index + 1 >= len(lines):
        return None
    stripped = lines[index].strip()
    if not stripped or is_underline(stripped):
        return None
    if not is_underline(lines[index + 1]):
        return None
    return stripped.lower()


def is_colon_header(lines: Sequence[str], index: int) -> bool:
    return colon_header_name(lines[index]) is not None


def is_underlined_header(lines: Sequence[str], index: int) -> bool:
    return underlined_header_name(lines, index) is not None


def extract_summary(
    lines: Sequence[str], is_header: HeaderPredicate
) -> Tuple[Optional[str], Optional[str], int]:
    """Split the leading prose into summary and description.

    Returns ``(summary, description, index)`` where ``index`` is the first
    line that belongs to a section.
    """
    summary_lines: List[str] = []
    description_lines: List[str] = []
    in_description = False
    in_fence = False
    index = 0

    while index < len(lines):
        raw = lines[index]
        stripped = raw.strip()

        if not in_fence and is_header(lines, index):
            break

        if is_fence(raw):
            in_fence = not in_fence

        if not stripped and not in_fence:
            if summary_lines:
                in_description = True
            index += 1
            continue

        if in_description:
            description_lines.append(stripped)
        else:
            summary_lines.append(stripped)
        index += 1

    summary = " ".join(summary_lines) if summary_lines else None
    description = "\n".join(description_lines) if description_lines else None
    return summary, description, index


def collect_examples(
    lines: Sequence[str], start: int, is_header: HeaderPredicate
) -> Tuple[List[str], int]:
    """Accumulate example blocks verbatim until the next section header.

    Fenced code blocks are kept whole; blank lines outside a fence separate
    examples.
    """
    examples: List[str] = []
    current: List[str] = []
    in_fence = False
    index = start

    while index < len(lines):
        line = lines[index]
        if not in_fence and is_header(lines, index):
            break

        if is_fence(line):
            in_fence = not in_fence
            current.append(line)
            index += 1
            continue

        if not line.strip() and not in_fence:
            if current:
                examples.append("\n".join(current))
                current = []
            index += 1
            continue

        current.append(line)
        index += 1

    if current:
        examples.append("\n".join(current))
    return examples, index


@dataclass
class EntryBuilder:
    """Accumulates a named entry and its wrapped description lines."""

    name: str = ""
    type: Optional[str] = None
    lines: List[str] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return bool(self.name)

    def start(self, name: str, type_: Optional[str], first_line: str = "") -> None:
        self.name = name
        self.type = type_
        self.lines = [first_line] if first_line else []

    def append(self, text: str) -> None:
        self.lines.append(text)

    def description(self) -> str:
        return " ".join(self.lines).strip()

    def reset(self) -> None:
        self.name = ""
        self.type = None
        self.lines = []

    def flush_param(self, target: List[ParamDoc]) -> None:
        if self.active:
            target.append(
                ParamDoc(name=self.name, type=self.type, description=self.description())
            )
        self.reset()

    def flush_raises(self, target: List[RaisesDoc]) -> None:
        if self.active:
            target.append(RaisesDoc(error_type=self.name, description=self.description()))
        self.reset()
