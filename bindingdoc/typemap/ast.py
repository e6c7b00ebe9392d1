"""Syntax tree for native type expressions.

Every node can render itself back to canonical native syntax with
``render()``; paths render without their qualifying segments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class Lifetime:
    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class AssocBinding:
    """An associated type binding inside generics, e.g. ``Item = T``."""

    name: str
    value: "TypeNode"

    def render(self) -> str:
        return f"{self.name} = {self.value.render()}"


@dataclass(frozen=True)
class PathType:
    """A (possibly qualified) named type with optional generic arguments.

    ``subscript`` marks managed-style ``Name[...]`` arguments, which show up
    when already-mapped hints are fed back in.
    """

    segments: List[str]
    args: List["GenericArg"] = field(default_factory=list)
    subscript: bool = False

    @property
    def name(self) -> str:
        return self.segments[-1]

    @property
    def type_args(self) -> List["TypeNode"]:
        return [arg for arg in self.args if not isinstance(arg, (Lifetime, AssocBinding))]

    def render(self) -> str:
        if not self.args:
            return self.name
        inner = ", ".join(arg.render() for arg in self.args)
        if self.subscript:
            return f"{self.name}[{inner}]"
        return f"{self.name}<{inner}>"


@dataclass(frozen=True)
class TupleType:
    elements: List["TypeNode"]

    def render(self) -> str:
        if len(self.elements) == 1:
            return f"({self.elements[0].render()},)"
        return "(" + ", ".join(element.render() for element in self.elements) + ")"


@dataclass(frozen=True)
class SliceType:
    element: "TypeNode"
    length: Optional[str] = None

    def render(self) -> str:
        if self.length is None:
            return f"[{self.element.render()}]"
        return f"[{self.element.render()}; {self.length}]"


@dataclass(frozen=True)
class ReferenceType:
    inner: "TypeNode"
    lifetime: Optional[str] = None
    mutable: bool = False

    def render(self) -> str:
        prefix = "&"
        if self.lifetime:
            prefix += f"{self.lifetime} "
        if self.mutable:
            prefix += "mut "
        return prefix + self.inner.render()


@dataclass(frozen=True)
class PointerType:
    inner: "TypeNode"
    mutable: bool = False

    def render(self) -> str:
        return ("*mut " if self.mutable else "*const ") + self.inner.render()


@dataclass(frozen=True)
class TraitObjectType:
    """``dyn A + B`` or ``impl A + B``."""

    keyword: str
    bounds: List["GenericArg"]

    def render(self) -> str:
        return f"{self.keyword} " + " + ".join(bound.render() for bound in self.bounds)


@dataclass(frozen=True)
class NeverType:
    def render(self) -> str:
        return "!"


TypeNode = Union[
    PathType,
    TupleType,
    SliceType,
    ReferenceType,
    PointerType,
    TraitObjectType,
    NeverType,
]
GenericArg = Union[TypeNode, Lifetime, AssocBinding]


__all__ = [
    "AssocBinding",
    "GenericArg",
    "Lifetime",
    "NeverType",
    "PathType",
    "PointerType",
    "ReferenceType",
    "SliceType",
    "TraitObjectType",
    "TupleType",
    "TypeNode",
]
