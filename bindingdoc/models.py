"""Core data models shared across bindingdoc components.

Native (compiled side) and managed (Python side) items are modelled as two
tagged unions. Every item class carries a ``kind`` tag so that consumers can
dispatch on it and so that serialized payloads round-trip.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union


class SourceType(str, Enum):
    """Where the documentation for a managed module comes from."""

    PYTHON = "python"
    BINDING = "binding"
    NATIVE = "native"


class CrossRefKind(str, Enum):
    """Relationship between a managed item and its native implementation."""

    BINDING = "binding"
    WRAPS = "wraps"
    DELEGATES = "delegates"


# Parsed documentation


@dataclass(frozen=True)
class ParamDoc:
    """Documented parameter."""

    name: str
    type: Optional[str]
    description: str


@dataclass(frozen=True)
class ReturnDoc:
    """Documented return value."""

    type: Optional[str]
    description: str


@dataclass(frozen=True)
class RaisesDoc:
    """Documented exception or error condition."""

    error_type: str
    description: str


@dataclass(frozen=True)
class ParsedDocstring:
    """Structured view of a docstring or native doc comment.

    ``safety`` and ``panics`` are only populated by the native doc-comment
    grammar and hold the section text verbatim.
    """

    summary: Optional[str] = None
    description: Optional[str] = None
    params: tuple[ParamDoc, ...] = ()
    returns: Optional[ReturnDoc] = None
    raises: tuple[RaisesDoc, ...] = ()
    examples: tuple[str, ...] = ()
    safety: Optional[str] = None
    panics: Optional[str] = None

    def is_empty(self) -> bool:
        return (
            self.summary is None
            and self.description is None
            and not self.params
            and self.returns is None
            and not self.raises
            and not self.examples
            and self.safety is None
            and self.panics is None
        )


# Native model


@dataclass
class ExportedTypeMeta:
    """Interop export marker on a native type (e.g. ``#[pyclass(name = ...)]``)."""

    name: Optional[str] = None
    module: Optional[str] = None


@dataclass
class ExportedFunctionMeta:
    """Interop export marker on a native function or method."""

    name: Optional[str] = None
    signature: Optional[str] = None


@dataclass
class NativeParam:
    name: str
    type: str
    default: Optional[str] = None


@dataclass
class NativeSignature:
    params: List[NativeParam] = field(default_factory=list)
    return_type: Optional[str] = None


@dataclass
class NativeField:
    name: str
    type: str
    doc_comment: Optional[str] = None
    public: bool = True


@dataclass
class NativeFunction:
    """A native function or method definition."""

    kind: ClassVar[str] = "function"

    name: str
    doc_comment: Optional[str] = None
    generics: Optional[str] = None
    signature_str: str = ""
    signature: NativeSignature = field(default_factory=NativeSignature)
    is_async: bool = False
    is_unsafe: bool = False
    exported: Optional[ExportedFunctionMeta] = None

    @property
    def exposed_name(self) -> str:
        if self.exported is not None and self.exported.name:
            return self.exported.name
        return self.name


@dataclass
class NativeStruct:
    """A native struct, optionally exported as a managed class."""

    kind: ClassVar[str] = "struct"

    name: str
    doc_comment: Optional[str] = None
    generics: Optional[str] = None
    fields: List[NativeField] = field(default_factory=list)
    derives: List[str] = field(default_factory=list)
    exported: Optional[ExportedTypeMeta] = None

    @property
    def exposed_name(self) -> str:
        if self.exported is not None and self.exported.name:
            return self.exported.name
        return self.name


@dataclass
class NativeVariant:
    name: str
    doc_comment: Optional[str] = None
    fields: List[NativeField] = field(default_factory=list)


@dataclass
class NativeEnum:
    kind: ClassVar[str] = "enum"

    name: str
    doc_comment: Optional[str] = None
    generics: Optional[str] = None
    variants: List[NativeVariant] = field(default_factory=list)


@dataclass
class NativeTrait:
    kind: ClassVar[str] = "trait"

    name: str
    doc_comment: Optional[str] = None
    generics: Optional[str] = None
    bounds: Optional[str] = None
    methods: List[NativeFunction] = field(default_factory=list)


@dataclass
class NativeImpl:
    """An implementation block; ``exported`` marks interop-exposed method groups."""

    kind: ClassVar[str] = "impl"

    target: str
    methods: List[NativeFunction] = field(default_factory=list)
    trait_name: Optional[str] = None
    generics: Optional[str] = None
    where_clause: Optional[str] = None
    exported: bool = False


@dataclass
class NativeConst:
    kind: ClassVar[str] = "const"

    name: str
    type: str
    value: Optional[str] = None
    doc_comment: Optional[str] = None


@dataclass
class NativeTypeAlias:
    kind: ClassVar[str] = "type_alias"

    name: str
    type: str
    generics: Optional[str] = None
    doc_comment: Optional[str] = None


NativeItem = Union[
    NativeStruct,
    NativeEnum,
    NativeFunction,
    NativeTrait,
    NativeImpl,
    NativeConst,
    NativeTypeAlias,
]


@dataclass
class NativeModule:
    """A native module path (``crate::sub``) with its ordered items."""

    path: str
    doc_comment: Optional[str] = None
    items: List[NativeItem] = field(default_factory=list)


# Managed model


@dataclass(frozen=True)
class NativeItemRef:
    """Back-reference from a managed item to the native item implementing it."""

    path: str
    name: str


@dataclass
class ManagedParam:
    name: str
    type: Optional[str] = None
    default: Optional[str] = None


@dataclass
class ManagedSignature:
    params: List[ManagedParam] = field(default_factory=list)
    return_type: Optional[str] = None


@dataclass
class ManagedFunction:
    kind: ClassVar[str] = "function"

    name: str
    docstring: Optional[str] = None
    signature_str: str = ""
    signature: ManagedSignature = field(default_factory=ManagedSignature)
    decorators: List[str] = field(default_factory=list)
    is_async: bool = False
    is_staticmethod: bool = False
    is_classmethod: bool = False
    is_property: bool = False
    native_impl: Optional[NativeItemRef] = None


@dataclass
class ManagedVariable:
    kind: ClassVar[str] = "variable"

    name: str
    type: Optional[str] = None
    value: Optional[str] = None
    docstring: Optional[str] = None


@dataclass
class ManagedClass:
    kind: ClassVar[str] = "class"

    name: str
    docstring: Optional[str] = None
    bases: List[str] = field(default_factory=list)
    methods: List[ManagedFunction] = field(default_factory=list)
    attributes: List[ManagedVariable] = field(default_factory=list)
    decorators: List[str] = field(default_factory=list)
    native_impl: Optional[NativeItemRef] = None


ManagedItem = Union[ManagedClass, ManagedFunction, ManagedVariable]


@dataclass
class ManagedModule:
    """A managed (Python) module; ``is_binding`` is set by the caller."""

    path: str
    docstring: Optional[str] = None
    items: List[ManagedItem] = field(default_factory=list)
    source_type: SourceType = SourceType.PYTHON
    is_binding: bool = False


# Binding index records


@dataclass(frozen=True)
class ExportedType:
    name: str
    native_name: str
    module_path: str

    @property
    def native_path(self) -> str:
        return f"{self.module_path}::{self.native_name}"


@dataclass(frozen=True)
class ExportedFunction:
    name: str
    native_name: str
    module_path: str

    @property
    def native_path(self) -> str:
        return f"{self.module_path}::{self.native_name}"


@dataclass(frozen=True)
class ExportedMethod:
    owner_native_name: str
    method_name: str
    native_method_name: str


BindingRecord = Union[ExportedType, ExportedFunction, ExportedMethod]


# Cross references and the top-level model


@dataclass(frozen=True)
class CrossRef:
    """Link from a managed item path to the native item implementing it."""

    managed_path: str
    native_path: str
    relationship: CrossRefKind

    @classmethod
    def binding(cls, managed_path: str, native_path: str) -> "CrossRef":
        return cls(managed_path, native_path, CrossRefKind.BINDING)

    @classmethod
    def wraps(cls, managed_path: str, native_path: str) -> "CrossRef":
        return cls(managed_path, native_path, CrossRefKind.WRAPS)

    @classmethod
    def delegates(cls, managed_path: str, native_path: str) -> "CrossRef":
        return cls(managed_path, native_path, CrossRefKind.DELEGATES)


@dataclass
class ProjectMetadata:
    name: str
    version: Optional[str] = None
    description: Optional[str] = None
    git_ref: Optional[str] = None
    git_commit: Optional[str] = None
    generated_at: Optional[str] = None


@dataclass
class DocModel:
    """Complete documentation model for a hybrid project."""

    metadata: ProjectMetadata
    native_modules: List[NativeModule] = field(default_factory=list)
    managed_modules: List[ManagedModule] = field(default_factory=list)
    cross_refs: List[CrossRef] = field(default_factory=list)


__all__ = [
    "BindingRecord",
    "CrossRef",
    "CrossRefKind",
    "DocModel",
    "ExportedFunction",
    "ExportedFunctionMeta",
    "ExportedMethod",
    "ExportedType",
    "ExportedTypeMeta",
    "ManagedClass",
    "ManagedFunction",
    "ManagedItem",
    "ManagedModule",
    "ManagedParam",
    "ManagedSignature",
    "ManagedVariable",
    "NativeConst",
    "NativeEnum",
    "NativeField",
    "NativeFunction",
    "NativeImpl",
    "NativeItem",
    "NativeItemRef",
    "NativeModule",
    "NativeParam",
    "NativeSignature",
    "NativeStruct",
    "NativeTrait",
    "NativeTypeAlias",
    "NativeVariant",
    "ParamDoc",
    "ParsedDocstring",
    "ProjectMetadata",
    "RaisesDoc",
    "ReturnDoc",
    "SourceType",
]
