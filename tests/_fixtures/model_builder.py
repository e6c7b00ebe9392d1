"""Helpers for constructing native and managed module descriptors in tests."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from bindingdoc.models import (
    ExportedFunctionMeta,
    ExportedTypeMeta,
    ManagedClass,
    ManagedFunction,
    ManagedItem,
    ManagedModule,
    NativeFunction,
    NativeImpl,
    NativeItem,
    NativeModule,
    NativeParam,
    NativeSignature,
    NativeStruct,
)

ParamSpec = Tuple[str, str]


def native_fn(
    name: str,
    params: Sequence[ParamSpec] = (),
    returns: Optional[str] = None,
    *,
    exposed: Optional[str] = None,
    signature: Optional[str] = None,
    exported: bool = True,
    doc: Optional[str] = None,
) -> NativeFunction:
    """Build a native function; ``exported`` attaches export metadata."""
    return NativeFunction(
        name=name,
        doc_comment=doc,
        signature=NativeSignature(
            params=[NativeParam(name=param, type=type_) for param, type_ in params],
            return_type=returns,
        ),
        exported=ExportedFunctionMeta(name=exposed, signature=signature) if exported else None,
    )


def native_struct(
    name: str, *, exposed: Optional[str] = None, exported: bool = True, doc: Optional[str] = None
) -> NativeStruct:
    return NativeStruct(
        name=name,
        doc_comment=doc,
        exported=ExportedTypeMeta(name=exposed) if exported else None,
    )


def native_impl(target: str, *methods: NativeFunction, exported: bool = True) -> NativeImpl:
    return NativeImpl(target=target, methods=list(methods), exported=exported)


def native_module(path: str, *items: NativeItem, doc: Optional[str] = None) -> NativeModule:
    return NativeModule(path=path, doc_comment=doc, items=list(items))


def managed_class(name: str, *methods: str, docstring: Optional[str] = None) -> ManagedClass:
    return ManagedClass(
        name=name,
        docstring=docstring,
        methods=[ManagedFunction(name=method) for method in methods],
    )


def managed_module(
    path: str, *items: ManagedItem, is_binding: bool = False, docstring: Optional[str] = None
) -> ManagedModule:
    return ManagedModule(path=path, docstring=docstring, items=list(items), is_binding=is_binding)


def item_names(items: Iterable[ManagedItem]) -> list[str]:
    return [item.name for item in items]


__all__ = [
    "item_names",
    "managed_class",
    "managed_module",
    "native_fn",
    "native_impl",
    "native_module",
    "native_struct",
]
