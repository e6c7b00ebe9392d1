"""JSON-compatible encoding of the documentation model.

``to_dict`` walks any model dataclass; item records gain a ``kind`` tag so
that ``from_dict`` can rebuild the tagged unions.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar

from .models import (
    CrossRef,
    CrossRefKind,
    DocModel,
    ExportedFunctionMeta,
    ExportedTypeMeta,
    ManagedClass,
    ManagedFunction,
    ManagedItem,
    ManagedModule,
    ManagedParam,
    ManagedSignature,
    ManagedVariable,
    NativeConst,
    NativeEnum,
    NativeField,
    NativeFunction,
    NativeImpl,
    NativeItem,
    NativeItemRef,
    NativeModule,
    NativeParam,
    NativeSignature,
    NativeStruct,
    NativeTrait,
    NativeTypeAlias,
    NativeVariant,
    ParamDoc,
    ParsedDocstring,
    ProjectMetadata,
    RaisesDoc,
    ReturnDoc,
    SourceType,
)

T = TypeVar("T")


def to_dict(value: Any) -> Any:
    """Convert a model value into plain dicts, lists and scalars."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data: Dict[str, Any] = {}
        kind = getattr(type(value), "kind", None)
        if isinstance(kind, str):
            data["kind"] = kind
        for item in dataclasses.fields(value):
            data[item.name] = to_dict(getattr(value, item.name))
        return data
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_dict(item) for item in value]
    if isinstance(value, dict):
        return {str(key): to_dict(item) for key, item in value.items()}
    return value


def from_dict(record_type: Type[T], payload: Any) -> T:
    """Rebuild a ``record_type`` instance from ``to_dict`` output.

    Raises ``ValueError`` when the payload does not describe a ``record_type``.
    """
    decoder = _DECODERS.get(record_type)
    if decoder is None:
        raise ValueError(f"No decoder registered for {record_type.__name__}")
    try:
        return decoder(_mapping(payload))
    except (TypeError, KeyError, AttributeError) as exc:
        raise ValueError(f"Malformed {record_type.__name__} payload: {exc}") from exc


# ----------------------------------------------------------------------
# Decoders


def _mapping(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValueError(f"Expected a mapping, got {type(payload).__name__}")
    return payload


def _build(cls: Type[T], payload: Mapping[str, Any], **nested: Any) -> T:
    names = {item.name for item in dataclasses.fields(cls)}
    kwargs = {key: value for key, value in payload.items() if key in names}
    kwargs.update(nested)
    return cls(**kwargs)


def _optional(payload: Mapping[str, Any], key: str, decoder: Callable[[Any], T]) -> Optional[T]:
    value = payload.get(key)
    return None if value is None else decoder(_mapping(value))


def _list(payload: Mapping[str, Any], key: str, decoder: Callable[[Any], T]) -> list[T]:
    return [decoder(_mapping(value)) for value in payload.get(key) or []]


def _parsed_docstring(payload: Mapping[str, Any]) -> ParsedDocstring:
    return _build(
        ParsedDocstring,
        payload,
        params=tuple(_list(payload, "params", lambda p: _build(ParamDoc, p))),
        returns=_optional(payload, "returns", lambda p: _build(ReturnDoc, p)),
        raises=tuple(_list(payload, "raises", lambda p: _build(RaisesDoc, p))),
        examples=tuple(payload.get("examples") or ()),
    )


def _native_signature(payload: Mapping[str, Any]) -> NativeSignature:
    return _build(
        NativeSignature, payload, params=_list(payload, "params", lambda p: _build(NativeParam, p))
    )


def _native_function(payload: Mapping[str, Any]) -> NativeFunction:
    return _build(
        NativeFunction,
        payload,
        signature=_optional(payload, "signature", _native_signature) or NativeSignature(),
        exported=_optional(payload, "exported", lambda p: _build(ExportedFunctionMeta, p)),
    )


def _native_field(payload: Mapping[str, Any]) -> NativeField:
    return _build(NativeField, payload)


def _native_struct(payload: Mapping[str, Any]) -> NativeStruct:
    return _build(
        NativeStruct,
        payload,
        fields=_list(payload, "fields", _native_field),
        exported=_optional(payload, "exported", lambda p: _build(ExportedTypeMeta, p)),
    )


def _native_enum(payload: Mapping[str, Any]) -> NativeEnum:
    return _build(
        NativeEnum,
        payload,
        variants=_list(
            payload,
            "variants",
            lambda p: _build(NativeVariant, p, fields=_list(p, "fields", _native_field)),
        ),
    )


def _native_trait(payload: Mapping[str, Any]) -> NativeTrait:
    return _build(NativeTrait, payload, methods=_list(payload, "methods", _native_function))


def _native_impl(payload: Mapping[str, Any]) -> NativeImpl:
    return _build(NativeImpl, payload, methods=_list(payload, "methods", _native_function))


_NATIVE_ITEMS: Dict[str, Callable[[Mapping[str, Any]], NativeItem]] = {
    NativeStruct.kind: _native_struct,
    NativeEnum.kind: _native_enum,
    NativeFunction.kind: _native_function,
    NativeTrait.kind: _native_trait,
    NativeImpl.kind: _native_impl,
    NativeConst.kind: lambda p: _build(NativeConst, p),
    NativeTypeAlias.kind: lambda p: _build(NativeTypeAlias, p),
}


def _tagged(table: Mapping[str, Callable[[Mapping[str, Any]], T]], payload: Any) -> T:
    payload = _mapping(payload)
    kind = payload.get("kind")
    decoder = table.get(kind) if isinstance(kind, str) else None
    if decoder is None:
        raise ValueError(f"Unknown item kind: {kind!r}")
    return decoder(payload)


def _native_item(payload: Mapping[str, Any]) -> NativeItem:
    return _tagged(_NATIVE_ITEMS, payload)


def _native_module(payload: Mapping[str, Any]) -> NativeModule:
    return _build(NativeModule, payload, items=_list(payload, "items", _native_item))


def _item_ref(payload: Mapping[str, Any]) -> NativeItemRef:
    return _build(NativeItemRef, payload)


def _managed_function(payload: Mapping[str, Any]) -> ManagedFunction:
    signature = _optional(
        payload,
        "signature",
        lambda p: _build(
            ManagedSignature, p, params=_list(p, "params", lambda q: _build(ManagedParam, q))
        ),
    )
    return _build(
        ManagedFunction,
        payload,
        signature=signature or ManagedSignature(),
        native_impl=_optional(payload, "native_impl", _item_ref),
    )


def _managed_variable(payload: Mapping[str, Any]) -> ManagedVariable:
    return _build(ManagedVariable, payload)


def _managed_class(payload: Mapping[str, Any]) -> ManagedClass:
    return _build(
        ManagedClass,
        payload,
        methods=_list(payload, "methods", _managed_function),
        attributes=_list(payload, "attributes", _managed_variable),
        native_impl=_optional(payload, "native_impl", _item_ref),
    )


_MANAGED_ITEMS: Dict[str, Callable[[Mapping[str, Any]], ManagedItem]] = {
    ManagedClass.kind: _managed_class,
    ManagedFunction.kind: _managed_function,
    ManagedVariable.kind: _managed_variable,
}


def _managed_item(payload: Mapping[str, Any]) -> ManagedItem:
    return _tagged(_MANAGED_ITEMS, payload)


def _managed_module(payload: Mapping[str, Any]) -> ManagedModule:
    return _build(
        ManagedModule,
        payload,
        items=_list(payload, "items", _managed_item),
        source_type=SourceType(payload.get("source_type", SourceType.PYTHON.value)),
    )


def _cross_ref(payload: Mapping[str, Any]) -> CrossRef:
    return CrossRef(
        managed_path=payload["managed_path"],
        native_path=payload["native_path"],
        relationship=CrossRefKind(payload.get("relationship", CrossRefKind.BINDING.value)),
    )


def _doc_model(payload: Mapping[str, Any]) -> DocModel:
    metadata = _optional(payload, "metadata", lambda p: _build(ProjectMetadata, p))
    if metadata is None:
        raise ValueError("Document model is missing its metadata")
    return DocModel(
        metadata=metadata,
        native_modules=_list(payload, "native_modules", _native_module),
        managed_modules=_list(payload, "managed_modules", _managed_module),
        cross_refs=_list(payload, "cross_refs", _cross_ref),
    )


_DECODERS: Dict[type, Callable[[Mapping[str, Any]], Any]] = {
    ParsedDocstring: _parsed_docstring,
    NativeModule: _native_module,
    ManagedModule: _managed_module,
    CrossRef: _cross_ref,
    ProjectMetadata: lambda p: _build(ProjectMetadata, p),
    DocModel: _doc_model,
    NativeStruct: _native_struct,
    NativeEnum: _native_enum,
    NativeFunction: _native_function,
    NativeTrait: _native_trait,
    NativeImpl: _native_impl,
    ManagedClass: _managed_class,
    ManagedFunction: _managed_function,
    ManagedVariable: _managed_variable,
}


__all__ = ["from_dict", "to_dict"]
