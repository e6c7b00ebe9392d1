"""Map native type trees to managed type hints."""

from __future__ import annotations

from typing import Callable, Dict

from .ast import (
    AssocBinding,
    Lifetime,
    PathType,
    PointerType,
    ReferenceType,
    SliceType,
    TupleType,
    TypeNode,
)

PRIMITIVE_TYPES: Dict[str, str] = {
    **{name: "int" for name in (
        "i8", "i16", "i32", "i64", "i128", "isize",
        "u8", "u16", "u32", "u64", "u128", "usize",
    )},
    "f32": "float",
    "f64": "float",
    "bool": "bool",
    "String": "str",
    "str": "str",
    "char": "str",
    "Self": "Self",
}

INTEROP_TYPES: Dict[str, str] = {
    "PyString": "str",
    "PyList": "list",
    "PyDict": "dict",
    "PyTuple": "tuple",
    "PySet": "set",
    "PyFrozenSet": "frozenset",
    "PyBytes": "bytes",
    "PyByteArray": "bytearray",
    "PyInt": "int",
    "PyLong": "int",
    "PyFloat": "float",
    "PyBool": "bool",
    "PyNone": "None",
    "PyModule": "ModuleType",
    "PyType": "type",
    "PyObject": "Any",
    "PyAny": "Any",
}

# Handles whose managed view is simply the wrapped type.
WRAPPER_TYPES = frozenset({"PyResult", "Result", "Py", "Bound", "Borrowed", "PyRef", "PyRefMut"})

# The interpreter token never surfaces in managed signatures.
INTERPRETER_TOKEN = "Python"

_SEQUENCE_GENERICS = {"Vec": "List"}
_OPTIONAL_GENERICS = {"Option": "Optional"}
_MAP_GENERICS = frozenset({"HashMap", "BTreeMap"})
_SET_GENERICS = frozenset({"HashSet", "BTreeSet"})
_UNTYPED_MAP = "Dict[str, Any]"


def map_hint(node: TypeNode) -> str:
    """Return the managed hint for a whole type expression.

    A bare interpreter token, possibly behind references, maps to the empty
    hint; anywhere deeper it is an opaque handle and maps to ``Any``.
    """
    inner = node
    while isinstance(inner, (ReferenceType, PointerType)):
        inner = inner.inner
    if _is_interpreter_token(inner):
        return ""
    return map_node(node)


def _is_interpreter_token(node: TypeNode) -> bool:
    return isinstance(node, PathType) and node.name == INTERPRETER_TOKEN and not node.subscript


def map_node(node: TypeNode) -> str:
    """Return the managed hint for ``node``.

    Trait objects and the never type keep their native spelling.
    """
    handler = _HANDLERS.get(type(node))
    if handler is None:
        return node.render()
    return handler(node)


def _map_tuple(node: TupleType) -> str:
    if not node.elements:
        return "None"
    return "Tuple[" + ", ".join(map_node(element) for element in node.elements) + "]"


def _map_slice(node: SliceType) -> str:
    element = node.element
    if isinstance(element, PathType) and element.name == "u8" and not element.args:
        return "bytes"
    return f"List[{map_node(element)}]"


def _map_reference(node: ReferenceType) -> str:
    return map_node(node.inner)


def _map_pointer(node: PointerType) -> str:
    return map_node(node.inner)


def _map_path(node: PathType) -> str:
    name = node.name
    if _is_interpreter_token(node):
        return "Any"

    if node.subscript:
        return f"{name}[{', '.join(_map_arg(arg) for arg in node.args)}]"

    type_args = node.type_args
    if not type_args:
        if name in PRIMITIVE_TYPES:
            return PRIMITIVE_TYPES[name]
        if name in INTEROP_TYPES:
            return INTEROP_TYPES[name]
        return node.render()

    if name in WRAPPER_TYPES:
        return map_node(type_args[0])
    if name in _SEQUENCE_GENERICS:
        return f"{_SEQUENCE_GENERICS[name]}[{map_node(type_args[0])}]"
    if name in _OPTIONAL_GENERICS:
        return f"{_OPTIONAL_GENERICS[name]}[{map_node(type_args[0])}]"
    if name in _MAP_GENERICS:
        if len(type_args) < 2:
            return _UNTYPED_MAP
        return f"Dict[{map_node(type_args[0])}, {map_node(type_args[1])}]"
    if name in _SET_GENERICS:
        return f"Set[{map_node(type_args[0])}]"
    return node.render()


def _map_arg(arg) -> str:
    if isinstance(arg, (Lifetime, AssocBinding)):
        return arg.render()
    return map_node(arg)


_HANDLERS: Dict[type, Callable[..., str]] = {
    TupleType: _map_tuple,
    SliceType: _map_slice,
    ReferenceType: _map_reference,
    PointerType: _map_pointer,
    PathType: _map_path,
}


__all__ = [
    "INTEROP_TYPES",
    "INTERPRETER_TOKEN",
    "PRIMITIVE_TYPES",
    "WRAPPER_TYPES",
    "map_hint",
    "map_node",
]
