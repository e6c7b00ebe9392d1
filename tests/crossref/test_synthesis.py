"""Tests for managed module synthesis from native bindings."""

from __future__ import annotations

from typing import List

import pytest

from bindingdoc.crossref import BindingIndex, ModuleSynthesizer, synthesize_flat
from bindingdoc.models import (
    CrossRef,
    ManagedClass,
    ManagedFunction,
    ManagedParam,
    NativeItemRef,
    NativeModule,
    SourceType,
)
from tests._fixtures.model_builder import item_names, native_fn, native_module, native_struct

OWNER = "rustscale::handlers::RequestHandler"


@pytest.fixture
def synthesizer(rustscale_modules: List[NativeModule]) -> ModuleSynthesizer:
    return ModuleSynthesizer(BindingIndex.build(rustscale_modules), "pysnake", "rustscale")


@pytest.mark.parametrize(
    ("native_path", "managed_path"),
    [
        ("rustscale", "pysnake"),
        ("rustscale::handlers", "pysnake.handlers"),
        ("rustscale::handlers::v2", "pysnake.handlers.v2"),
        ("other::thing", "other.thing"),
        ("rustscale_extra", "rustscale_extra"),
    ],
)
def test_namespace_remapping(
    synthesizer: ModuleSynthesizer, native_path: str, managed_path: str
) -> None:
    assert synthesizer.managed_path(native_path) == managed_path


def test_only_modules_with_exposed_items_are_synthesized(
    synthesizer: ModuleSynthesizer, rustscale_modules: List[NativeModule]
) -> None:
    synthesized = synthesizer.synthesize(rustscale_modules)

    assert [entry.module.path for entry in synthesized] == ["pysnake", "pysnake.handlers"]
    for entry in synthesized:
        assert entry.module.source_type is SourceType.BINDING
        assert entry.module.is_binding is True


def test_exported_struct_becomes_class_with_methods(
    synthesizer: ModuleSynthesizer, rustscale_modules: List[NativeModule]
) -> None:
    handlers = synthesizer.synthesize(rustscale_modules)[1].module

    assert handlers.docstring == "Request handlers."
    assert item_names(handlers.items) == ["Handler", "parse_request"]
    handler = handlers.items[0]
    assert isinstance(handler, ManagedClass)
    assert handler.docstring == "Handles requests."
    assert handler.bases == []
    assert handler.native_impl == NativeItemRef(path=OWNER, name="RequestHandler")
    assert [method.name for method in handler.methods] == ["__new__", "handle"]


def test_implicit_params_are_dropped_and_types_mapped(
    synthesizer: ModuleSynthesizer, rustscale_modules: List[NativeModule]
) -> None:
    handler = synthesizer.synthesize(rustscale_modules)[1].module.items[0]
    new, handle = handler.methods

    assert handle.signature.params == [ManagedParam(name="payload", type="dict")]
    assert handle.signature.return_type == "List[str]"
    assert handle.signature_str == "def handle(payload: dict) -> List[str]:"
    assert handle.native_impl == NativeItemRef(path=f"{OWNER}::handle", name="handle")
    assert new.signature_str == "def __new__(capacity: int) -> Self:"
    assert new.native_impl == NativeItemRef(path=f"{OWNER}::new", name="new")


def test_free_functions_are_synthesized(
    synthesizer: ModuleSynthesizer, rustscale_modules: List[NativeModule]
) -> None:
    root, handlers = synthesizer.synthesize(rustscale_modules)

    (version,) = root.module.items
    assert isinstance(version, ManagedFunction)
    assert version.signature_str == "def version() -> str:"
    assert root.module.docstring == "Root of the rustscale crate."
    parse_request = handlers.module.items[1]
    assert parse_request.signature_str == "def parse_request(raw: bytes) -> Optional[int]:"


def test_cross_refs_cover_classes_methods_and_functions(
    synthesizer: ModuleSynthesizer, rustscale_modules: List[NativeModule]
) -> None:
    handlers = synthesizer.synthesize(rustscale_modules)[1]

    assert handlers.cross_refs == [
        CrossRef.binding("pysnake.handlers.Handler", OWNER),
        CrossRef.binding("pysnake.handlers.Handler.__new__", f"{OWNER}::new"),
        CrossRef.binding("pysnake.handlers.Handler.handle", f"{OWNER}::handle"),
        CrossRef.binding(
            "pysnake.handlers.parse_request", "rustscale::handlers::parse_request"
        ),
    ]


def test_explicit_signature_and_interpreter_params() -> None:
    modules = [
        native_module(
            "geo",
            native_fn(
                "scale",
                [("gil", "Python<'py>"), ("x", "f64"), ("factor", "f64")],
                "f64",
                signature="(x, factor=1.0)",
            ),
        )
    ]
    synthesizer = ModuleSynthesizer(BindingIndex.build(modules), "geo", "geo")

    (entry,) = synthesizer.synthesize(modules)
    (scale,) = entry.module.items

    assert scale.signature_str == "def scale(x, factor=1.0):"
    assert [param.name for param in scale.signature.params] == ["x", "factor"]


def test_struct_without_methods_and_unexported_items() -> None:
    modules = [
        native_module(
            "geo",
            native_struct("Point"),
            native_struct("Hidden", exported=False),
            native_fn("internal", exported=False),
        )
    ]
    synthesizer = ModuleSynthesizer(BindingIndex.build(modules), "geo", "geo")

    (entry,) = synthesizer.synthesize(modules)

    assert item_names(entry.module.items) == ["Point"]
    assert entry.module.items[0].methods == []
    hidden_only = native_module("geo::empty", native_struct("X", exported=False))
    assert synthesizer.synthesize_module(hidden_only) is None


def test_collision_loser_is_not_synthesized() -> None:
    modules = [
        native_module("geo::a", native_struct("Point")),
        native_module("geo::b", native_struct("OldPoint", exposed="Point")),
    ]
    synthesizer = ModuleSynthesizer(BindingIndex.build(modules), "geo", "geo")

    synthesized = synthesizer.synthesize(modules)

    assert [entry.module.path for entry in synthesized] == ["geo.a"]


def test_flat_synthesis_collects_every_module(rustscale_modules: List[NativeModule]) -> None:
    flat = synthesize_flat(rustscale_modules, "pysnake")

    assert flat.module.path == "pysnake"
    assert flat.module.docstring == "Root of the rustscale crate."
    assert item_names(flat.module.items) == ["version", "Handler", "parse_request"]
    assert [ref.managed_path for ref in flat.cross_refs] == [
        "pysnake.version",
        "pysnake.Handler",
        "pysnake.Handler.__new__",
        "pysnake.Handler.handle",
        "pysnake.parse_request",
    ]
