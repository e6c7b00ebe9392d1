"""Tests for the binding index."""

from __future__ import annotations

from typing import List

from bindingdoc.crossref import BindingIndex
from bindingdoc.models import ExportedType, NativeEnum, NativeModule
from tests._fixtures.model_builder import native_fn, native_impl, native_module, native_struct


def test_index_is_keyed_by_exposed_name(rustscale_modules: List[NativeModule]) -> None:
    index = BindingIndex.build(rustscale_modules)

    assert index.lookup_type("Handler") == ExportedType(
        name="Handler",
        native_name="RequestHandler",
        module_path="rustscale::handlers",
    )
    assert index.lookup_type("RequestHandler") is None


def test_functions_fall_back_to_declared_name(rustscale_modules: List[NativeModule]) -> None:
    index = BindingIndex.build(rustscale_modules)

    version = index.lookup_function("version")
    assert version is not None
    assert version.native_path == "rustscale::version"
    assert index.lookup_function("parse_request") is not None
    assert index.lookup_function("helper") is None


def test_methods_come_from_exported_impls(rustscale_modules: List[NativeModule]) -> None:
    index = BindingIndex.build(rustscale_modules)

    assert index.lookup_method("RequestHandler", "__new__") == "new"
    assert index.lookup_method("RequestHandler", "handle") == "handle"
    assert index.lookup_method("RequestHandler", "new") is None
    assert [record.method_name for record in index.methods_for("RequestHandler")] == [
        "__new__",
        "handle",
    ]


def test_unexported_impls_are_ignored() -> None:
    index = BindingIndex.build(
        [
            native_module(
                "crate",
                native_struct("Point"),
                native_impl("Point", native_fn("norm"), exported=False),
            )
        ]
    )

    assert index.lookup_method("Point", "norm") is None
    assert index.methods_for("Point") == []


def test_first_definition_wins_on_collision() -> None:
    index = BindingIndex.build(
        [
            native_module("crate::geometry", native_struct("Point")),
            native_module("crate::legacy", native_struct("LegacyPoint", exposed="Point")),
        ]
    )

    record = index.lookup_type("Point")
    assert record is not None
    assert record.module_path == "crate::geometry"
    assert index.collisions == [
        ExportedType(name="Point", native_name="LegacyPoint", module_path="crate::legacy")
    ]


def test_enums_are_not_indexed() -> None:
    index = BindingIndex.build([native_module("crate", NativeEnum(name="Color"))])

    assert index.is_empty()
    assert index.exported_types() == []
