"""Tests for the cross-reference resolver."""

from __future__ import annotations

from typing import List

from bindingdoc.crossref import BindingIndex, CrossReferenceResolver, build_cross_refs
from bindingdoc.models import (
    CrossRef,
    ManagedFunction,
    ManagedVariable,
    NativeItemRef,
    NativeModule,
    SourceType,
)
from tests._fixtures.model_builder import (
    managed_class,
    managed_module,
    native_fn,
    native_impl,
    native_module,
    native_struct,
)


def _resolver(native_modules: List[NativeModule]) -> CrossReferenceResolver:
    return CrossReferenceResolver(BindingIndex.build(native_modules))


def test_renamed_type_links_only_declared_items() -> None:
    native = [
        native_module(
            "mod",
            native_struct("Foo", exposed="Bar"),
            native_impl("Foo", native_fn("go")),
        )
    ]
    managed = [managed_module("mod", managed_class("Bar"), is_binding=True)]

    result = _resolver(native).resolve(managed)

    (module,) = result.modules
    (bar,) = module.items
    assert module.source_type is SourceType.BINDING
    assert bar.native_impl == NativeItemRef(path="mod::Foo", name="Foo")
    assert bar.methods == []
    assert result.cross_refs == [CrossRef.binding("mod.Bar", "mod::Foo")]


def test_methods_are_linked_through_native_owner(rustscale_modules: List[NativeModule]) -> None:
    managed = [
        managed_module(
            "pysnake.handlers",
            managed_class("Handler", "__new__", "handle", "missing"),
            is_binding=True,
        )
    ]

    result = _resolver(rustscale_modules).resolve(managed)

    handler = result.modules[0].items[0]
    new, handle, missing = handler.methods
    owner = "rustscale::handlers::RequestHandler"
    assert new.native_impl == NativeItemRef(path=f"{owner}::new", name="new")
    assert handle.native_impl == NativeItemRef(path=f"{owner}::handle", name="handle")
    assert missing.native_impl is None
    assert result.cross_refs == [
        CrossRef.binding("pysnake.handlers.Handler", owner),
        CrossRef.binding("pysnake.handlers.Handler.__new__", f"{owner}::new"),
        CrossRef.binding("pysnake.handlers.Handler.handle", f"{owner}::handle"),
    ]


def test_functions_link_and_variables_never_do(rustscale_modules: List[NativeModule]) -> None:
    managed = [
        managed_module(
            "pysnake.handlers",
            ManagedVariable(name="Handler"),
            ManagedFunction(name="parse_request"),
            is_binding=True,
        )
    ]

    result = _resolver(rustscale_modules).resolve(managed)

    variable, function = result.modules[0].items
    assert not hasattr(variable, "native_impl")
    assert function.native_impl == NativeItemRef(
        path="rustscale::handlers::parse_request", name="parse_request"
    )
    assert result.cross_refs == [
        CrossRef.binding("pysnake.handlers.parse_request", "rustscale::handlers::parse_request")
    ]


def test_non_binding_modules_pass_through(rustscale_modules: List[NativeModule]) -> None:
    module = managed_module("pysnake.handlers", managed_class("Handler", "handle"))

    result = _resolver(rustscale_modules).resolve([module])

    assert result.modules == [module]
    assert result.modules[0].source_type is SourceType.PYTHON
    assert result.cross_refs == []


def test_resolution_is_idempotent_and_leaves_input_untouched(
    rustscale_modules: List[NativeModule],
) -> None:
    managed = [
        managed_module("pysnake", ManagedFunction(name="version"), is_binding=True),
        managed_module("pysnake.handlers", managed_class("Handler", "handle"), is_binding=True),
    ]
    resolver = _resolver(rustscale_modules)

    first = resolver.resolve(managed)
    second = resolver.resolve(managed)

    assert first == second
    assert len(first.cross_refs) == 3
    assert managed[1].items[0].native_impl is None
    assert managed[1].source_type is SourceType.PYTHON


def test_existing_back_reference_is_kept(rustscale_modules: List[NativeModule]) -> None:
    handler = managed_class("Handler")
    handler.native_impl = NativeItemRef(path="custom::Handler", name="Handler")

    result = _resolver(rustscale_modules).resolve(
        [managed_module("pysnake.handlers", handler, is_binding=True)]
    )

    assert result.modules[0].items[0].native_impl == NativeItemRef(
        path="custom::Handler", name="Handler"
    )
    assert result.cross_refs == [
        CrossRef.binding("pysnake.handlers.Handler", "rustscale::handlers::RequestHandler")
    ]


def test_build_cross_refs_indexes_and_resolves(rustscale_modules: List[NativeModule]) -> None:
    result = build_cross_refs(
        rustscale_modules,
        [managed_module("pysnake", ManagedFunction(name="version"), is_binding=True)],
    )

    assert result.cross_refs == [CrossRef.binding("pysnake.version", "rustscale::version")]
