"""Link managed binding modules to the native items implementing them."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List, Sequence

from ..logging import get_logger
from ..models import (
    CrossRef,
    ManagedClass,
    ManagedFunction,
    ManagedModule,
    NativeItemRef,
    NativeModule,
    SourceType,
)
from .index import BindingIndex

logger = get_logger("crossref.resolver")


@dataclass
class ResolutionResult:
    """Annotated copies of the managed modules plus the emitted links."""

    modules: List[ManagedModule] = field(default_factory=list)
    cross_refs: List[CrossRef] = field(default_factory=list)


class CrossReferenceResolver:
    """Annotates binding modules with native back-references.

    Only modules whose ``is_binding`` flag is set are touched; the caller
    decides which modules those are. The input modules are never mutated, so
    resolving the same input twice yields equal results.
    """

    def __init__(self, index: BindingIndex) -> None:
        self.index = index

    def resolve(self, managed_modules: Sequence[ManagedModule]) -> ResolutionResult:
        result = ResolutionResult()
        for module in managed_modules:
            resolved = copy.deepcopy(module)
            if resolved.is_binding:
                self._resolve_module(resolved, result.cross_refs)
            result.modules.append(resolved)
        logger.debug(
            "Resolved %d module(s) into %d cross-reference(s)",
            len(result.modules),
            len(result.cross_refs),
        )
        return result

    def _resolve_module(self, module: ManagedModule, cross_refs: List[CrossRef]) -> None:
        module.source_type = SourceType.BINDING
        for item in module.items:
            if isinstance(item, ManagedClass):
                self._resolve_class(module.path, item, cross_refs)
            elif isinstance(item, ManagedFunction):
                self._resolve_function(module.path, item, cross_refs)
            # Variables have no native counterpart.

    def _resolve_class(
        self, module_path: str, cls: ManagedClass, cross_refs: List[CrossRef]
    ) -> None:
        record = self.index.lookup_type(cls.name)
        if record is None:
            return

        native_path = record.native_path
        if cls.native_impl is None:
            cls.native_impl = NativeItemRef(path=native_path, name=record.native_name)
        managed_path = f"{module_path}.{cls.name}"
        cross_refs.append(CrossRef.binding(managed_path, native_path))

        for method in cls.methods:
            native_method = self.index.lookup_method(record.native_name, method.name)
            if native_method is None:
                continue
            method_path = f"{native_path}::{native_method}"
            if method.native_impl is None:
                method.native_impl = NativeItemRef(path=method_path, name=native_method)
            cross_refs.append(CrossRef.binding(f"{managed_path}.{method.name}", method_path))

    def _resolve_function(
        self, module_path: str, func: ManagedFunction, cross_refs: List[CrossRef]
    ) -> None:
        record = self.index.lookup_function(func.name)
        if record is None:
            return
        if func.native_impl is None:
            func.native_impl = NativeItemRef(path=record.native_path, name=record.native_name)
        cross_refs.append(CrossRef.binding(f"{module_path}.{func.name}", record.native_path))


def build_cross_refs(
    native_modules: Sequence[NativeModule], managed_modules: Sequence[ManagedModule]
) -> ResolutionResult:
    """Index ``native_modules`` and resolve ``managed_modules`` against it."""
    index = BindingIndex.build(native_modules)
    return CrossReferenceResolver(index).resolve(managed_modules)


__all__ = ["CrossReferenceResolver", "ResolutionResult", "build_cross_refs"]
