"""Fabricate managed modules from native binding surfaces.

When a native module exports types or functions that have no managed source,
the synthesizer builds the managed view directly from the native items:
classes for exported structs, methods from exported impl blocks, and free
functions. Doc comments are carried over raw; parsing happens at render time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import (
    CrossRef,
    ManagedClass,
    ManagedFunction,
    ManagedItem,
    ManagedModule,
    ManagedParam,
    ManagedSignature,
    NativeFunction,
    NativeImpl,
    NativeItemRef,
    NativeModule,
    NativeParam,
    NativeStruct,
    SourceType,
)
from ..typemap import map_type
from .index import BindingIndex

logger = get_logger("crossref.synthesis")

# Receivers and the interpreter handle never appear in managed signatures.
IMPLICIT_PARAMS = frozenset({"self", "&self", "&mut self", "py"})


@dataclass
class SynthesizedModule:
    module: ManagedModule
    cross_refs: List[CrossRef] = field(default_factory=list)


class ModuleSynthesizer:
    """Builds managed modules under ``managed_package`` for a native crate rooted at ``native_root``."""

    def __init__(self, index: BindingIndex, managed_package: str, native_root: str) -> None:
        self.index = index
        self.managed_package = managed_package
        self.native_root = native_root.replace("::", ".")

    def managed_path(self, native_path: str) -> str:
        """Map a ``::`` delimited native module path into the managed namespace."""
        dotted = native_path.replace("::", ".")
        if dotted == self.native_root:
            return self.managed_package
        prefix = f"{self.native_root}."
        if dotted.startswith(prefix):
            return f"{self.managed_package}.{dotted[len(prefix):]}"
        return dotted

    def synthesize(self, native_modules: Sequence[NativeModule]) -> List[SynthesizedModule]:
        methods = _collect_exported_methods(native_modules)
        synthesized: List[SynthesizedModule] = []
        for native_module in native_modules:
            result = self.synthesize_module(native_module, methods)
            if result is not None:
                synthesized.append(result)
        logger.debug("Synthesized %d module(s)", len(synthesized))
        return synthesized

    def synthesize_module(
        self,
        native_module: NativeModule,
        methods: Optional[Dict[str, List[NativeFunction]]] = None,
    ) -> Optional[SynthesizedModule]:
        """Return the managed view of one native module, or ``None`` when it exposes nothing."""
        if methods is None:
            methods = _collect_exported_methods([native_module])
        path = self.managed_path(native_module.path)
        items, cross_refs = self.build_items(native_module, path, methods)
        if not items:
            return None
        module = ManagedModule(
            path=path,
            docstring=native_module.doc_comment,
            items=items,
            source_type=SourceType.BINDING,
            is_binding=True,
        )
        logger.debug("Synthesized %s from %s", path, native_module.path)
        return SynthesizedModule(module=module, cross_refs=cross_refs)

    def build_items(
        self,
        native_module: NativeModule,
        managed_path: str,
        methods: Dict[str, List[NativeFunction]],
    ) -> Tuple[List[ManagedItem], List[CrossRef]]:
        """Synthesize the exposed items of one native module under ``managed_path``."""
        items: List[ManagedItem] = []
        cross_refs: List[CrossRef] = []

        for item in native_module.items:
            if isinstance(item, NativeStruct) and item.exported is not None:
                cls = self._synthesize_class(
                    native_module.path, item, methods.get(item.name, []), managed_path, cross_refs
                )
                if cls is not None:
                    items.append(cls)
            elif isinstance(item, NativeFunction) and item.exported is not None:
                func = self._synthesize_free_function(native_module.path, item, managed_path, cross_refs)
                if func is not None:
                    items.append(func)
        return items, cross_refs

    def _synthesize_class(
        self,
        native_module_path: str,
        struct: NativeStruct,
        candidates: List[NativeFunction],
        managed_path: str,
        cross_refs: List[CrossRef],
    ) -> Optional[ManagedClass]:
        native_path = f"{native_module_path}::{struct.name}"
        record = self.index.lookup_type(struct.exposed_name)
        if record is None or record.native_path != native_path:
            logger.debug("Skipping %s: exposed name owned by another type", native_path)
            return None

        class_path = f"{managed_path}.{struct.exposed_name}"
        cross_refs.append(CrossRef.binding(class_path, native_path))

        methods: List[ManagedFunction] = []
        for native_method in candidates:
            exposed = native_method.exposed_name
            if self.index.lookup_method(struct.name, exposed) != native_method.name:
                continue
            method_path = f"{native_path}::{native_method.name}"
            methods.append(synthesize_function(native_method, method_path))
            cross_refs.append(CrossRef.binding(f"{class_path}.{exposed}", method_path))

        return ManagedClass(
            name=struct.exposed_name,
            docstring=struct.doc_comment,
            bases=[],
            methods=methods,
            native_impl=NativeItemRef(path=native_path, name=struct.name),
        )

    def _synthesize_free_function(
        self,
        native_module_path: str,
        native_fn: NativeFunction,
        managed_path: str,
        cross_refs: List[CrossRef],
    ) -> Optional[ManagedFunction]:
        native_path = f"{native_module_path}::{native_fn.name}"
        record = self.index.lookup_function(native_fn.exposed_name)
        if record is None or record.native_path != native_path:
            logger.debug("Skipping %s: exposed name owned by another function", native_path)
            return None
        cross_refs.append(CrossRef.binding(f"{managed_path}.{native_fn.exposed_name}", native_path))
        return synthesize_function(native_fn, native_path)


def _collect_exported_methods(
    native_modules: Sequence[NativeModule],
) -> Dict[str, List[NativeFunction]]:
    methods: Dict[str, List[NativeFunction]] = {}
    for module in native_modules:
        for item in module.items:
            if isinstance(item, NativeImpl) and item.exported:
                methods.setdefault(item.target, []).extend(item.methods)
    return methods


def is_implicit_param(param: NativeParam) -> bool:
    if param.name in IMPLICIT_PARAMS:
        return True
    # The interpreter token maps to an empty hint.
    return bool(param.type.strip()) and map_type(param.type) == ""


def synthesize_params(native_fn: NativeFunction) -> List[ManagedParam]:
    return [
        ManagedParam(
            name=param.name,
            type=map_type(param.type) if param.type.strip() else None,
            default=param.default,
        )
        for param in native_fn.signature.params
        if not is_implicit_param(param)
    ]


def render_signature(name: str, params: Sequence[ManagedParam], return_type: Optional[str]) -> str:
    rendered: List[str] = []
    for param in params:
        text = param.name
        if param.type:
            text += f": {param.type}"
        if param.default is not None:
            text += f" = {param.default}" if param.type else f"={param.default}"
        rendered.append(text)
    arrow = f" -> {return_type}" if return_type else ""
    return f"def {name}({', '.join(rendered)}){arrow}:"


def synthesize_function(native_fn: NativeFunction, native_path: str) -> ManagedFunction:
    """Build the managed view of an exported native function or method."""
    name = native_fn.exposed_name
    params = synthesize_params(native_fn)
    return_type = native_fn.signature.return_type
    mapped_return = map_type(return_type) if return_type else None

    explicit = native_fn.exported.signature if native_fn.exported is not None else None
    if explicit:
        signature_str = f"def {name}{explicit}:"
    else:
        signature_str = render_signature(name, params, mapped_return)

    return ManagedFunction(
        name=name,
        docstring=native_fn.doc_comment,
        signature_str=signature_str,
        signature=ManagedSignature(params=params, return_type=mapped_return or None),
        is_async=native_fn.is_async,
        native_impl=NativeItemRef(path=native_path, name=native_fn.name),
    )


def synthesize_flat(
    native_modules: Sequence[NativeModule],
    module_name: str,
    index: Optional[BindingIndex] = None,
) -> SynthesizedModule:
    """Flatten every exported item of ``native_modules`` into one managed module.

    Used when a project has native bindings but no managed sources at all.
    """
    if index is None:
        index = BindingIndex.build(native_modules)
    synthesizer = ModuleSynthesizer(index, module_name, module_name)
    methods = _collect_exported_methods(native_modules)

    items: List[ManagedItem] = []
    cross_refs: List[CrossRef] = []
    for native_module in native_modules:
        module_items, module_refs = synthesizer.build_items(native_module, module_name, methods)
        items.extend(module_items)
        cross_refs.extend(module_refs)

    module = ManagedModule(
        path=module_name,
        docstring=native_modules[0].doc_comment if native_modules else None,
        items=items,
        source_type=SourceType.BINDING,
        is_binding=True,
    )
    return SynthesizedModule(module=module, cross_refs=cross_refs)


__all__ = [
    "IMPLICIT_PARAMS",
    "ModuleSynthesizer",
    "SynthesizedModule",
    "is_implicit_param",
    "render_signature",
    "synthesize_flat",
    "synthesize_function",
    "synthesize_params",
]
