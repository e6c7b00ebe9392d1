"""Index of native items exported to the managed language."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..logging import get_logger
from ..models import (
    BindingRecord,
    ExportedFunction,
    ExportedMethod,
    ExportedType,
    NativeFunction,
    NativeImpl,
    NativeModule,
    NativeStruct,
)

logger = get_logger("crossref.index")

MethodKey = Tuple[str, str]


@dataclass
class BindingIndex:
    """Lookup tables keyed by exposed name.

    Collisions on an exposed name keep the first record seen in module order;
    later records are reported through ``collisions``.
    """

    types: Dict[str, ExportedType] = field(default_factory=dict)
    functions: Dict[str, ExportedFunction] = field(default_factory=dict)
    methods: Dict[MethodKey, ExportedMethod] = field(default_factory=dict)
    collisions: List[BindingRecord] = field(default_factory=list)

    @classmethod
    def build(cls, native_modules: Iterable[NativeModule]) -> "BindingIndex":
        index = cls()
        for module in native_modules:
            for item in module.items:
                if isinstance(item, NativeStruct) and item.exported is not None:
                    index._add_type(
                        ExportedType(
                            name=item.exposed_name,
                            native_name=item.name,
                            module_path=module.path,
                        )
                    )
                elif isinstance(item, NativeFunction) and item.exported is not None:
                    index._add_function(
                        ExportedFunction(
                            name=item.exposed_name,
                            native_name=item.name,
                            module_path=module.path,
                        )
                    )
                elif isinstance(item, NativeImpl) and item.exported:
                    for method in item.methods:
                        index._add_method(
                            ExportedMethod(
                                owner_native_name=item.target,
                                method_name=method.exposed_name,
                                native_method_name=method.name,
                            )
                        )
                # Enums are not exported through this index yet.
        logger.debug(
            "Indexed %d type(s), %d function(s), %d method(s)",
            len(index.types),
            len(index.functions),
            len(index.methods),
        )
        return index

    # ------------------------------------------------------------------
    # Lookups

    def lookup_type(self, name: str) -> Optional[ExportedType]:
        return self.types.get(name)

    def lookup_function(self, name: str) -> Optional[ExportedFunction]:
        return self.functions.get(name)

    def lookup_method(self, owner_native_name: str, method_name: str) -> Optional[str]:
        """Return the native method name behind ``owner.method_name``."""
        record = self.methods.get((owner_native_name, method_name))
        return record.native_method_name if record is not None else None

    def exported_types(self) -> List[ExportedType]:
        return list(self.types.values())

    def exported_functions(self) -> List[ExportedFunction]:
        return list(self.functions.values())

    def methods_for(self, owner_native_name: str) -> List[ExportedMethod]:
        return [
            record
            for (owner, _), record in self.methods.items()
            if owner == owner_native_name
        ]

    def is_empty(self) -> bool:
        return not (self.types or self.functions or self.methods)

    # ------------------------------------------------------------------
    # Internal helpers

    def _add_type(self, record: ExportedType) -> None:
        existing = self.types.get(record.name)
        if existing is not None:
            self._collide("type", record.name, existing.native_path, record.native_path, record)
            return
        self.types[record.name] = record

    def _add_function(self, record: ExportedFunction) -> None:
        existing = self.functions.get(record.name)
        if existing is not None:
            self._collide(
                "function", record.name, existing.native_path, record.native_path, record
            )
            return
        self.functions[record.name] = record

    def _add_method(self, record: ExportedMethod) -> None:
        key = (record.owner_native_name, record.method_name)
        existing = self.methods.get(key)
        if existing is not None:
            self._collide(
                "method",
                f"{record.owner_native_name}.{record.method_name}",
                existing.native_method_name,
                record.native_method_name,
                record,
            )
            return
        self.methods[key] = record

    def _collide(
        self, kind: str, name: str, kept: str, skipped: str, record: BindingRecord
    ) -> None:
        logger.warning(
            "Exposed %s name %s is claimed by both %s and %s; keeping %s",
            kind,
            name,
            kept,
            skipped,
            kept,
        )
        self.collisions.append(record)


__all__ = ["BindingIndex", "MethodKey"]
