"""Pipeline orchestration for one documentation pass."""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from pathlib import Path
from typing import List, Optional, Sequence

from .config import BindingDocConfig
from .crossref import (
    BindingIndex,
    CrossReferenceResolver,
    ModuleSynthesizer,
    merge_synthesized,
    synthesize_flat,
)
from .logging import get_logger
from .models import CrossRef, DocModel, ManagedModule, NativeModule, ProjectMetadata


class Orchestrator:
    """Runs index, resolve, synthesize and merge over one set of parsed modules."""

    def __init__(self, config: BindingDocConfig | None = None) -> None:
        self.config = config or BindingDocConfig(root=Path.cwd())
        self.logger = get_logger("orchestrator")

    def run(
        self,
        native_modules: Sequence[NativeModule],
        managed_modules: Sequence[ManagedModule],
        *,
        metadata: ProjectMetadata | None = None,
    ) -> DocModel:
        """Produce the linked documentation model."""
        flagged = self.flag_binding_modules(managed_modules)
        index = BindingIndex.build(native_modules)
        if index.collisions:
            self.logger.warning(
                "%d exported name collision(s); first definitions kept", len(index.collisions)
            )

        cross_refs: List[CrossRef] = []
        if not flagged and native_modules:
            package = self.config.managed_package
            self.logger.info("No managed sources; synthesizing %s from native bindings", package)
            flat = synthesize_flat(native_modules, package, index=index)
            modules = [flat.module] if flat.module.items else []
            cross_refs.extend(flat.cross_refs)
        else:
            resolution = CrossReferenceResolver(index).resolve(flagged)
            cross_refs.extend(resolution.cross_refs)

            synthesizer = ModuleSynthesizer(
                index, self.config.managed_package, self.config.native_entry_point
            )
            merged = merge_synthesized(resolution.modules, synthesizer.synthesize(native_modules))
            for path in merged.added:
                self.logger.debug("Added synthesized %s", path)
            cross_refs.extend(merged.cross_refs)
            modules = merged.modules

        self.logger.info(
            "Linked %d managed module(s) with %d cross-reference(s)",
            len(modules),
            len(cross_refs),
        )
        return DocModel(
            metadata=metadata or self.build_metadata(),
            native_modules=list(native_modules),
            managed_modules=modules,
            cross_refs=cross_refs,
        )

    def flag_binding_modules(
        self, managed_modules: Sequence[ManagedModule]
    ) -> List[ManagedModule]:
        """Return copies of ``managed_modules`` with configured binding modules flagged."""
        flagged: List[ManagedModule] = []
        for module in managed_modules:
            if not module.is_binding and self.config.is_binding_module(module.path):
                module = dataclasses.replace(module, is_binding=True)
            flagged.append(module)
        return flagged

    def build_metadata(self, generated_at: Optional[str] = None) -> ProjectMetadata:
        project = self.config.project
        return ProjectMetadata(
            name=project.name,
            version=project.version,
            description=project.description,
            generated_at=generated_at or _timestamp(),
        )


def _timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


__all__ = ["Orchestrator"]
