"""Additive merge of synthesized modules into existing managed modules."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ..logging import get_logger
from ..models import CrossRef, ManagedItem, ManagedModule
from .synthesis import SynthesizedModule

logger = get_logger("crossref.merge")

ItemKey = Tuple[str, str]


@dataclass
class MergeResult:
    """Merged module list, links for the newly added items, and their managed paths."""

    modules: List[ManagedModule] = field(default_factory=list)
    cross_refs: List[CrossRef] = field(default_factory=list)
    added: List[str] = field(default_factory=list)


def item_key(item: ManagedItem) -> ItemKey:
    return item.kind, item.name


def merge_synthesized(
    existing: Sequence[ManagedModule], synthesized: Sequence[SynthesizedModule]
) -> MergeResult:
    """Merge ``synthesized`` into ``existing`` without replacing anything.

    A synthesized module whose path is new is appended whole. Otherwise each
    of its items is appended only when no item with the same ``(kind, name)``
    exists; links are kept only for what was appended. The input modules are
    left untouched.
    """
    result = MergeResult(
        modules=[dataclasses.replace(module, items=list(module.items)) for module in existing]
    )
    by_path: Dict[str, ManagedModule] = {module.path: module for module in result.modules}

    for synth in synthesized:
        module = synth.module
        target = by_path.get(module.path)
        if target is None:
            logger.debug("Adding synthesized module %s", module.path)
            result.modules.append(module)
            by_path[module.path] = module
            result.cross_refs.extend(synth.cross_refs)
            result.added.append(module.path)
            continue

        present = {item_key(item) for item in target.items}
        appended: List[str] = []
        for item in module.items:
            if item_key(item) in present:
                logger.debug("Keeping existing %s %s.%s", item.kind, target.path, item.name)
                continue
            logger.debug("Merging synthesized %s %s.%s", item.kind, target.path, item.name)
            target.items.append(item)
            present.add(item_key(item))
            appended.append(f"{target.path}.{item.name}")

        result.added.extend(appended)
        result.cross_refs.extend(
            ref for ref in synth.cross_refs if _covers(appended, ref.managed_path)
        )

    return result


def _covers(paths: Sequence[str], managed_path: str) -> bool:
    return any(managed_path == path or managed_path.startswith(f"{path}.") for path in paths)


__all__ = ["MergeResult", "item_key", "merge_synthesized"]
