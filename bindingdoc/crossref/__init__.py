"""Cross-language linking: binding index, resolver, synthesizer and merge."""

from .index import BindingIndex
from .merge import MergeResult, merge_synthesized
from .resolver import CrossReferenceResolver, ResolutionResult, build_cross_refs
from .synthesis import ModuleSynthesizer, SynthesizedModule, synthesize_flat

__all__ = [
    "BindingIndex",
    "CrossReferenceResolver",
    "MergeResult",
    "ModuleSynthesizer",
    "ResolutionResult",
    "SynthesizedModule",
    "build_cross_refs",
    "merge_synthesized",
    "synthesize_flat",
]
