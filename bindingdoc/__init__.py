"""bindingdoc: cross-language documentation for native/managed hybrid codebases."""

from .crossref import (
    BindingIndex,
    CrossReferenceResolver,
    ModuleSynthesizer,
    build_cross_refs,
    merge_synthesized,
    synthesize_flat,
)
from .docstrings import parse_docstring, parse_native_doc
from .orchestrator import Orchestrator
from .typemap import map_type

__version__ = "0.1.0"

__all__ = [
    "BindingIndex",
    "CrossReferenceResolver",
    "ModuleSynthesizer",
    "Orchestrator",
    "__version__",
    "build_cross_refs",
    "map_type",
    "merge_synthesized",
    "parse_docstring",
    "parse_native_doc",
    "synthesize_flat",
]
