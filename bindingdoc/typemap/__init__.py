"""Native type expression to managed type hint conversion."""

from __future__ import annotations

from functools import lru_cache

from ..logging import get_logger
from .mapper import map_hint
from .parser import TypeSyntaxError, parse_type

logger = get_logger("typemap")


@lru_cache(maxsize=1024)
def map_type(native_type: str) -> str:
    """Convert a native type expression into a managed type hint.

    The mapping is total: input that cannot be parsed is returned with its
    whitespace removed. Mapped output maps to itself.
    """
    try:
        node = parse_type(native_type)
    except TypeSyntaxError as exc:
        logger.debug("Unparseable type %r: %s", native_type, exc)
        return "".join(native_type.split())
    return map_hint(node)


__all__ = ["TypeSyntaxError", "map_type", "parse_type"]
