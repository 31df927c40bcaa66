"""Annotation parsing.

An annotation is ``<maskType><argument>`` with no separator, e.g.
``random1000`` or ``random100000.4``.  The mask type is found by prefix
match against the names registered in a table, in registration order.
"""

from __future__ import annotations
import dataclasses
from typing import Any, Iterable

DEFAULT_ANNOTATION_KEY = "mask"


def parse_annotation(annotation: str, mask_types: Iterable[str]) -> tuple[str, str] | None:
    """Split an annotation into (mask_type, argument).

    Returns None for an empty annotation or when no registered mask type
    is a prefix of it.  If two registered types overlap by prefix, the
    one registered first wins; callers should not rely on that.
    """
    if not annotation:
        return None
    for mask_type in mask_types:
        if annotation.startswith(mask_type):
            return mask_type, annotation[len(mask_type):]
    return None


def overlapping(mask_type: str, mask_types: Iterable[str]) -> list[str]:
    """Return registered mask types that are a prefix of, or prefixed by, mask_type."""
    return [
        mt for mt in mask_types
        if mt != mask_type and (mt.startswith(mask_type) or mask_type.startswith(mt))
    ]


def masked(
    annotation: str,
    *,
    key: str = DEFAULT_ANNOTATION_KEY,
    metadata: dict | None = None,
    **kwargs: Any,
) -> Any:
    """``dataclasses.field`` carrying a mask annotation in its metadata.

        @dataclass
        class Card:
            number: str = masked("fixed")
            holder: str = masked("filled", default="")
    """
    meta = dict(metadata or {})
    meta[key] = annotation
    return dataclasses.field(metadata=meta, **kwargs)
