"""Core types."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


# (argument, value) -> masked value; raise to abort the traversal
TransformFunc = Callable[[str, Any], Any]


class Category(str, Enum):
    """Leaf value categories, one transform table each."""
    TEXT = "text"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    # Not a leaf category: values that only an any-type transform can touch
    OTHER = "other"


class Shape(Enum):
    """Closed set of value shapes the traversal knows how to walk."""
    NONE = "none"             # nil reference / nil dynamic handle
    COMPOSITE = "composite"   # dataclass instance or named tuple
    SEQUENCE = "sequence"     # list, tuple, set, frozenset
    MAPPING = "mapping"       # dict and subclasses
    LEAF = "leaf"             # text / int / uint / float
    OTHER = "other"           # copied verbatim


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One field of a composite type, as recorded in its descriptor."""
    name: str
    exported: bool
    hint: Any              # resolved type hint, or Any when unresolvable
    category: Category     # leaf category of the declared type
    annotation: str        # raw per-field annotation, "" when absent


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Cached metadata for a composite type."""
    type: type
    kind: str                      # "dataclass" | "namedtuple"
    fields: tuple[FieldSpec, ...]
    template: Any                  # zero-valued instance of ``type``
