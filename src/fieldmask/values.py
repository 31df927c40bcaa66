"""Value shapes, leaf categories, zero values and numeric width fitting.

``None`` is the only absent value; anything else is dispatched on its
runtime type, never on the declared one.  Fixed-width numbers are numpy scalars;
plain ``int`` is unbounded and plain ``float`` is a 64-bit double.
"""

from __future__ import annotations
import dataclasses
import logging
import types
import typing
from enum import Enum
from typing import Any

import numpy as np

from .types import Category, Shape

logger = logging.getLogger(__name__)

# Exact builtin types resolved without isinstance chains
_FAST_SHAPES: dict[type, Shape] = {
    type(None): Shape.NONE,
    str: Shape.LEAF,
    int: Shape.LEAF,
    float: Shape.LEAF,
    bool: Shape.OTHER,
    bytes: Shape.OTHER,
    complex: Shape.OTHER,
    list: Shape.SEQUENCE,
    tuple: Shape.SEQUENCE,
    set: Shape.SEQUENCE,
    frozenset: Shape.SEQUENCE,
    dict: Shape.MAPPING,
}

# Types whose zero is ``type()``
_SCALARS = (str, bytes, bool, int, float, complex, np.number, np.bool_)


def is_namedtuple_type(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, tuple) and hasattr(tp, "_fields")


def is_composite_type(tp: Any) -> bool:
    return isinstance(tp, type) and (dataclasses.is_dataclass(tp) or is_namedtuple_type(tp))


def category_of(value: Any) -> Category:
    """Leaf category of a runtime value."""
    if isinstance(value, (bool, np.bool_, Enum)):
        return Category.OTHER
    if isinstance(value, str):
        return Category.TEXT
    if isinstance(value, np.unsignedinteger):
        return Category.UINT
    if isinstance(value, (int, np.signedinteger)):
        return Category.INT
    if isinstance(value, (float, np.floating)):
        return Category.FLOAT
    return Category.OTHER


def classify(value: Any) -> Shape:
    shape = _FAST_SHAPES.get(type(value))
    if shape is not None:
        return shape
    if isinstance(value, Enum):
        return Shape.OTHER
    if is_composite_type(type(value)):
        return Shape.COMPOSITE
    if category_of(value) is not Category.OTHER:
        return Shape.LEAF
    if isinstance(value, dict):
        return Shape.MAPPING
    if isinstance(value, (list, tuple, set, frozenset)):
        return Shape.SEQUENCE
    return Shape.OTHER


# ----------------------------------------------------------------------
# Declared types
# ----------------------------------------------------------------------

def resolve_hints(cls: type) -> dict[str, Any]:
    """Type hints of a composite type; unresolvable hints degrade to Any."""
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError, AttributeError) as e:
        logger.debug("Could not resolve type hints of %s: %s", cls.__qualname__, e)
        raw = getattr(cls, "__annotations__", {})
        return {k: (v if _is_class(v) else Any) for k, v in raw.items()}


def _is_class(hint: Any) -> bool:
    # list[int] and friends pass isinstance(..., type) on some versions
    return isinstance(hint, type) and typing.get_origin(hint) is None


def _unwrap_optional(hint: Any) -> tuple[Any, bool]:
    """Return (inner hint, nullable) for Optional[X]; unions of several types stay as-is."""
    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        nullable = len(args) != len(typing.get_args(hint))
        if len(args) == 1:
            return args[0], nullable
        return Any, nullable
    return hint, False


def category_of_hint(hint: Any) -> Category:
    """Leaf category of a declared type (Optional[X] reports X's category)."""
    hint, _ = _unwrap_optional(hint)
    if not _is_class(hint) or issubclass(hint, (bool, np.bool_, Enum)):
        return Category.OTHER
    if issubclass(hint, str):
        return Category.TEXT
    if issubclass(hint, np.unsignedinteger):
        return Category.UINT
    if issubclass(hint, (int, np.signedinteger)):
        return Category.INT
    if issubclass(hint, (float, np.floating)):
        return Category.FLOAT
    return Category.OTHER


def zero_for_hint(hint: Any, _building: frozenset = frozenset()) -> Any:
    """Category zero of a declared type.

    Scalars get their own zero, composites a zero instance, and
    everything else (containers, Optional, Any, unknown classes) None.
    """
    inner, nullable = _unwrap_optional(hint)
    if nullable or not _is_class(inner) or issubclass(inner, Enum):
        return None
    if issubclass(inner, _SCALARS):
        return inner()
    if is_composite_type(inner) and inner not in _building:
        return zero_instance(inner, _building)
    return None


def zero_instance(cls: type, _building: frozenset = frozenset()) -> Any:
    """Build an instance of a composite type with every field at its zero.

    ``__init__`` and ``__post_init__`` are bypassed so frozen and slotted
    dataclasses, and fields declared with init=False, are all covered.
    """
    hints = resolve_hints(cls)
    building = _building | {cls}
    if is_namedtuple_type(cls):
        return cls._make(zero_for_hint(hints.get(name, Any), building) for name in cls._fields)
    obj = object.__new__(cls)
    for f in dataclasses.fields(cls):
        object.__setattr__(obj, f.name, zero_for_hint(hints.get(f.name, Any), building))
    return obj


def clone_zero(template: Any) -> Any:
    """Fresh copy of a zero instance built by zero_instance.

    Templates hold only scalars, None and nested zero composites, so a
    field-by-field rebuild is enough.
    """
    cls = type(template)
    if is_namedtuple_type(cls):
        return cls._make(clone_zero(v) for v in template)
    if dataclasses.is_dataclass(cls):
        obj = object.__new__(cls)
        for f in dataclasses.fields(cls):
            object.__setattr__(obj, f.name, clone_zero(getattr(template, f.name)))
        return obj
    return template


def zero_of(value: Any) -> Any:
    """Category zero of a runtime value."""
    if isinstance(value, Enum):
        return None
    if isinstance(value, _SCALARS):
        return type(value)()
    if is_composite_type(type(value)):
        return zero_instance(type(value))
    return None


def is_zero(value: Any) -> bool:
    """True when a leaf or nested composite holds only zero values.

    Containers count as zero only when None; an empty container is not
    the same as an absent one.
    """
    return _is_zero(value, set())


def _is_zero(value: Any, seen: set[int]) -> bool:
    if value is None:
        return True
    if isinstance(value, Enum):
        return False
    if isinstance(value, _SCALARS):
        return not value
    if is_composite_type(type(value)):
        if id(value) in seen:
            # a reference back into the structure is never zero
            return False
        seen.add(id(value))
        names = value._fields if isinstance(value, tuple) else [f.name for f in dataclasses.fields(value)]
        return all(_is_zero(getattr(value, n), seen) for n in names if not n.startswith("_"))
    return False


# ----------------------------------------------------------------------
# Width fitting
# ----------------------------------------------------------------------

def fit_number(result: Any, like: Any) -> Any:
    """Store a transform result in the numeric type of ``like``.

    numpy integers wrap with two's complement exactly as a native
    narrowing conversion would; numpy floats use the native cast, so
    out-of-range values become inf.  Python ints and floats keep the
    produced value.
    """
    tp = type(like)
    if isinstance(like, np.integer):
        info = np.iinfo(tp)
        span = 1 << info.bits
        wrapped = int(result) % span
        if info.min < 0 and wrapped > info.max:
            wrapped -= span
        return tp(wrapped)
    if isinstance(like, np.floating):
        with np.errstate(over="ignore"):
            return tp(result)
    return result
