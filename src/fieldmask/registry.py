"""Transform and field-default registries.

Design goals:
  - One table per leaf category plus an any-type table consulted first
  - Lookup is a prefix scan in registration order
  - Configured once at setup; not safe to mutate while traversals run
"""

from __future__ import annotations
import logging
from typing import Iterator

from .annotation import overlapping, parse_annotation
from .types import Category, TransformFunc

logger = logging.getLogger(__name__)

LEAF_CATEGORIES = (Category.TEXT, Category.INT, Category.UINT, Category.FLOAT)


class TransformTable:
    """Ordered mask type -> transform function mapping for one category."""

    __slots__ = ("name", "_funcs")

    def __init__(self, name: str) -> None:
        self.name = name
        self._funcs: dict[str, TransformFunc] = {}

    def register(self, mask_type: str, func: TransformFunc) -> None:
        clashes = overlapping(mask_type, self._funcs)
        if clashes:
            logger.warning(
                "Mask type %r overlaps %s in the %s table; resolution order is undefined",
                mask_type, clashes, self.name,
            )
        self._funcs[mask_type] = func
        logger.debug("Registered %s transform %r", self.name, mask_type)

    def lookup(self, annotation: str) -> tuple[TransformFunc, str] | None:
        """Return (function, argument) for the first mask type prefixing annotation."""
        parsed = parse_annotation(annotation, self._funcs)
        if parsed is None:
            return None
        mask_type, arg = parsed
        return self._funcs[mask_type], arg

    def __contains__(self, mask_type: object) -> bool:
        return mask_type in self._funcs

    def __iter__(self) -> Iterator[str]:
        return iter(self._funcs)

    def __len__(self) -> int:
        return len(self._funcs)


class TransformRegistry:
    """The four category tables plus the any-type table."""

    __slots__ = ("any", "_tables")

    def __init__(self) -> None:
        self.any = TransformTable("any")
        self._tables: dict[Category, TransformTable] = {
            c: TransformTable(c.value) for c in LEAF_CATEGORIES
        }

    def table(self, category: Category) -> TransformTable:
        try:
            return self._tables[category]
        except KeyError:
            raise ValueError(f"no transform table for category {category!r}") from None

    def register(self, category: Category, mask_type: str, func: TransformFunc) -> None:
        self.table(category).register(mask_type, func)

    def mask_types(self) -> dict[str, list[str]]:
        """Registered mask types per table, in lookup order."""
        out = {"any": list(self.any)}
        out.update({c.value: list(t) for c, t in self._tables.items()})
        return out


class FieldDefaults:
    """Name -> mask type fallback used when a field or key has no annotation."""

    __slots__ = ("_names",)

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._names: dict[str, str] = dict(initial or {})

    def register(self, name: str, mask_type: str) -> None:
        self._names[name] = mask_type
        logger.debug("Registered field default for %r", name)

    def get(self, name: str) -> str:
        return self._names.get(name, "")

    def resolve(self, annotation: str, name: str) -> str:
        """Explicit annotation wins; an empty one falls back to the name."""
        return annotation or self._names.get(name, "")

    @property
    def size(self) -> int:
        return len(self._names)

    def dump(self) -> dict[str, str]:
        return dict(self._names)

    def clear(self) -> None:
        self._names.clear()
