"""Type-metadata cache — one descriptor per composite type.

A descriptor lists a type's fields in declaration order together with
their raw annotations and a zero-valued template instance.  Entries are
keyed by the class object itself, so two classes that share a name never
share a descriptor.  Reads are plain dict lookups; population happens
under a lock with a re-check.
"""

from __future__ import annotations
import dataclasses
import logging
import threading
from typing import Any

from .types import FieldSpec, TypeDescriptor
from .values import category_of_hint, is_namedtuple_type, resolve_hints, zero_instance

logger = logging.getLogger(__name__)


def build_descriptor(cls: type, annotation_key: str) -> TypeDescriptor:
    """Enumerate the fields of a dataclass or named tuple type."""
    hints = resolve_hints(cls)
    specs: list[FieldSpec] = []
    if is_namedtuple_type(cls):
        kind = "namedtuple"
        # named tuple fields carry no metadata; only field defaults apply
        for name in cls._fields:
            hint = hints.get(name, Any)
            specs.append(FieldSpec(name, not name.startswith("_"), hint, category_of_hint(hint), ""))
    else:
        kind = "dataclass"
        for f in dataclasses.fields(cls):
            hint = hints.get(f.name, Any)
            annotation = f.metadata.get(annotation_key, "") if annotation_key else ""
            specs.append(FieldSpec(
                name=f.name,
                exported=not f.name.startswith("_"),
                hint=hint,
                category=category_of_hint(hint),
                annotation=str(annotation),
            ))
    return TypeDescriptor(type=cls, kind=kind, fields=tuple(specs), template=zero_instance(cls))


class TypeCache:
    """Process-lifetime store of composite type descriptors."""

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[type, TypeDescriptor] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def get(self, cls: type) -> TypeDescriptor | None:
        return self._entries.get(cls)

    def get_or_build(self, cls: type, annotation_key: str, *, store: bool = True) -> TypeDescriptor:
        """Return the cached descriptor, building it on first encounter.

        With ``store=False`` a missing descriptor is built but not kept;
        descriptors already present are reused either way.
        """
        desc = self._entries.get(cls)
        if desc is not None:
            return desc
        if not store:
            return build_descriptor(cls, annotation_key)
        with self._lock:
            desc = self._entries.get(cls)
            if desc is None:
                desc = build_descriptor(cls, annotation_key)
                self._entries[cls] = desc
                logger.debug(
                    "Cached descriptor for %s (%d fields)", cls.__qualname__, len(desc.fields),
                )
        return desc

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self._entries)

    def __contains__(self, cls: object) -> bool:
        return cls in self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug("Cleared type descriptor cache")
