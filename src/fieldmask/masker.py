"""Masker — the main API.  Walks a value and masks annotated leaves.

Usage:
    from dataclasses import dataclass
    from fieldmask import Masker, masked

    @dataclass
    class User:
        id: str
        name: str = masked("filled")
        age: int = masked("random100")

    masker = Masker()                 # owns its registries and type cache
    print(masker.mask(User("123456", "Usagi", 3)))
    # User(id='123456', name='*****', age=<0..99>)

Annotations are ``<maskType><argument>`` strings stored in dataclass field
metadata under the annotation key ("mask" by default).  Fields without one
fall back to the field-default registry by name; dict entries with string
keys are looked up the same way by key.
"""

from __future__ import annotations
import copy
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable

from . import transforms
from .annotation import DEFAULT_ANNOTATION_KEY
from .cache import TypeCache
from .registry import FieldDefaults, TransformRegistry
from .types import Category, Shape, TransformFunc, TypeDescriptor
from .values import category_of, classify, clone_zero, fit_number, is_zero, zero_of

logger = logging.getLogger(__name__)

DEFAULT_MASK_CHAR = "*"

# Leaf types that skip shape classification inside containers
_FAST_LEAF: dict[type, Category] = {
    str: Category.TEXT,
    int: Category.INT,
    float: Category.FLOAT,
}

# (id(input), annotation) -> output already produced in this call
Memo = dict[tuple[int, str], Any]


@dataclass
class MaskerConfig:
    """Configuration for the Masker."""
    mask_char: str = DEFAULT_MASK_CHAR
    annotation_key: str = DEFAULT_ANNOTATION_KEY   # "" disables per-field annotations
    cache: bool = True                              # keep type descriptors between calls
    seed: int | None = None                         # seed for the random transforms
    # Name -> mask type used when a field or string key has no annotation
    field_defaults: dict[str, str] = field(default_factory=dict)
    register_builtins: bool = True


class Masker:
    """Type-driven value masker.

    Each instance owns its transform tables, field defaults, type cache and
    random source, so differently configured maskers can coexist.  One
    instance can be shared between threads once configured.
    """

    def __init__(self, config: MaskerConfig | None = None) -> None:
        self.config = config or MaskerConfig()
        self._mask_char = self.config.mask_char
        self._annotation_key = self.config.annotation_key
        self._cache_enabled = self.config.cache
        self._rng = random.Random(self.config.seed)

        self.transforms = TransformRegistry()
        self.field_defaults = FieldDefaults(self.config.field_defaults)
        self.type_cache = TypeCache()

        self._handlers: dict[Shape, Callable[[Any, str, Memo], Any]] = {
            Shape.NONE: self._mask_none,
            Shape.COMPOSITE: self._mask_composite,
            Shape.SEQUENCE: self._mask_sequence,
            Shape.MAPPING: self._mask_mapping,
            Shape.LEAF: self._mask_leaf,
            Shape.OTHER: self._mask_other,
        }

        if self.config.register_builtins:
            self._register_builtins()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def mask_char(self) -> str:
        return self._mask_char

    @mask_char.setter
    def mask_char(self, value: str) -> None:
        self._mask_char = value

    def set_mask_char(self, value: str) -> None:
        self._mask_char = value

    def get_mask_char(self) -> str:
        return self._mask_char

    @property
    def annotation_key(self) -> str:
        return self._annotation_key

    def set_annotation_key(self, key: str) -> None:
        """Change the metadata key annotations are read from.

        Cached descriptors hold annotations read with the old key, so the
        type cache is cleared.
        """
        if key != self._annotation_key:
            self._annotation_key = key
            self.type_cache.clear()
            logger.debug("Annotation key set to %r", key)

    @property
    def caching(self) -> bool:
        return self._cache_enabled

    def set_caching(self, enabled: bool) -> None:
        """Toggle descriptor caching for types not seen yet."""
        self._cache_enabled = enabled

    def clear_cache(self) -> None:
        self.type_cache.clear()

    def seed(self, value: int | None) -> None:
        self._rng.seed(value)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_transform(self, category: Category, mask_type: str, func: TransformFunc) -> None:
        self.transforms.register(category, mask_type, func)

    def register_text_transform(self, mask_type: str, func: TransformFunc) -> None:
        self.transforms.register(Category.TEXT, mask_type, func)

    def register_int_transform(self, mask_type: str, func: TransformFunc) -> None:
        self.transforms.register(Category.INT, mask_type, func)

    def register_uint_transform(self, mask_type: str, func: TransformFunc) -> None:
        self.transforms.register(Category.UINT, mask_type, func)

    def register_float_transform(self, mask_type: str, func: TransformFunc) -> None:
        self.transforms.register(Category.FLOAT, mask_type, func)

    def register_any_transform(self, mask_type: str, func: TransformFunc) -> None:
        """Register a transform that runs before any category table."""
        self.transforms.any.register(mask_type, func)

    def register_field_default(self, name: str, mask_type: str) -> None:
        self.field_defaults.register(name, mask_type)

    def mask_types(self, category: Category | None = None) -> list[str] | dict[str, list[str]]:
        """Registered mask types for one category, or for every table."""
        if category is None:
            return self.transforms.mask_types()
        return list(self.transforms.table(category))

    def _register_builtins(self) -> None:
        self.register_text_transform(transforms.MASK_TYPE_FILLED, self.filled_string)
        self.register_text_transform(transforms.MASK_TYPE_FIXED, self.fixed_string)
        self.register_text_transform(transforms.MASK_TYPE_HASH, self.hash_string)
        self.register_int_transform(transforms.MASK_TYPE_RANDOM, self.random_int)
        self.register_uint_transform(transforms.MASK_TYPE_RANDOM, self.random_int)
        self.register_float_transform(transforms.MASK_TYPE_RANDOM, self.random_float)
        self.register_any_transform(transforms.MASK_TYPE_ZERO, self.zero)

    # Built-ins bound to this masker's mask character and random source

    def filled_string(self, arg: str, value: str) -> str:
        return transforms.mask_filled(arg, value, self._mask_char)

    def fixed_string(self, arg: str, value: str) -> str:
        return transforms.mask_fixed(arg, value, self._mask_char)

    def hash_string(self, arg: str, value: str) -> str:
        return transforms.mask_hash(arg, value)

    def random_int(self, arg: str, value: int) -> int:
        return transforms.mask_random_int(arg, value, self._rng)

    def random_float(self, arg: str, value: float) -> float:
        return transforms.mask_random_float(arg, value, self._rng)

    def zero(self, arg: str, value: Any) -> Any:
        return transforms.mask_zero(arg, value)

    # ------------------------------------------------------------------
    # Leaf entry points
    # ------------------------------------------------------------------

    def mask_text(self, annotation: str, value: str) -> Any:
        return self._dispatch(Category.TEXT, annotation, value)

    def mask_int(self, annotation: str, value: int) -> Any:
        return self._dispatch(Category.INT, annotation, value)

    def mask_uint(self, annotation: str, value: int) -> Any:
        return self._dispatch(Category.UINT, annotation, value)

    def mask_float(self, annotation: str, value: float) -> Any:
        return self._dispatch(Category.FLOAT, annotation, value)

    def _dispatch(self, category: Category, annotation: str, value: Any) -> Any:
        """Any-type table first, then the category table."""
        if not annotation:
            return value
        hit = self.transforms.any.lookup(annotation)
        if hit is not None:
            func, arg = hit
            return func(arg, value)
        return self._apply(category, annotation, value)

    def _apply(self, category: Category, annotation: str, value: Any) -> Any:
        hit = self.transforms.table(category).lookup(annotation)
        if hit is None:
            return value
        func, arg = hit
        return fit_number(func(arg, value), value)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def mask(self, value: Any) -> Any:
        """Return a masked copy of value.

        Any exception raised by a transform aborts the whole call.
        """
        if value is None:
            return None
        return self._mask(value, "", {})

    def _mask(self, value: Any, annotation: str, memo: Memo) -> Any:
        if annotation:
            hit = self.transforms.any.lookup(annotation)
            if hit is not None:
                func, arg = hit
                return func(arg, value)
        return self._handlers[classify(value)](value, annotation, memo)

    def _mask_item(self, item: Any, annotation: str, memo: Memo) -> Any:
        category = _FAST_LEAF.get(type(item))
        if category is not None:
            return self._dispatch(category, annotation, item)
        return self._mask(item, annotation, memo)

    def _mask_none(self, value: None, annotation: str, memo: Memo) -> None:
        return None

    def _mask_other(self, value: Any, annotation: str, memo: Memo) -> Any:
        return value

    def _mask_leaf(self, value: Any, annotation: str, memo: Memo) -> Any:
        if not annotation:
            return value
        return self._apply(category_of(value), annotation, value)

    def _descriptor(self, cls: type) -> TypeDescriptor:
        return self.type_cache.get_or_build(cls, self._annotation_key, store=self._cache_enabled)

    def _new_output(self, desc: TypeDescriptor) -> Any:
        if self.type_cache.get(desc.type) is desc:
            # shared template: hand out a private copy
            return clone_zero(desc.template)
        return desc.template

    def _zero_output(self, value: Any, desc: TypeDescriptor) -> Any:
        """Zero output for an all-zero input.

        Exported fields keep the runtime type of the input value (a numpy
        width, an ``Optional`` field holding 0); unexported fields take the
        declared zero from the template.
        """
        zeros = []
        for fs in desc.fields:
            if not fs.exported:
                zeros.append(clone_zero(getattr(desc.template, fs.name)))
                continue
            item = getattr(value, fs.name)
            if classify(item) is Shape.COMPOSITE:
                zeros.append(self._zero_output(item, self._descriptor(type(item))))
            else:
                zeros.append(zero_of(item))
        if desc.kind == "namedtuple":
            return desc.type._make(zeros)
        out = object.__new__(desc.type)
        for fs, zero in zip(desc.fields, zeros):
            object.__setattr__(out, fs.name, zero)
        return out

    def _mask_composite(self, value: Any, annotation: str, memo: Memo) -> Any:
        key = (id(value), annotation)
        if key in memo:
            return memo[key]
        desc = self._descriptor(type(value))
        if is_zero(value):
            return self._zero_output(value, desc)

        if desc.kind == "namedtuple":
            items = [
                self._mask(getattr(value, fs.name),
                           self.field_defaults.resolve(fs.annotation, fs.name), memo)
                if fs.exported else clone_zero(getattr(desc.template, fs.name))
                for fs in desc.fields
            ]
            if key in memo:
                return memo[key]
            out = type(value)._make(items)
            memo[key] = out
            return out

        out = self._new_output(desc)
        memo[key] = out
        for fs in desc.fields:
            # unexported fields keep the template's zero
            if not fs.exported:
                continue
            effective = self.field_defaults.resolve(fs.annotation, fs.name)
            object.__setattr__(out, fs.name, self._mask(getattr(value, fs.name), effective, memo))
        return out

    def _mask_sequence(self, value: Any, annotation: str, memo: Memo) -> Any:
        key = (id(value), annotation)
        if key in memo:
            return memo[key]
        if isinstance(value, list):
            if type(value) is list:
                out = []
            else:
                out = copy.copy(value)
                del out[:]
            memo[key] = out
            for item in value:
                out.append(self._mask_item(item, annotation, memo))
            return out

        items = [self._mask_item(item, annotation, memo) for item in value]
        # a cycle through a mutable element may already have built this one
        if key in memo:
            return memo[key]
        out = type(value)(items)
        memo[key] = out
        return out

    def _mask_mapping(self, value: dict, annotation: str, memo: Memo) -> dict:
        key = (id(value), annotation)
        if key in memo:
            return memo[key]
        if type(value) is dict:
            out = {}
        else:
            out = copy.copy(value)
            out.clear()
        memo[key] = out
        for k, v in value.items():
            effective = self.field_defaults.resolve(annotation, k) if isinstance(k, str) else annotation
            out[k] = self._mask_item(v, effective, memo)
        return out

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def stats(self) -> dict:
        return {
            "mask_char": self._mask_char,
            "annotation_key": self._annotation_key,
            "caching": self._cache_enabled,
            "cached_types": self.type_cache.size,
            "field_defaults": self.field_defaults.dump(),
            "mask_types": self.transforms.mask_types(),
        }
