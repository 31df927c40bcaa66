"""fieldmask — type-driven masking of sensitive values in structured data."""

from __future__ import annotations
from typing import Any

from .annotation import DEFAULT_ANNOTATION_KEY, masked
from .config import create_masker, load_config, load_from_yaml
from .default import get_default_masker, set_default_masker
from .errors import ConfigError, MaskArgumentError, MaskError
from .logfilter import MaskingFilter
from .masker import Masker, MaskerConfig
from .transforms import (
    MASK_TYPE_FILLED, MASK_TYPE_FIXED, MASK_TYPE_HASH, MASK_TYPE_RANDOM, MASK_TYPE_ZERO,
)
from .types import Category, TransformFunc

__all__ = [
    "Masker", "MaskerConfig", "masked", "Category", "TransformFunc",
    "MASK_TYPE_FILLED", "MASK_TYPE_FIXED", "MASK_TYPE_HASH", "MASK_TYPE_RANDOM", "MASK_TYPE_ZERO",
    "DEFAULT_ANNOTATION_KEY",
    "MaskError", "MaskArgumentError", "ConfigError",
    "MaskingFilter",
    "create_masker", "load_config", "load_from_yaml",
    "get_default_masker", "set_default_masker",
    "mask", "mask_text", "mask_int", "mask_uint", "mask_float",
    "register_text_transform", "register_int_transform", "register_uint_transform",
    "register_float_transform", "register_any_transform", "register_field_default",
    "set_mask_char", "get_mask_char", "set_annotation_key", "set_caching", "clear_cache", "seed",
]
__version__ = "0.1.0"


# Module-level functions act on the default masker

def mask(value: Any) -> Any:
    return get_default_masker().mask(value)


def mask_text(annotation: str, value: str) -> Any:
    return get_default_masker().mask_text(annotation, value)


def mask_int(annotation: str, value: int) -> Any:
    return get_default_masker().mask_int(annotation, value)


def mask_uint(annotation: str, value: int) -> Any:
    return get_default_masker().mask_uint(annotation, value)


def mask_float(annotation: str, value: float) -> Any:
    return get_default_masker().mask_float(annotation, value)


def register_text_transform(mask_type: str, func: TransformFunc) -> None:
    get_default_masker().register_text_transform(mask_type, func)


def register_int_transform(mask_type: str, func: TransformFunc) -> None:
    get_default_masker().register_int_transform(mask_type, func)


def register_uint_transform(mask_type: str, func: TransformFunc) -> None:
    get_default_masker().register_uint_transform(mask_type, func)


def register_float_transform(mask_type: str, func: TransformFunc) -> None:
    get_default_masker().register_float_transform(mask_type, func)


def register_any_transform(mask_type: str, func: TransformFunc) -> None:
    get_default_masker().register_any_transform(mask_type, func)


def register_field_default(name: str, mask_type: str) -> None:
    get_default_masker().register_field_default(name, mask_type)


def set_mask_char(value: str) -> None:
    get_default_masker().set_mask_char(value)


def get_mask_char() -> str:
    return get_default_masker().get_mask_char()


def set_annotation_key(key: str) -> None:
    get_default_masker().set_annotation_key(key)


def set_caching(enabled: bool) -> None:
    get_default_masker().set_caching(enabled)


def clear_cache() -> None:
    get_default_masker().clear_cache()


def seed(value: int | None) -> None:
    get_default_masker().seed(value)
