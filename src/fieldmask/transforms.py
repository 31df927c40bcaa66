"""Built-in transforms.

Each function takes the annotation argument and the value being masked.
Transforms that need engine state (mask character, random source) take
it as an extra parameter; ``Masker`` binds them to its own state when it
registers them.
"""

from __future__ import annotations
import hashlib
import random
from typing import Any

from .errors import MaskArgumentError
from .values import zero_of

MASK_TYPE_FILLED = "filled"
MASK_TYPE_FIXED = "fixed"
MASK_TYPE_HASH = "hash"
MASK_TYPE_RANDOM = "random"
MASK_TYPE_ZERO = "zero"

FIXED_LENGTH = 8


def _parse_int(mask_type: str, arg: str) -> int:
    try:
        return int(arg)
    except ValueError:
        raise MaskArgumentError(mask_type, arg, "expected an integer") from None


def mask_filled(arg: str, value: str, mask_char: str) -> str:
    """Replace text with mask characters.

    With an argument N, exactly N characters; otherwise one per code
    point of the original, so "ヤハッ！" becomes "****".
    """
    if arg:
        count = _parse_int(MASK_TYPE_FILLED, arg)
        return mask_char * count
    return mask_char * len(value)


def mask_fixed(arg: str, value: str, mask_char: str) -> str:
    return mask_char * FIXED_LENGTH


def mask_hash(arg: str, value: str) -> str:
    """Lowercase hex SHA-1 of the UTF-8 encoding."""
    return hashlib.sha1(value.encode("utf-8")).hexdigest()


def mask_random_int(arg: str, value: int, rng: random.Random) -> int:
    """Uniform integer in [0, N)."""
    bound = _parse_int(MASK_TYPE_RANDOM, arg)
    if bound <= 0:
        raise MaskArgumentError(MASK_TYPE_RANDOM, arg, "bound must be positive")
    return rng.randrange(bound)


def mask_random_float(arg: str, value: float, rng: random.Random) -> float:
    """Uniform value in [0, I) cut to D decimals, from an ``I.D`` argument.

    The scaled value is truncated rather than rounded, which keeps the
    result strictly below I.
    """
    parts = arg.split(".")
    if len(parts) > 2:
        raise MaskArgumentError(MASK_TYPE_RANDOM, arg, "expected I or I.D")
    bound = _parse_int(MASK_TYPE_RANDOM, parts[0])
    digits = _parse_int(MASK_TYPE_RANDOM, parts[1]) if len(parts) == 2 else 0
    if bound <= 0 or digits < 0:
        raise MaskArgumentError(MASK_TYPE_RANDOM, arg, "bound must be positive")
    scale = 10 ** digits
    return int(rng.random() * bound * scale) / scale


def mask_zero(arg: str, value: Any) -> Any:
    return zero_of(value)
