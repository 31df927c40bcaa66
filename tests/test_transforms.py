"""Tests for the built-in transforms."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import random

import pytest

from fieldmask.errors import MaskArgumentError
from fieldmask.transforms import (
    FIXED_LENGTH, mask_filled, mask_fixed, mask_hash, mask_random_float, mask_random_int, mask_zero,
)


# ── Text ─────────────────────────────────────────────────────────────

def test_filled_counts_code_points():
    assert mask_filled("", "ヤハッ！", "*") == "****"
    assert mask_filled("", "", "*") == ""


def test_filled_with_length():
    assert mask_filled("3", "abcdef", "*") == "***"
    assert mask_filled("0", "abcdef", "*") == ""


def test_filled_with_multichar_mask():
    assert mask_filled("", "ab", "■") == "■■"


def test_fixed_ignores_input():
    assert mask_fixed("", "a", "*") == "*" * FIXED_LENGTH
    assert mask_fixed("", "a very long value indeed", "#") == "########"


@pytest.mark.parametrize("text,digest", [
    ("ヤハッ！", "a6ab5728db57954641b2e155adc61f2cbdfc7063"),
    ("ハァ？", "48a8b33f36a35631f584844686adaba89a6f156a"),
    ("ウラ", "ecef3e43f07f7150c089e99d5e1041259b1189d5"),
    ("フゥン", "17fa078ad3f2c34c17ee58b9119963548ddcf1ef"),
])
def test_hash_known_values(text, digest):
    assert mask_hash("", text) == digest


# ── Random ───────────────────────────────────────────────────────────

def test_random_int_in_range():
    rng = random.Random(1)
    values = [mask_random_int("10", 0, rng) for _ in range(200)]
    assert all(0 <= v < 10 for v in values)
    assert len(set(values)) > 1


def test_random_int_reproducible():
    a = [mask_random_int("1000", 0, random.Random(5)) for _ in range(3)]
    b = [mask_random_int("1000", 0, random.Random(5)) for _ in range(3)]
    assert a == b


def test_random_float_decimals():
    rng = random.Random(2)
    for _ in range(200):
        v = mask_random_float("100.2", 0.0, rng)
        assert 0 <= v < 100
        assert round(v, 2) == v


def test_random_float_without_decimals():
    v = mask_random_float("100", 0.0, random.Random(3))
    assert v == int(v)


@pytest.mark.parametrize("arg", ["", "abc", "0", "-5", "1.5e3"])
def test_random_int_bad_argument(arg):
    with pytest.raises(MaskArgumentError):
        mask_random_int(arg, 0, random.Random())


@pytest.mark.parametrize("arg", ["1.2.3", "x.2", "10.y", "0.2", "10.-1"])
def test_random_float_bad_argument(arg):
    with pytest.raises(MaskArgumentError):
        mask_random_float(arg, 0.0, random.Random())


def test_argument_error_fields():
    with pytest.raises(MaskArgumentError) as exc:
        mask_random_int("abc", 0, random.Random())
    err = exc.value
    assert err.mask_type == "random"
    assert err.argument == "abc"
    assert err.annotation == "randomabc"
    assert "randomabc" in str(err)


def test_filled_bad_argument():
    with pytest.raises(MaskArgumentError):
        mask_filled("x", "abc", "*")


# ── Zero ─────────────────────────────────────────────────────────────

def test_zero_values():
    assert mask_zero("", "abc") == ""
    assert mask_zero("", 12) == 0
    assert mask_zero("", 1.5) == 0.0
    assert mask_zero("", [1, 2]) is None
    assert mask_zero("", None) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
