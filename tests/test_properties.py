"""Property tests for the built-in transforms and the traversal."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import hashlib

import numpy as np
import pytest
from hypothesis import given, strategies as st

from fieldmask import Masker, MaskerConfig
from fieldmask.values import fit_number

masker = Masker()

json_like = st.recursive(
    st.none() | st.booleans() | st.integers() | st.floats(allow_nan=False) | st.text(),
    lambda children: st.lists(children) | st.dictionaries(st.text(), children),
    max_leaves=20,
)


# ── Text ─────────────────────────────────────────────────────────────

@given(st.text())
def test_filled_keeps_length(text):
    out = masker.mask_text("filled", text)
    assert len(out) == len(text)
    assert set(out) <= {"*"}


@given(st.text())
def test_hash_is_sha1(text):
    digest = masker.mask_text("hash", text)
    assert digest == hashlib.sha1(text.encode("utf-8")).hexdigest()
    assert masker.mask_text("hash", digest) != digest


# ── Numbers ──────────────────────────────────────────────────────────

@given(st.integers(min_value=1, max_value=10**9))
def test_random_int_below_bound(bound):
    r = masker.mask_int(f"random{bound}", 0)
    assert 0 <= r < bound


@given(st.integers(min_value=1, max_value=10**6), st.integers(min_value=0, max_value=4))
def test_random_float_below_bound(bound, digits):
    r = masker.mask_float(f"random{bound}.{digits}", 0.0)
    assert 0 <= r < bound


@given(st.integers())
def test_random_reproducible_with_seed(seed):
    a = Masker(MaskerConfig(seed=seed))
    b = Masker(MaskerConfig(seed=seed))
    assert a.mask_int("random1000000", 0) == b.mask_int("random1000000", 0)


@given(st.one_of(st.text(), st.integers(), st.floats(allow_nan=False)))
def test_zero_yields_category_zero(value):
    assert masker.mask({"v": value}) == {"v": value}
    assert Masker(MaskerConfig(field_defaults={"v": "zero"})).mask({"v": value}) == {"v": type(value)()}


@given(st.integers(min_value=-2**70, max_value=2**70))
def test_int8_wraps_like_native(n):
    out = fit_number(n, np.int8(0))
    assert isinstance(out, np.int8)
    assert int(out) == ((n + 128) % 256) - 128


# ── Traversal ────────────────────────────────────────────────────────

@given(json_like)
def test_unannotated_document_unchanged(doc):
    out = masker.mask(doc)
    assert out == doc


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
