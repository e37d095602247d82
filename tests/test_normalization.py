"""Tests for input coercion, normalize_auto and reduce_interactions.

Covers:
1. to_finite / as_count — coercion of odd inputs
2. normalize_auto — three branches, idempotence, sum invariant
3. reduce_interactions — noise / connect weights
"""

import math
import pytest

from intuition_engine.constants import DEFAULT_CONSTANTS
from intuition_engine.normalization import (
    INTERACTION_KEYS,
    as_count,
    normalize_auto,
    reduce_interactions,
    to_finite,
)


# ═══════════════════════════════════════════════════════════════════
# 1. Coercion
# ═══════════════════════════════════════════════════════════════════

class TestCoercion:

    @pytest.mark.parametrize("value, expected", [
        (3, 3.0),
        (2.5, 2.5),
        ("4", 4.0),
        (None, 0.0),
        ("abc", 0.0),
        (float("nan"), 0.0),
        (-4, 0.0),
        ("-2.5", 0.0),
        (float("inf"), 0.0),
        (-float("inf"), 0.0),
        ([1, 2], 0.0),
    ])
    def test_to_finite(self, value, expected):
        assert to_finite(value) == expected

    def test_to_finite_custom_default(self):
        assert to_finite(None, default=50.0) == 50.0

    @pytest.mark.parametrize("value, expected", [
        ([], 0.0),
        (["a", "b", "c"], 3.0),
        (("x",), 1.0),
        ({"p", "q"}, 2.0),
        (4, 4.0),
        ("2", 2.0),
        ("many", 0.0),
        (None, 0.0),
        (float("nan"), 0.0),
        (-4, 0.0),
        ("-2.5", 0.0),
    ])
    def test_as_count(self, value, expected):
        assert as_count(value) == expected


# ═══════════════════════════════════════════════════════════════════
# 2. normalize_auto
# ═══════════════════════════════════════════════════════════════════

KEYS = ("wood", "fire", "earth", "metal", "water")


class TestNormalizeBranches:

    def test_all_zero_returns_zero_vector(self):
        out = normalize_auto({k: 0 for k in KEYS})
        assert out == {k: 0.0 for k in KEYS}

    def test_all_missing_returns_zero_vector(self):
        out = normalize_auto({}, KEYS)
        assert out == {k: 0.0 for k in KEYS}

    def test_non_finite_entries_become_zero(self):
        out = normalize_auto({"wood": float("nan"), "fire": 2, "earth": None,
                              "metal": float("inf"), "water": 2})
        assert out == {"wood": 0.0, "fire": 0.5, "earth": 0.0,
                       "metal": 0.0, "water": 0.5}

    def test_negative_total_returns_zero_vector(self):
        out = normalize_auto({"wood": -3, "fire": 1})
        assert out == {"wood": 0.0, "fire": 0.0}

    def test_raw_magnitudes_divided_by_total(self):
        out = normalize_auto({"wood": 3, "fire": 1, "earth": 0, "metal": 0, "water": 4})
        assert out["wood"] == pytest.approx(0.375)
        assert out["fire"] == pytest.approx(0.125)
        assert out["water"] == pytest.approx(0.5)

    def test_near_proportion_returned_unchanged(self):
        raw = {"wood": 0.3, "fire": 0.2, "earth": 0.2, "metal": 0.1, "water": 0.22}
        out = normalize_auto(raw)
        assert out == raw  # total 1.02 — inside the window, not re-divided

    def test_large_entry_forces_division(self):
        # total within the window but one entry above max_value
        out = normalize_auto({"wood": 1.02, "fire": 0.0})
        assert out["wood"] == pytest.approx(1.0)
        assert out["fire"] == 0.0

    def test_total_outside_window_is_divided(self):
        out = normalize_auto({"wood": 0.5, "fire": 0.56})
        assert sum(out.values()) == pytest.approx(1.0)

    def test_missing_key_treated_as_zero(self):
        out = normalize_auto({"wood": 1, "fire": 1, "earth": 1, "metal": 1}, KEYS)
        assert out["water"] == 0.0
        assert out["wood"] == pytest.approx(0.25)
        assert sum(out.values()) == pytest.approx(1.0)

    def test_key_order_preserved(self):
        out = normalize_auto({"water": 1, "wood": 1}, KEYS)
        assert tuple(out) == KEYS


class TestNormalizeProperties:

    VECTORS = [
        {"a": 3, "b": 1},
        {"a": 1, "b": 1, "c": 1, "d": 1, "e": 1},
        {"a": 0.001, "b": 0.002, "c": 0.0},
        {"a": 120, "b": 30, "c": 50, "d": 0, "e": 7},
        {"a": 0.2, "b": 0.2, "c": 0.2, "d": 0.2, "e": 0.2},
        {"a": 0, "b": 0, "c": 0},
        {"a": 5},
    ]

    @pytest.mark.parametrize("vec", VECTORS)
    def test_idempotence(self, vec):
        once = normalize_auto(vec)
        twice = normalize_auto(once)
        for k in once:
            assert twice[k] == pytest.approx(once[k], abs=1e-12)

    @pytest.mark.parametrize("vec", VECTORS)
    def test_sum_is_zero_or_one(self, vec):
        total = sum(normalize_auto(vec).values())
        assert total == 0.0 or abs(total - 1.0) <= 1e-6

    @pytest.mark.parametrize("vec", VECTORS)
    def test_non_negative(self, vec):
        assert all(v >= 0 for v in normalize_auto(vec).values())

    def test_uniform_gives_exact_fifths(self):
        out = normalize_auto({k: 1 for k in KEYS})
        assert all(v == 0.2 for v in out.values())


# ═══════════════════════════════════════════════════════════════════
# 3. reduce_interactions
# ═══════════════════════════════════════════════════════════════════

class TestReduceInteractions:

    def test_keys(self):
        assert INTERACTION_KEYS == ("he", "chung", "hyung", "pa", "hae")

    def test_empty(self):
        noise, connect, counts = reduce_interactions({})
        assert noise == 0.0
        assert connect == 0.0
        assert counts == {k: 0.0 for k in INTERACTION_KEYS}

    def test_chung_four_gives_noise_two(self):
        noise, connect, _ = reduce_interactions({"chung": 4})
        assert noise == 2.0
        assert connect == 0.0

    def test_weights(self):
        noise, connect, _ = reduce_interactions(
            {"chung": 1, "hyung": 1, "pa": 1, "hae": 1, "he": 2})
        assert noise == pytest.approx(0.50 + 0.35 + 0.20 + 0.20)
        assert connect == pytest.approx(1.20)

    def test_sequences_counted_by_length(self):
        noise, connect, counts = reduce_interactions(
            {"hyung": ["a-b", "c-d"], "he": [("x", "y")]})
        assert counts["hyung"] == 2.0
        assert noise == pytest.approx(0.70)
        assert connect == pytest.approx(0.60)

    def test_invalid_counts_are_zero(self):
        noise, _, counts = reduce_interactions({"chung": "lots", "pa": None})
        assert noise == 0.0
        assert counts["chung"] == 0.0

    def test_negative_counts_never_make_noise_negative(self):
        noise, connect, counts = reduce_interactions({"chung": -4, "he": -1})
        assert noise == 0.0
        assert connect == 0.0
        assert counts["chung"] == 0.0

    def test_custom_weights(self):
        reg = DEFAULT_CONSTANTS.replace({"interaction.he": 1.0})
        _, connect, _ = reduce_interactions({"he": 3}, reg)
        assert connect == 3.0
        assert math.isfinite(connect)
