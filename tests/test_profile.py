"""Tests for InputProfile.from_mapping — both input shapes and diagnostics."""

import logging
import pytest

from intuition_engine.profile import CATEGORY_A_KEYS, CATEGORY_B_KEYS, InputProfile


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════

@pytest.fixture
def flat_mapping():
    return {
        "category_a": {"bigyeop": 2, "siksang": 1, "jaeseong": 1,
                       "gwanseong": 3, "inseong": 1},
        "category_b": {"wood": 2, "fire": 1, "earth": 2, "metal": 1, "water": 2},
        "strength": 64,
        "interactions": {"he": 1, "chung": 2, "hyung": 0, "pa": 0, "hae": 1},
    }


@pytest.fixture
def base_state_mapping():
    return {
        "vectors": {
            "tenGods": {"비겁": 2, "식상": 1, "재성": 1, "관성": 3, "인성": 1},
            "elements": {"wood": 2, "fire": 1, "earth": 2, "metal": 1, "water": 2},
        },
        "strength": {"score": 64},
        "interactions": {"합": ["a-b"], "충": ["c-d", "e-f"], "형": [],
                         "파": [], "해": ["g-h"]},
    }


# ═══════════════════════════════════════════════════════════════════
# Shapes
# ═══════════════════════════════════════════════════════════════════

class TestShapes:

    def test_flat(self, flat_mapping):
        p = InputProfile.from_mapping(flat_mapping)
        assert tuple(p.category_a) == CATEGORY_A_KEYS
        assert tuple(p.category_b) == CATEGORY_B_KEYS
        assert p.category_a["gwanseong"] == 3.0
        assert p.strength == 64.0
        assert p.interactions["chung"] == 2.0
        assert p.diagnostics == ()

    def test_base_state_equivalent_to_flat(self, flat_mapping, base_state_mapping):
        a = InputProfile.from_mapping(flat_mapping)
        b = InputProfile.from_mapping(base_state_mapping)
        assert a == b

    def test_camel_case_aliases(self, flat_mapping):
        data = dict(flat_mapping)
        data["categorySetA"] = data.pop("category_a")
        data["categorySetB"] = data.pop("category_b")
        p = InputProfile.from_mapping(data)
        assert p.category_a["bigyeop"] == 2.0
        assert p.diagnostics == ()


# ═══════════════════════════════════════════════════════════════════
# Coercion
# ═══════════════════════════════════════════════════════════════════

class TestCoercion:

    def test_missing_magnitude_is_zero(self, flat_mapping):
        del flat_mapping["category_b"]["water"]
        p = InputProfile.from_mapping(flat_mapping)
        assert p.category_b["water"] == 0.0

    def test_non_numeric_magnitude_is_zero(self, flat_mapping):
        flat_mapping["category_a"]["inseong"] = "n/a"
        p = InputProfile.from_mapping(flat_mapping)
        assert p.category_a["inseong"] == 0.0

    @pytest.mark.parametrize("strength", [None, "strong", float("nan")])
    def test_invalid_strength_defaults(self, flat_mapping, strength):
        flat_mapping["strength"] = strength
        assert InputProfile.from_mapping(flat_mapping).strength == 50.0

    def test_missing_strength_defaults(self, flat_mapping):
        del flat_mapping["strength"]
        assert InputProfile.from_mapping(flat_mapping).strength == 50.0

    def test_zero_strength_kept(self, flat_mapping):
        flat_mapping["strength"] = 0
        assert InputProfile.from_mapping(flat_mapping).strength == 0.0

    def test_missing_interactions(self, flat_mapping):
        del flat_mapping["interactions"]
        p = InputProfile.from_mapping(flat_mapping)
        assert all(v == 0.0 for v in p.interactions.values())


# ═══════════════════════════════════════════════════════════════════
# Diagnostics and hard failures
# ═══════════════════════════════════════════════════════════════════

class TestDiagnostics:

    def test_missing_group_is_soft(self, flat_mapping, caplog):
        del flat_mapping["category_a"]
        with caplog.at_level(logging.WARNING, logger="intuition_engine.profile"):
            p = InputProfile.from_mapping(flat_mapping)
        assert p.category_a == {k: 0.0 for k in CATEGORY_A_KEYS}
        assert len(p.diagnostics) == 1
        assert "category_a" in p.diagnostics[0]
        assert "category_a" in caplog.text

    def test_both_groups_missing(self):
        p = InputProfile.from_mapping({})
        assert len(p.diagnostics) == 2
        assert p.strength == 50.0

    def test_non_mapping_group_is_soft(self, flat_mapping):
        flat_mapping["category_b"] = [1, 2, 3]
        p = InputProfile.from_mapping(flat_mapping)
        assert p.category_b == {k: 0.0 for k in CATEGORY_B_KEYS}
        assert "category_b" in p.diagnostics[0]

    def test_unrecognised_keys_are_reported(self, flat_mapping, caplog):
        flat_mapping["categorySetA"] = {"a": 1, "b": 1, "c": 1, "d": 1, "e": 1}
        del flat_mapping["category_a"]
        with caplog.at_level(logging.WARNING, logger="intuition_engine.profile"):
            p = InputProfile.from_mapping(flat_mapping)
        assert p.category_a == {k: 0.0 for k in CATEGORY_A_KEYS}
        assert len(p.diagnostics) == 1
        assert "no recognised keys" in p.diagnostics[0]
        assert "a, b, c, d, e" in p.diagnostics[0]
        assert "category_a" in caplog.text

    def test_empty_group_is_reported(self, flat_mapping):
        flat_mapping["category_b"] = {}
        p = InputProfile.from_mapping(flat_mapping)
        assert p.diagnostics == ("category_b vector has no recognised keys; using zeros",)

    def test_extra_keys_are_named(self, flat_mapping):
        flat_mapping["category_b"]["aether"] = 3
        p = InputProfile.from_mapping(flat_mapping)
        assert p.category_b["wood"] == 2.0
        assert p.diagnostics == (
            "category_b vector: ignoring unrecognised keys aether",)

    def test_korean_aliases_are_recognised(self, base_state_mapping):
        assert InputProfile.from_mapping(base_state_mapping).diagnostics == ()

    @pytest.mark.parametrize("bad", [None, [], "profile", 42])
    def test_non_mapping_profile_raises(self, bad):
        with pytest.raises(TypeError):
            InputProfile.from_mapping(bad)
