"""ConstantRegistry — the tunable numbers of one formula generation.

Keys are ``group.name`` (``"transform.gain"``, ``"scale.timing"``) or
``group.sub.name`` (``"spike.coupling.insight"``).  Pipeline stages read
single values by key, or a whole group with :meth:`ConstantRegistry.section`:

>>> DEFAULT_CONSTANTS.section("interaction")
{'chung': 0.5, 'hyung': 0.35, 'pa': 0.2, 'hae': 0.2, 'he': 0.6}
>>> DEFAULT_CONSTANTS.section("spike.coupling")["insight"]
0.0

A generation is derived from the canonical one with ``replace`` and
compared with ``diff``:

>>> gain42 = DEFAULT_CONSTANTS.replace({"transform.gain": 42}, name="gain42")
>>> gain42.diff(DEFAULT_CONSTANTS)
{'transform.gain': (42.0, 38.0)}

Metric coefficients, pattern rules and grade ladders are tables of their
own and are not held here.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

__all__ = [
    "ConstantRegistry",
    "DEFAULT_CONSTANTS",
]


class ConstantRegistry:
    """Read-only ``key → float`` table.

    Registries compare and hash by their values, not their names, so two
    generations with identical numbers are interchangeable.
    """

    __slots__ = ("_values", "_name")

    def __init__(self, values: Mapping[str, float], *, name: str = "custom"):
        self._values = MappingProxyType(
            {key: float(v) for key, v in values.items()})
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> float:
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __setitem__(self, key: str, value: float):
        raise TypeError(
            f"{self._name!r} constants are read-only; derive a new "
            f"registry with replace()")

    def get(self, key: str, default: float = 0.0) -> float:
        return self._values.get(key, default)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstantRegistry):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"ConstantRegistry({self._name!r}, {len(self._values)} keys)"

    def section(self, group: str) -> Dict[str, float]:
        """Values under *group*, keyed by the remainder of their key.

        ``section("spike")`` holds ``weight_a`` and ``coupling.insight``;
        ``section("spike.coupling")`` holds ``insight`` … ``premonition``.
        """
        prefix = group + "."
        return {
            key[len(prefix):]: v
            for key, v in self._values.items() if key.startswith(prefix)
        }

    def replace(
        self,
        overrides: Mapping[str, float],
        *,
        name: Optional[str] = None,
    ) -> "ConstantRegistry":
        """Derive a registry with *overrides* applied to existing keys.

        Raises
        ------
        KeyError
            If an override names an unknown key.
        """
        unknown = sorted(set(overrides) - set(self._values))
        if unknown:
            raise KeyError(
                f"Unknown constant key(s) {unknown} for {self._name!r}")
        values = dict(self._values)
        values.update(overrides)
        return ConstantRegistry(values, name=name or f"{self._name}+")

    def diff(
        self, base: "ConstantRegistry",
    ) -> Dict[str, Tuple[Optional[float], Optional[float]]]:
        """``{key: (own value, base value)}`` for every key that differs.

        A key present on one side only pairs with ``None``.
        """
        keys = sorted(set(self._values) | set(base._values))
        pairs = ((k, self._values.get(k), base._values.get(k)) for k in keys)
        return {k: (mine, theirs) for k, mine, theirs in pairs if mine != theirs}


# ── canonical generation ──────────────────────────────────────────

_DEFAULT_DATA: Dict[str, float] = {
    # score = clamp(center + gain·tanh(raw / scale), floor, ceiling)
    "transform.center": 50.0,
    "transform.gain": 38.0,
    "transform.floor": 1.0,
    "transform.ceiling": 99.0,
    "scale.insight": 0.45,
    "scale.timing": 0.50,
    "scale.sensitivity": 0.45,
    "scale.premonition": 0.50,
    "scale.risk": 0.55,

    # blended = max_weight·max(raw) + mean_weight·mean(raw)
    "blend.max_weight": 0.7,
    "blend.mean_weight": 0.3,

    # noise = Σ weight·count over chung/hyung/pa/hae; connect = he·count
    "interaction.chung": 0.50,
    "interaction.hyung": 0.35,
    "interaction.pa": 0.20,
    "interaction.hae": 0.20,
    "interaction.he": 0.60,

    "dispersion.epsilon": 1e-9,

    # spike = weight_a·dominance(A) + weight_b·dominance(B); coupling adds
    # coupling·spike to every style raw of that category
    "spike.weight_a": 0.6,
    "spike.weight_b": 0.4,
    "spike.coupling.insight": 0.0,
    "spike.coupling.timing": 0.0,
    "spike.coupling.sensitivity": 0.0,
    "spike.coupling.premonition": 0.0,

    # vectors summing inside (sum_low, sum_high) are taken as proportions
    "normalize.sum_low": 0.95,
    "normalize.sum_high": 1.05,
    "normalize.max_value": 1.01,

    "patterns.max_fired": 2.0,

    # strength_preserving = top_weight·mean(top_n) + all_weight·mean(all)
    "aggregate.top_n": 2.0,
    "aggregate.top_weight": 0.6,
    "aggregate.all_weight": 0.4,

    "strength.default": 50.0,
    "strength.pivot": 50.0,
}


DEFAULT_CONSTANTS: ConstantRegistry = ConstantRegistry(
    _DEFAULT_DATA, name="classic",
)
"""The canonical constant registry (gain 38, no spike coupling)."""
