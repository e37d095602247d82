"""SignalState — every derived scalar a formula or pattern may read.

Signals are addressed by dotted name:

==================  ==============================================
Name                Meaning
==================  ==============================================
``a.<key>``         normalised category-A proportion
``b.<key>``         normalised category-B proportion
``noise``           destabilising interaction total
``connect``         stabilising interaction total
``spike``           blended dominance of both vectors
``dominance_a/b``   dominance of one vector
``entropy_a/b``     entropy of one vector
``strength``        raw strength (0–100)
``strength_index``  ``(strength − pivot) / pivot``
``count.<key>``     raw interaction count
==================  ==============================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .constants import ConstantRegistry, DEFAULT_CONSTANTS
from .dispersion import dominance, entropy, spike
from .normalization import normalize_auto, reduce_interactions
from .profile import CATEGORY_A_KEYS, CATEGORY_B_KEYS, InputProfile

__all__ = [
    "SignalState",
    "derive_signals",
]


@dataclass(frozen=True)
class SignalState:
    """Derived scalars for one profile."""

    a: Dict[str, float]
    b: Dict[str, float]
    noise: float = 0.0
    connect: float = 0.0
    spike: float = 0.0
    dominance_a: float = 0.0
    dominance_b: float = 0.0
    entropy_a: float = 0.0
    entropy_b: float = 0.0
    strength: float = 50.0
    strength_index: float = 0.0
    counts: Dict[str, float] = field(default_factory=dict)

    def __getitem__(self, name: str) -> float:
        """Read a signal by dotted name (see module docstring)."""
        group, dot, key = name.partition(".")
        if dot:
            if group == "a":
                return self.a[key]
            if group == "b":
                return self.b[key]
            if group == "count":
                return self.counts.get(key, 0.0)
            raise KeyError(f"Unknown signal group {group!r} in {name!r}")
        value = getattr(self, name, None)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise KeyError(f"Unknown signal {name!r}")
        return float(value)

    def to_dict(self) -> Dict[str, float]:
        """Return a JSON-safe flat dict of every signal."""
        out: Dict[str, float] = {}
        out.update({f"a.{k}": round(v, 6) for k, v in self.a.items()})
        out.update({f"b.{k}": round(v, 6) for k, v in self.b.items()})
        for name in ("noise", "connect", "spike", "dominance_a",
                     "dominance_b", "entropy_a", "entropy_b",
                     "strength", "strength_index"):
            out[name] = round(getattr(self, name), 6)
        out.update({f"count.{k}": v for k, v in self.counts.items()})
        return out


def derive_signals(
    profile: InputProfile,
    constants: ConstantRegistry = DEFAULT_CONSTANTS,
) -> SignalState:
    """Normalise the vectors and reduce the interactions of *profile*."""
    a = normalize_auto(profile.category_a, CATEGORY_A_KEYS, constants)
    b = normalize_auto(profile.category_b, CATEGORY_B_KEYS, constants)
    noise, connect, counts = reduce_interactions(profile.interactions, constants)
    eps = constants["dispersion.epsilon"]
    pivot = constants["strength.pivot"]
    strength = float(profile.strength)

    return SignalState(
        a=a,
        b=b,
        noise=noise,
        connect=connect,
        spike=spike(a, b, constants),
        dominance_a=dominance(a),
        dominance_b=dominance(b),
        entropy_a=entropy(a, eps),
        entropy_b=entropy(b, eps),
        strength=strength,
        strength_index=(strength - pivot) / pivot if pivot else 0.0,
        counts=counts,
    )
