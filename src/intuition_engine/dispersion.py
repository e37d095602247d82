"""Concentration and spread measures over a proportion vector.

Observables
-----------
dominance   D(p) = max(p) − mean(p)
entropy     H(p) = −Σ p·ln(max(p, ε))        ε = 1e-9
spike       S    = w_A·D(p_A) + w_B·D(p_B)   w = (0.6, 0.4)

A uniform vector has D = 0 and H = ln(n); a one-hot vector has
D = 1 − 1/n and H = 0.  The all-zero vector yields D = H = 0.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Sequence, Union

import numpy as np

from .constants import ConstantRegistry, DEFAULT_CONSTANTS

__all__ = [
    "dominance",
    "entropy",
    "spike",
]

VectorLike = Union[Mapping, Sequence[float], np.ndarray]


def _as_array(vector: VectorLike) -> np.ndarray:
    if isinstance(vector, Mapping):
        vector = list(vector.values())
    return np.asarray(vector, dtype=float)


def dominance(vector: VectorLike) -> float:
    """Largest proportion minus the mean proportion (0 for empty input)."""
    p = _as_array(vector)
    if p.size == 0:
        return 0.0
    return float(np.max(p) - np.mean(p))


def entropy(vector: VectorLike, eps: float = 1e-9) -> float:
    """Shannon entropy in nats, with ``ln(0)`` guarded by *eps*."""
    p = _as_array(vector)
    if p.size == 0:
        return 0.0
    return float(np.sum(-p * np.log(np.maximum(p, eps))))


def spike(
    vector_a: VectorLike,
    vector_b: VectorLike,
    constants: ConstantRegistry = DEFAULT_CONSTANTS,
) -> float:
    """Weighted blend of the two dominance values."""
    return (constants["spike.weight_a"] * dominance(vector_a)
            + constants["spike.weight_b"] * dominance(vector_b))
