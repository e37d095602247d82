"""Input coercion, proportion normalisation and interaction reduction.

Normaliser
----------
``normalize_auto`` turns raw category magnitudes into proportions with a
three-way branch:

1. all zero / non-finite total  → all-zero vector
2. already a proportion vector  → values returned unchanged
3. anything else                → each value divided by the total

Branch 2 keeps pre-normalised input idempotent: a vector whose total lies
inside ``(sum_low, sum_high)`` and whose largest entry is at most
``max_value`` is never re-divided.

Interaction reducer
-------------------
``reduce_interactions`` folds the five interaction counts into

    noise   = 0.50·chung + 0.35·hyung + 0.20·pa + 0.20·hae
    connect = 0.60·he

Both are unbounded non-negative linear terms.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Iterable, Optional, Tuple

from .constants import ConstantRegistry, DEFAULT_CONSTANTS

__all__ = [
    "to_finite",
    "as_count",
    "normalize_auto",
    "reduce_interactions",
    "INTERACTION_KEYS",
    "NOISE_KEYS",
]

INTERACTION_KEYS: Tuple[str, ...] = ("he", "chung", "hyung", "pa", "hae")
NOISE_KEYS: Tuple[str, ...] = ("chung", "hyung", "pa", "hae")


# ── coercion ─────────────────────────────────────────────────────

def to_finite(value: Any, default: float = 0.0) -> float:
    """Coerce *value* to a finite float, or return *default*.

    ``None``, unparsable strings, NaN and ±inf all map to *default*.
    """
    if value is None:
        return default
    try:
        x = float(value)
    except (TypeError, ValueError):
        return default
    return x if math.isfinite(x) else default


def as_count(value: Any) -> float:
    """Interaction count: the length of a sequence, else a finite number.

    Counts are never negative; a negative number reads as 0.
    """
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return float(len(value))
    if isinstance(value, (set, frozenset)):
        return float(len(value))
    return max(0.0, to_finite(value))


# ── normaliser ───────────────────────────────────────────────────

def normalize_auto(
    raw: Mapping[str, Any],
    keys: Optional[Iterable[str]] = None,
    constants: ConstantRegistry = DEFAULT_CONSTANTS,
) -> Dict[str, float]:
    """Return a proportion vector over *keys* (default: ``raw``'s keys).

    Keys absent from *raw* are treated as 0.  The output preserves key
    order, and either sums to 1 within floating tolerance or is all zero.
    """
    keys = tuple(raw.keys()) if keys is None else tuple(keys)
    values = [to_finite(raw.get(k)) for k in keys]
    total = sum(values)

    if not math.isfinite(total) or total <= 0:
        return {k: 0.0 for k in keys}

    if (constants["normalize.sum_low"] < total < constants["normalize.sum_high"]
            and max(values) <= constants["normalize.max_value"]):
        return dict(zip(keys, values))

    return {k: v / total for k, v in zip(keys, values)}


# ── interaction reducer ──────────────────────────────────────────

def reduce_interactions(
    interactions: Mapping[str, Any],
    constants: ConstantRegistry = DEFAULT_CONSTANTS,
) -> Tuple[float, float, Dict[str, float]]:
    """Fold interaction counts into ``(noise, connect, counts)``.

    ``counts`` holds the coerced count for every key in
    :data:`INTERACTION_KEYS`.
    """
    weights = constants.section("interaction")
    counts = {k: as_count(interactions.get(k)) for k in INTERACTION_KEYS}
    noise = 0.0
    for key in NOISE_KEYS:
        noise += weights[key] * counts[key]
    connect = weights["he"] * counts["he"]
    return noise, connect, counts
