"""InputProfile — the validated, coerced engine input.

Two input shapes are accepted by :meth:`InputProfile.from_mapping`:

Flat shape
    ``{"category_a": {...}, "category_b": {...}, "strength": 62,
    "interactions": {"he": 1, "chung": 0, ...}}``
    (``categorySetA`` / ``categorySetB`` are accepted as aliases).

Base-state shape
    ``{"vectors": {"tenGods": {"비겁": ..., ...}, "elements": {...}},
    "strength": {"score": 62}, "interactions": {"합": 1, "충": [...], ...}}``
    as produced by the upstream profile builder.

Missing magnitudes become 0, an invalid strength becomes the default (50),
and interaction values may be counts or sequences.  A vector group that is
missing, or holds none of the recognised keys, is *not* an error: it is
recorded in :attr:`InputProfile.diagnostics` and zero-filled.  Keys a group
carries beyond the recognised ones are named in a diagnostic and ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .normalization import INTERACTION_KEYS, as_count, to_finite

__all__ = [
    "InputProfile",
    "CATEGORY_A_KEYS",
    "CATEGORY_B_KEYS",
]

logger = logging.getLogger(__name__)

CATEGORY_A_KEYS: Tuple[str, ...] = (
    "bigyeop", "siksang", "jaeseong", "gwanseong", "inseong",
)
CATEGORY_B_KEYS: Tuple[str, ...] = ("wood", "fire", "earth", "metal", "water")

DEFAULT_STRENGTH: float = 50.0

_KEY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "bigyeop": ("비겁",),
    "siksang": ("식상",),
    "jaeseong": ("재성",),
    "gwanseong": ("관성",),
    "inseong": ("인성",),
    "he": ("합",),
    "chung": ("충",),
    "hyung": ("형",),
    "pa": ("파",),
    "hae": ("해",),
}


def _lookup(source: Mapping, key: str) -> Any:
    """Read *key* or the first of its aliases present in *source*."""
    if key in source:
        return source[key]
    for alias in _KEY_ALIASES.get(key, ()):
        if alias in source:
            return source[alias]
    return None


def _first_group(data: Mapping, *names: str) -> Optional[Any]:
    for name in names:
        if name in data:
            return data[name]
    return None


@dataclass(frozen=True)
class InputProfile:
    """Coerced engine input.

    Parameters
    ----------
    category_a : dict[str, float]
        Raw magnitudes keyed by :data:`CATEGORY_A_KEYS`.
    category_b : dict[str, float]
        Raw magnitudes keyed by :data:`CATEGORY_B_KEYS`.
    strength : float
        Overall intensity, nominally 0–100.
    interactions : dict[str, float]
        Counts keyed by :data:`~intuition_engine.normalization.INTERACTION_KEYS`.
    diagnostics : tuple of str
        Non-fatal problems found while reading the input.
    """

    category_a: Dict[str, float]
    category_b: Dict[str, float]
    strength: float = DEFAULT_STRENGTH
    interactions: Dict[str, float] = field(default_factory=dict)
    diagnostics: Tuple[str, ...] = ()

    @classmethod
    def from_mapping(
        cls,
        data: Any,
        default_strength: float = DEFAULT_STRENGTH,
    ) -> "InputProfile":
        """Build a profile from either accepted input shape.

        Raises
        ------
        TypeError
            If *data* is not a mapping.
        """
        if not isinstance(data, Mapping):
            raise TypeError(
                f"profile must be a mapping, got {type(data).__name__}")

        diagnostics: List[str] = []
        vectors = data.get("vectors")
        if not isinstance(vectors, Mapping):
            vectors = {}

        group_a = _first_group(data, "category_a", "categorySetA")
        if group_a is None:
            group_a = vectors.get("tenGods")
        group_b = _first_group(data, "category_b", "categorySetB")
        if group_b is None:
            group_b = vectors.get("elements")

        category_a = cls._read_group(group_a, CATEGORY_A_KEYS,
                                     "category_a", diagnostics)
        category_b = cls._read_group(group_b, CATEGORY_B_KEYS,
                                     "category_b", diagnostics)

        raw_strength = data.get("strength")
        if isinstance(raw_strength, Mapping):
            raw_strength = raw_strength.get("score")
        strength = to_finite(raw_strength, default=default_strength)

        raw_interactions = data.get("interactions")
        if not isinstance(raw_interactions, Mapping):
            raw_interactions = {}
        interactions = {
            k: as_count(_lookup(raw_interactions, k)) for k in INTERACTION_KEYS
        }

        for message in diagnostics:
            logger.warning(message)

        return cls(
            category_a=category_a,
            category_b=category_b,
            strength=strength,
            interactions=interactions,
            diagnostics=tuple(diagnostics),
        )

    @staticmethod
    def _read_group(
        group: Any,
        keys: Tuple[str, ...],
        label: str,
        diagnostics: List[str],
    ) -> Dict[str, float]:
        if not isinstance(group, Mapping):
            diagnostics.append(
                f"{label} vector missing or not a mapping; using zeros")
            return {k: 0.0 for k in keys}

        known = set(keys)
        for k in keys:
            known.update(_KEY_ALIASES.get(k, ()))
        unknown = sorted(str(k) for k in group if k not in known)
        if len(unknown) == len(group):
            detail = f" (got: {', '.join(unknown)})" if unknown else ""
            diagnostics.append(
                f"{label} vector has no recognised keys{detail}; using zeros")
        elif unknown:
            diagnostics.append(
                f"{label} vector: ignoring unrecognised keys {', '.join(unknown)}")
        return {k: to_finite(_lookup(group, k)) for k in keys}
