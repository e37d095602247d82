"""EngineProfile — one versioned configuration of the formula pipeline.

The formula set went through several generations that share the metric
and pattern tables but differ in a handful of knobs.  Each generation is
a named :class:`EngineProfile`; the pipeline itself is never duplicated.

==============  =====  ====================  ==========  ==============
Profile         Gain   Aggregation           Ladder      Spike coupling
==============  =====  ====================  ==========  ==============
``classic``     38     mean                  five-band   off
``balanced``    42     strength_preserving   five-band   off
``dispersion``  42     strength_preserving   seven-band  insight, premonition
``classic-ko``  38     mean                  five-band   off
==============  =====  ====================  ==========  ==============

``classic-ko`` is ``classic`` reported in Korean: grades, metric, style,
pattern and composite names all use their Korean labels.

``classic`` is canonical and is what :func:`~intuition_engine.compute`
uses unless told otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from .aggregate import AGGREGATION_POLICIES, COMPOSITES, CompositeSpec
from .classify import FIVE_BAND, FIVE_BAND_KO, SEVEN_BAND, GradeLadder
from .constants import ConstantRegistry, DEFAULT_CONSTANTS
from .metrics import LOCALES, METRICS, MetricSpec
from .patterns import PATTERN_RULES, PatternRule

__all__ = [
    "EngineProfile",
    "PROFILES",
    "DEFAULT_PROFILE",
    "get_profile",
]


@dataclass(frozen=True)
class EngineProfile:
    """Bundle of everything that varies between formula generations.

    Parameters
    ----------
    name : str
        Profile label, echoed in every report.
    constants : ConstantRegistry
        Gain, scales, weights and tolerances.
    aggregation : str
        ``"mean"`` or ``"strength_preserving"``.
    ladder : GradeLadder
        Classifier used for every grade / percentile lookup.
    metrics, patterns, composites
        Static tables; override for what-if runs.
    locale : str
        ``"en"`` or ``"ko"``; the language of every reported label.
    """

    name: str
    constants: ConstantRegistry = DEFAULT_CONSTANTS
    aggregation: str = "mean"
    ladder: GradeLadder = FIVE_BAND
    metrics: Tuple[MetricSpec, ...] = METRICS
    patterns: Tuple[PatternRule, ...] = PATTERN_RULES
    composites: Tuple[CompositeSpec, ...] = COMPOSITES
    locale: str = "en"

    def __post_init__(self):
        if self.locale not in LOCALES:
            raise ValueError(
                f"Unknown locale {self.locale!r}; expected one of {LOCALES}")
        if self.aggregation not in AGGREGATION_POLICIES:
            raise ValueError(
                f"Unknown aggregation policy {self.aggregation!r}; "
                f"expected one of {AGGREGATION_POLICIES}")
        ids = [m.id for m in self.metrics]
        if len(set(ids)) != len(ids):
            raise ValueError(f"profile {self.name!r} has duplicate metric ids")

    def derive(self, name: str, **changes: Any) -> "EngineProfile":
        """Return a copy with *changes* applied under a new *name*."""
        return replace(self, name=name, **changes)

    @property
    def overrides(self) -> Dict[str, float]:
        """Constants that differ from :data:`DEFAULT_CONSTANTS`."""
        return {
            key: mine
            for key, (mine, _) in self.constants.diff(DEFAULT_CONSTANTS).items()
        }


_CLASSIC = EngineProfile(name="classic")

_BALANCED = EngineProfile(
    name="balanced",
    constants=DEFAULT_CONSTANTS.replace(
        {"transform.gain": 42.0}, name="balanced"),
    aggregation="strength_preserving",
)

_DISPERSION = EngineProfile(
    name="dispersion",
    constants=DEFAULT_CONSTANTS.replace({
        "transform.gain": 42.0,
        "spike.coupling.insight": 0.10,
        "spike.coupling.premonition": 0.10,
    }, name="dispersion"),
    aggregation="strength_preserving",
    ladder=SEVEN_BAND,
)

_CLASSIC_KO = _CLASSIC.derive(
    "classic-ko", ladder=FIVE_BAND_KO, locale="ko")


PROFILES: Mapping[str, EngineProfile] = MappingProxyType({
    p.name: p for p in (_CLASSIC, _BALANCED, _DISPERSION, _CLASSIC_KO)
})
"""Read-only registry of the named profiles."""

DEFAULT_PROFILE: EngineProfile = _CLASSIC


def get_profile(name: str) -> EngineProfile:
    """Look up a named profile.

    Raises
    ------
    KeyError
        If *name* is not a registered profile.
    """
    try:
        return PROFILES[name]
    except KeyError:
        raise KeyError(
            f"Unknown engine profile {name!r}. "
            f"Valid profiles: {sorted(PROFILES)}"
        ) from None
