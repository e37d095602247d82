"""IntuitionEngine — profile in, report out.

::

    InputProfile
        ↓ derive_signals     (normalise A/B, reduce interactions, dispersion)
    SignalState
        ↓ score_metric × 20  (compose → blend → tanh → patterns → classify)
    SubMetricResult × 20
        ↓ category_averages, composite_scores
    Report

Every call is a pure function of the input and the engine profile; the
engine holds no state beyond its (immutable) profile and may be shared
freely.

Usage
-----
>>> from intuition_engine import IntuitionEngine, compute
>>> report = compute({"category_a": {...}, "category_b": {...},
...                   "strength": 55, "interactions": {"chung": 1}})
>>> engine = IntuitionEngine("balanced")
>>> engine.compute(profile).overall["business"].score
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from .aggregate import category_averages, composite_scores
from .patterns import rules_for
from .profile import InputProfile
from .profiles import DEFAULT_PROFILE, EngineProfile, get_profile
from .report import Report
from .scoring import score_metric
from .signals import derive_signals

__all__ = [
    "IntuitionEngine",
    "compute",
]

logger = logging.getLogger(__name__)

ProfileLike = Union[InputProfile, Mapping[str, Any]]


class IntuitionEngine:
    """Formula pipeline bound to one :class:`EngineProfile`.

    Parameters
    ----------
    profile : EngineProfile or str, optional
        Engine profile or the name of a registered one.  Defaults to the
        canonical ``"classic"`` profile.
    """

    def __init__(self, profile: Union[EngineProfile, str, None] = None):
        if profile is None:
            profile = DEFAULT_PROFILE
        elif isinstance(profile, str):
            profile = get_profile(profile)
        self._profile = profile
        if profile.overrides:
            logger.debug(
                f"engine profile {profile.name!r} overrides {profile.overrides}")
        self._rules = {
            m.id: tuple(rules_for(m.id, profile.patterns))
            for m in profile.metrics
        }

    @property
    def profile(self) -> EngineProfile:
        return self._profile

    def __repr__(self) -> str:
        return f"IntuitionEngine({self._profile.name!r})"

    def compute(self, profile: ProfileLike) -> Report:
        """Score *profile* and return the full :class:`Report`.

        Raises
        ------
        TypeError
            If *profile* is neither an :class:`InputProfile` nor a mapping.
        """
        if not isinstance(profile, InputProfile):
            profile = InputProfile.from_mapping(
                profile,
                default_strength=self._profile.constants["strength.default"])

        cfg = self._profile
        state = derive_signals(profile, cfg.constants)

        subs = tuple(
            score_metric(m, state, self._rules[m.id], cfg.ladder,
                         cfg.constants, cfg.locale)
            for m in sorted(cfg.metrics, key=lambda m: m.id)
        )
        categories = category_averages(
            subs, cfg.ladder, cfg.aggregation, cfg.constants, cfg.metrics)
        overall, overload_risk = composite_scores(
            subs, categories, cfg.ladder, cfg.composites,
            locale=cfg.locale)

        report = Report(
            subs=subs,
            categories=categories,
            overall=overall,
            overload_risk=overload_risk,
            signals=state,
            diagnostics=profile.diagnostics,
            profile_name=cfg.name,
        )
        logger.debug(f"computed {report.summary()}")
        return report


def compute(
    profile: ProfileLike,
    *,
    engine_profile: Union[EngineProfile, str, None] = None,
) -> Report:
    """Score *profile* with a fresh engine (canonical profile by default)."""
    return IntuitionEngine(engine_profile).compute(profile)
