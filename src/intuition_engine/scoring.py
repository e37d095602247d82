"""Style blending, the tanh score transform, and per-metric scoring.

    blended = 0.7·max(r) + 0.3·mean(r)          (styled metrics)
    blended = r₁                                  (unstyled metrics)
    base    = clamp(50 + gain·tanh(blended / scale), 1, 99)

Near-zero raw differences map almost linearly onto scores around 50;
extreme raws saturate smoothly toward the bounds.  Reported integers use
round-half-up, so ``x.5`` always rounds away from zero for positive
scores.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

from .classify import GradeLadder
from .constants import ConstantRegistry, DEFAULT_CONSTANTS
from .metrics import MetricSpec, StyleCandidate, compose_styles
from .patterns import PatternRule, apply_patterns
from .report import SubMetricResult
from .signals import SignalState

__all__ = [
    "clamp",
    "round_half_up",
    "to_score",
    "blend_styles",
    "score_metric",
]


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves toward +∞."""
    return int(math.floor(x + 0.5))


def to_score(
    raw: float,
    scale: float,
    constants: ConstantRegistry = DEFAULT_CONSTANTS,
) -> float:
    """Map a raw signal onto the bounded, unrounded score."""
    return clamp(
        constants["transform.center"]
        + constants["transform.gain"] * math.tanh(raw / scale),
        constants["transform.floor"],
        constants["transform.ceiling"],
    )


def blend_styles(
    candidates: Sequence[StyleCandidate],
    constants: ConstantRegistry = DEFAULT_CONSTANTS,
) -> Tuple[float, str]:
    """Return ``(blended_raw, dominant_style)``.

    A single candidate passes through unchanged.  The dominant style is the
    first candidate holding the maximum raw value.
    """
    if not candidates:
        raise ValueError("blend_styles needs at least one candidate")
    if len(candidates) == 1:
        return candidates[0].raw, candidates[0].name

    raws = [c.raw for c in candidates]
    top = max(raws)
    dominant = candidates[raws.index(top)].name
    mean = sum(raws) / len(raws)
    blended = (constants["blend.max_weight"] * top
               + constants["blend.mean_weight"] * mean)
    return blended, dominant


def score_metric(
    metric: MetricSpec,
    state: SignalState,
    rules: Sequence[PatternRule],
    ladder: GradeLadder,
    constants: ConstantRegistry = DEFAULT_CONSTANTS,
    locale: str = "en",
) -> SubMetricResult:
    """Compose, blend, transform and adjust one metric.

    The grade is taken from the unrounded final score; ``base`` and
    ``score`` are reported rounded.  Names, styles and fired labels are
    reported in *locale*.
    """
    coupling = constants.section("spike.coupling").get(metric.category, 0.0)
    candidates = compose_styles(metric, state, coupling, locale)
    blended, dominant = blend_styles(candidates, constants)

    base = to_score(blended, constants[metric.scale_key], constants)
    outcome = apply_patterns(
        base, rules, state,
        max_fired=int(constants["patterns.max_fired"]),
        floor=constants["transform.floor"],
        ceiling=constants["transform.ceiling"],
        locale=locale,
    )
    grade, percentile = ladder.classify(outcome.final)

    return SubMetricResult(
        id=metric.id,
        key=metric.key,
        name=metric.label(locale),
        category=metric.category,
        style=dominant if metric.styled else "",
        raw=blended,
        base=round_half_up(base),
        bonus=outcome.bonus,
        fired=outcome.fired,
        score=round_half_up(outcome.final),
        grade=grade,
        percentile=percentile,
        candidates=tuple(candidates),
        firings=outcome.firings,
    )
