"""Category averages and weighted composite scores.

Category policies
-----------------
``"mean"``
    arithmetic mean of the member scores.
``"strength_preserving"``
    ``0.6·mean(top 2) + 0.4·mean(all)`` — a single weak facet drags the
    category down less than under a plain mean.

Composites
----------
Each :class:`CompositeSpec` is a weighted sum over three kinds of source:

* ``"category:<key>"`` — an (unrounded) category average
* ``"sub:<id>"``       — a sub-metric's final score
* ``"inverse_risk"``   — ``100 − overload_risk``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Sequence, Tuple

from .classify import GradeLadder
from .constants import ConstantRegistry, DEFAULT_CONSTANTS
from .metrics import (
    CATEGORIES, METRICS, OVERLOAD_RISK_ID, MetricSpec, localized,
)
from .report import CategoryAverage, OverallResult, SubMetricResult
from .scoring import round_half_up

__all__ = [
    "AGGREGATION_POLICIES",
    "CompositeSpec",
    "COMPOSITES",
    "category_value",
    "category_averages",
    "composite_scores",
]

AGGREGATION_POLICIES: Tuple[str, ...] = ("mean", "strength_preserving")


@dataclass(frozen=True)
class CompositeSpec:
    """One weighted composite.

    Parameters
    ----------
    key : str
        snake_case identifier used in the report.
    name : str
        Display name.
    terms : tuple of (source, weight)
        Summed in declaration order.
    name_ko : str
        Korean display name.
    """

    key: str
    name: str
    terms: Tuple[Tuple[str, float], ...]
    name_ko: str = ""

    def label(self, locale: str = "en") -> str:
        return localized(self.name, self.name_ko, locale)


COMPOSITES: Tuple[CompositeSpec, ...] = (
    CompositeSpec("business", "Business Instinct", (
        ("category:timing", 0.45),
        ("category:insight", 0.35),
        ("inverse_risk", 0.20),
    ), "비즈니스촉"),
    CompositeSpec("affinity", "Romantic Affinity", (
        ("sub:11", 0.55),
        ("sub:12", 0.25),
        ("sub:13", 0.20),
    ), "연애호감촉"),
    CompositeSpec("premonition_dream", "Premonition Dreams", (
        ("sub:19", 0.55),
        ("sub:16", 0.25),
        ("sub:20", 0.20),
    ), "예지몽"),
    CompositeSpec("risk_avoidance", "Crisis Avoidance", (
        ("sub:3", 0.50),
        ("sub:7", 0.20),
        ("inverse_risk", 0.30),
    ), "위기회피"),
)


# ── category averages ────────────────────────────────────────────

def category_value(
    scores: Sequence[float],
    policy: str = "mean",
    constants: ConstantRegistry = DEFAULT_CONSTANTS,
) -> float:
    """Reduce member scores under *policy* (unrounded)."""
    if policy not in AGGREGATION_POLICIES:
        raise ValueError(
            f"Unknown aggregation policy {policy!r}; "
            f"expected one of {AGGREGATION_POLICIES}")
    if not scores:
        return constants["transform.center"]

    mean_all = sum(scores) / len(scores)
    if policy == "mean":
        return mean_all

    top_n = max(1, int(constants["aggregate.top_n"]))
    top = sorted(scores, reverse=True)[:top_n]
    return (constants["aggregate.top_weight"] * (sum(top) / len(top))
            + constants["aggregate.all_weight"] * mean_all)


def category_averages(
    subs: Sequence[SubMetricResult],
    ladder: GradeLadder,
    policy: str = "mean",
    constants: ConstantRegistry = DEFAULT_CONSTANTS,
    metrics: Sequence[MetricSpec] = METRICS,
) -> Dict[str, CategoryAverage]:
    """Average each category's member scores (rounded sub scores in)."""
    by_id = {s.id: s for s in subs}
    out: Dict[str, CategoryAverage] = {}
    for category in CATEGORIES:
        members = tuple(
            m.id for m in metrics
            if m.category == category and m.in_average and m.id in by_id)
        value = category_value(
            [by_id[i].score for i in members], policy, constants)
        grade, percentile = ladder.classify(value)
        out[category] = CategoryAverage(
            key=category, value=value, score=round_half_up(value),
            grade=grade, percentile=percentile, members=members,
        )
    return out


# ── composites ───────────────────────────────────────────────────

def _source_value(
    source: str,
    categories: Mapping[str, CategoryAverage],
    by_id: Mapping[int, SubMetricResult],
    overload_risk: int,
) -> float:
    if source == "inverse_risk":
        return 100 - overload_risk
    kind, _, ref = source.partition(":")
    if kind == "category":
        return categories[ref].value
    if kind == "sub":
        return by_id[int(ref)].score
    raise ValueError(f"Unknown composite source {source!r}")


def composite_scores(
    subs: Sequence[SubMetricResult],
    categories: Mapping[str, CategoryAverage],
    ladder: GradeLadder,
    composites: Sequence[CompositeSpec] = COMPOSITES,
    risk_id: int = OVERLOAD_RISK_ID,
    locale: str = "en",
) -> Tuple[Dict[str, OverallResult], int]:
    """Return ``({key: OverallResult}, overload_risk)``.

    Keys stay snake_case; *locale* only picks the display name.
    """
    by_id = {s.id: s for s in subs}
    overload_risk = by_id[risk_id].score

    out: Dict[str, OverallResult] = {}
    for spec in composites:
        value = 0.0
        for source, weight in spec.terms:
            value += weight * _source_value(source, categories, by_id,
                                            overload_risk)
        score = round_half_up(value)
        grade, percentile = ladder.classify(score)
        out[spec.key] = OverallResult(
            key=spec.key, name=spec.label(locale), score=score,
            grade=grade, percentile=percentile, value=value,
        )
    return out, overload_risk
