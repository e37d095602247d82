"""Report — the complete, immutable output of one computation.

Usage
-----
>>> from intuition_engine import compute
>>> report = compute(profile)
>>> report.overload_risk             # 67
>>> report.sub(3).style              # "cautious"
>>> report.categories["insight"].grade
>>> report.to_dict()                 # JSON-safe dict
>>> print(report.explain())
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from .metrics import StyleCandidate
    from .patterns import PatternFiring
    from .signals import SignalState

__all__ = [
    "SubMetricResult",
    "CategoryAverage",
    "OverallResult",
    "Report",
]


# ═══════════════════════════════════════════════════════════════════
# Result records
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SubMetricResult:
    """Scored sub-metric.

    ``score`` is an integer in [1, 99]; ``bonus`` is the sum of the
    adjustments of the (at most two) rules named in ``fired``.
    """

    id: int
    key: str
    name: str
    category: str
    style: str
    raw: float
    base: int
    bonus: float
    fired: Tuple[str, ...]
    score: int
    grade: str
    percentile: str
    candidates: Tuple["StyleCandidate", ...] = ()
    firings: Tuple["PatternFiring", ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "key": self.key,
            "name": self.name,
            "category": self.category,
            "style": self.style,
            "raw": round(self.raw, 6),
            "base": self.base,
            "bonus": self.bonus,
            "fired": list(self.fired),
            "score": self.score,
            "grade": self.grade,
            "percentile": self.percentile,
            "styles": {c.name: round(c.raw, 6) for c in self.candidates},
        }


@dataclass(frozen=True)
class CategoryAverage:
    """Reduction of a category's member scores."""

    key: str
    value: float
    score: int
    grade: str
    percentile: str
    members: Tuple[int, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "grade": self.grade,
            "percentile": self.percentile,
            "value": round(self.value, 6),
            "members": list(self.members),
        }


@dataclass(frozen=True)
class OverallResult:
    """Weighted composite score."""

    key: str
    name: str
    score: int
    grade: str
    percentile: str
    value: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "grade": self.grade,
            "percentile": self.percentile,
            "value": round(self.value, 6),
        }


# ═══════════════════════════════════════════════════════════════════
# Report
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Report:
    """Full engine output.

    1. **subs** — 20 :class:`SubMetricResult`, ordered by id
    2. **categories** — ``{insight, timing, sensitivity, premonition}``
    3. **overall** — ``{business, affinity, premonition_dream,
       risk_avoidance}``
    4. **overload_risk** — final score of the overload-risk metric
    5. **signals** — the :class:`SignalState` every formula read
    6. **diagnostics** — non-fatal input problems
    7. **profile_name** — engine profile that produced the report
    """

    subs: Tuple[SubMetricResult, ...]
    categories: Dict[str, CategoryAverage]
    overall: Dict[str, OverallResult]
    overload_risk: int
    signals: Optional["SignalState"] = None
    diagnostics: Tuple[str, ...] = ()
    profile_name: str = "classic"

    # ── Derived properties ──────────────────────────────────────

    def sub(self, metric_id: int) -> SubMetricResult:
        for s in self.subs:
            if s.id == metric_id:
                return s
        raise KeyError(metric_id)

    @property
    def scores(self) -> Dict[int, int]:
        """``{metric_id: score}`` for all sub-metrics."""
        return {s.id: s.score for s in self.subs}

    @property
    def n_patterns_fired(self) -> int:
        return sum(len(s.fired) for s in self.subs)

    @property
    def strongest(self) -> SubMetricResult:
        """Highest-scoring sub-metric (lowest id on ties)."""
        return max(self.subs, key=lambda s: (s.score, -s.id))

    # ── Serialisation ───────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-safe dict of the full report."""
        return {
            "profile": self.profile_name,
            "subs": [s.to_dict() for s in self.subs],
            "categories": {
                k: c.to_dict() for k, c in self.categories.items()
            },
            "overall": {k: o.to_dict() for k, o in self.overall.items()},
            "overload_risk": self.overload_risk,
            "signals": self.signals.to_dict() if self.signals else {},
            "diagnostics": list(self.diagnostics),
        }

    def to_json(self, **kwargs: Any) -> str:
        kwargs.setdefault("ensure_ascii", False)
        return json.dumps(self.to_dict(), **kwargs)

    def summary(self) -> str:
        """One-line human-readable summary."""
        cats = ", ".join(
            f"{k}={c.score}" for k, c in self.categories.items())
        return (
            f"[{self.profile_name}] {cats}; "
            f"overload_risk={self.overload_risk}, "
            f"patterns={self.n_patterns_fired}"
        )

    def explain(self) -> str:
        """Multi-line breakdown of every score."""
        lines: List[str] = [f"Profile: {self.profile_name}", "", "Sub-metrics:"]
        for s in self.subs:
            style = f" [{s.style}]" if s.style else ""
            lines.append(
                f"  {s.id:>2d} {s.name:<30s} {s.score:>3d}  "
                f"base={s.base:>3d} bonus={s.bonus:+.0f}  "
                f"{s.grade} / {s.percentile}{style}")
            for label in s.fired:
                lines.append(f"       · {label}")

        lines.append("")
        lines.append("Categories:")
        for k, c in self.categories.items():
            lines.append(
                f"  {k:<14s} {c.score:>3d}  {c.grade} / {c.percentile}")

        lines.append("")
        lines.append("Overall:")
        for k, o in self.overall.items():
            lines.append(
                f"  {o.name:<20s} {o.score:>3d}  {o.grade} / {o.percentile}")
        lines.append(f"  {'Overload risk':<20s} {self.overload_risk:>3d}")

        if self.diagnostics:
            lines.append("")
            lines.append("Diagnostics:")
            lines.extend(f"  {d}" for d in self.diagnostics)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Report({self.profile_name!r}, subs={len(self.subs)}, "
            f"overload_risk={self.overload_risk})"
        )
