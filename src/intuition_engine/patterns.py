"""PatternRule registry — labelled conditional score adjustments.

Every metric carries a short list of :class:`PatternRule` objects.  A rule
is a conjunction of signal clauses plus a signed adjustment, e.g.

    a.inseong ≥ 0.22  and  a.gwanseong ≥ 0.18   →   +6

:func:`apply_patterns` evaluates a metric's rules against the current
:class:`~intuition_engine.signals.SignalState` and keeps at most two:

1. filter to the rules whose condition holds,
2. stable-sort by ``|adjustment|`` descending (ties keep declaration order),
3. keep the first ``max_fired`` (2),
4. ``bonus = Σ adjustment``; ``final = clamp(base + bonus, 1, 99)``.

Rules live in :data:`PATTERN_RULES` and can be filtered with
:func:`get_rules` or swapped with :func:`replace_rules` for what-if runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .metrics import (
    localized,
    BIGYEOP, SIKSANG, JAESEONG, GWANSEONG, INSEONG,
    WOOD, FIRE, EARTH, METAL, WATER, NOISE,
)
from .signals import SignalState

__all__ = [
    "Clause",
    "PatternRule",
    "PatternFiring",
    "PatternOutcome",
    "PATTERN_RULES",
    "apply_patterns",
    "rules_for",
    "get_rules",
    "replace_rules",
]

SignalRef = Union[str, Tuple[str, ...]]


# ═══════════════════════════════════════════════════════════════════
# Clause — one comparison against a signal (or a sum of signals)
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Clause:
    """``signal <op> threshold`` where *op* is ``">="`` or ``"<"``.

    A tuple *signal* is read as the sum of its members.
    """

    signal: SignalRef
    op: str
    threshold: float

    def value(self, state: SignalState) -> float:
        if isinstance(self.signal, tuple):
            total = 0.0
            for name in self.signal:
                total += state[name]
            return total
        return state[self.signal]

    def holds(self, state: SignalState) -> bool:
        v = self.value(state)
        if self.op == ">=":
            return v >= self.threshold
        if self.op == "<":
            return v < self.threshold
        raise ValueError(f"Unsupported clause operator {self.op!r}")

    def __str__(self) -> str:
        sig = "+".join(self.signal) if isinstance(self.signal, tuple) else self.signal
        return f"{sig} {self.op} {self.threshold:g}"


def _ge(signal: SignalRef, threshold: float) -> Clause:
    """signal ≥ threshold"""
    return Clause(signal, ">=", threshold)


def _lt(signal: SignalRef, threshold: float) -> Clause:
    """signal < threshold"""
    return Clause(signal, "<", threshold)


# ═══════════════════════════════════════════════════════════════════
# PatternRule / PatternFiring
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PatternRule:
    """One labelled conditional adjustment.

    Parameters
    ----------
    metric_id : int
        Sub-metric this rule belongs to.
    name : str
        Display label, recorded when the rule is kept.
    clauses : tuple of Clause
        All must hold for the rule to fire.
    adjustment : float
        Signed score adjustment.
    name_ko : str
        Korean display label.
    """

    metric_id: int
    name: str
    clauses: Tuple[Clause, ...]
    adjustment: float
    name_ko: str = ""

    def label(self, locale: str = "en") -> str:
        return localized(self.name, self.name_ko, locale)

    def evaluate(self, state: SignalState) -> Optional[float]:
        """Return the adjustment if every clause holds, else ``None``."""
        if all(c.holds(state) for c in self.clauses):
            return self.adjustment
        return None

    @property
    def condition(self) -> str:
        return " and ".join(str(c) for c in self.clauses)


@dataclass(frozen=True)
class PatternFiring:
    """Record of one kept rule."""
    metric_id: int
    name: str
    adjustment: float
    condition: str = ""


@dataclass(frozen=True)
class PatternOutcome:
    """Result of :func:`apply_patterns`."""
    bonus: float
    final: float
    firings: Tuple[PatternFiring, ...]
    candidates: int = 0

    @property
    def fired(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.firings)


# ═══════════════════════════════════════════════════════════════════
# PATTERN_RULES — the complete registry
# ═══════════════════════════════════════════════════════════════════

_RULES: List[PatternRule] = []


def _r(metric_id: int, name: str, name_ko: str, adjustment: float,
       *clauses: Clause) -> None:
    """Register a rule (builder shorthand)."""
    _RULES.append(PatternRule(
        metric_id=metric_id, name=name, name_ko=name_ko,
        clauses=tuple(clauses), adjustment=float(adjustment),
    ))


# ── insight ─────────────────────────────────────────────────────
_r(1, "strong resource and authority", "인성+관성 강함", 6,
   _ge(INSEONG, 0.22), _ge(GWANSEONG, 0.18))
_r(1, "heavy noise, thin resource", "소음 과다+인성 부족", -6,
   _ge(NOISE, 2.0), _lt(INSEONG, 0.14))

_r(2, "water and resource in tune", "수+인성 조화", 5,
   _ge(WATER, 0.22), _ge(INSEONG, 0.18))
_r(2, "fire excess, thin output", "화 과다+식상 부족", -4,
   _ge(FIRE, 0.24), _lt(SIKSANG, 0.12))

_r(3, "authority on clash alert", "관성+충형 경계", 6,
   _ge(GWANSEONG, 0.20), _ge(("count.chung", "count.hyung"), 2))
_r(3, "wealth excess, thin authority", "재성 과다+관성 부족", -6,
   _ge(JAESEONG, 0.25), _lt(GWANSEONG, 0.12))

_r(4, "metal and authority precision", "금+관성 정밀", 5,
   _ge(METAL, 0.20), _ge(GWANSEONG, 0.18))
_r(4, "heavy noise", "소음 과다", -5,
   _ge(NOISE, 2.2))

_r(5, "resource, output and authority balanced", "인성+식상+관성 균형", 7,
   _ge(INSEONG, 0.22), _ge(SIKSANG, 0.16), _ge(GWANSEONG, 0.16))
_r(5, "peer excess, thin resource", "비겁 과다+인성 부족", -6,
   _ge(BIGYEOP, 0.28), _lt(INSEONG, 0.14))

# ── timing ──────────────────────────────────────────────────────
_r(6, "wealth and output in tune", "재성+식상 조화", 6,
   _ge(JAESEONG, 0.22), _ge(SIKSANG, 0.16))
_r(6, "strong self, peer excess", "신강+비겁 과다", -6,
   _ge("strength", 70), _ge(BIGYEOP, 0.26))

_r(7, "metal and earth steady", "금+토 안정", 5,
   _ge(METAL, 0.22), _ge(EARTH, 0.20))
_r(7, "fire excess, thin authority", "화 과다+관성 부족", -5,
   _ge(FIRE, 0.24), _lt(GWANSEONG, 0.14))

_r(8, "strong wealth", "재성 강함", 6,
   _ge(JAESEONG, 0.26))
_r(8, "heavy noise, thin wealth", "소음 과다+재성 부족", -4,
   _ge(NOISE, 2.2), _lt(JAESEONG, 0.16))

_r(9, "output and peers balanced", "식상+비겁 균형", 6,
   _ge(SIKSANG, 0.18), _ge(BIGYEOP, 0.18))
_r(9, "resource excess, thin output", "인성 과다+식상 부족", -6,
   _ge(INSEONG, 0.30), _lt(SIKSANG, 0.12))

_r(10, "output and authority in tune", "식상+관성 조화", 7,
   _ge(SIKSANG, 0.20), _ge(GWANSEONG, 0.16))
_r(10, "water excess, thin earth", "수 과다+토 부족", -5,
   _ge(WATER, 0.26), _lt(EARTH, 0.14))

# ── sensitivity ─────────────────────────────────────────────────
_r(11, "water and wood in tune", "수+목 조화", 6,
   _ge(WATER, 0.22), _ge(WOOD, 0.20))
_r(11, "metal excess, thin water", "금 과다+수 부족", -4,
   _ge(METAL, 0.26), _lt(WATER, 0.14))

_r(12, "strong water", "수 강함", 6,
   _ge(WATER, 0.26))
_r(12, "earth excess, thin water", "토 과다+수 부족", -5,
   _ge(EARTH, 0.30), _lt(WATER, 0.14))

_r(13, "resource with water and wood", "인성+수목 조화", 6,
   _ge(INSEONG, 0.24), _ge((WOOD, WATER), 0.40))
_r(13, "peer excess, thin resource", "비겁 과다+인성 부족", -6,
   _ge(BIGYEOP, 0.30), _lt(INSEONG, 0.14))

_r(14, "earth and authority steady", "토+관성 안정", 6,
   _ge(EARTH, 0.22), _ge(GWANSEONG, 0.18))
_r(14, "heavy noise", "소음 과다", -6,
   _ge(NOISE, 2.3))

_r(15, "water excess, thin earth", "수 과다+토 부족", 8,
   _ge(WATER, 0.26), _lt(EARTH, 0.14))
_r(15, "earth steadiness", "토 안정", -6,
   _ge(EARTH, 0.26))

# ── premonition ─────────────────────────────────────────────────
_r(16, "water and resource in tune", "수+인성 조화", 7,
   _ge(WATER, 0.24), _ge(INSEONG, 0.20))
_r(16, "heavy noise", "소음 과다", -6,
   _ge(NOISE, 2.4))

_r(17, "output and water in tune", "식상+수 조화", 6,
   _ge(SIKSANG, 0.20), _ge(WATER, 0.18))
_r(17, "earth excess, thin output", "토 과다+식상 부족", -4,
   _ge(EARTH, 0.30), _lt(SIKSANG, 0.12))

_r(18, "resource and metal in tune", "인성+금 조화", 6,
   _ge(INSEONG, 0.24), _ge(METAL, 0.18))
_r(18, "fire excess, thin resource", "화 과다+인성 부족", -5,
   _ge(FIRE, 0.28), _lt(INSEONG, 0.14))

_r(19, "strong water and resource", "수+인성 강함", 8,
   _ge(WATER, 0.26), _ge(INSEONG, 0.22), _lt(EARTH, 0.18))
_r(19, "earth excess", "토 과다", -6,
   _ge(EARTH, 0.26))

_r(20, "noise with water", "소음+수 조화", 7,
   _ge(NOISE, 2.2), _ge(WATER, 0.22))
_r(20, "earth excess, thin water", "토 과다+수 부족", -6,
   _ge(EARTH, 0.28), _lt(WATER, 0.14))


PATTERN_RULES: Tuple[PatternRule, ...] = tuple(_RULES)
del _RULES


# ═══════════════════════════════════════════════════════════════════
# apply_patterns — the engine
# ═══════════════════════════════════════════════════════════════════

def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def apply_patterns(
    base: float,
    rules: Sequence[PatternRule],
    state: SignalState,
    max_fired: int = 2,
    floor: float = 1.0,
    ceiling: float = 99.0,
    locale: str = "en",
) -> PatternOutcome:
    """Apply at most *max_fired* of *rules* to the unrounded *base* score.

    Parameters
    ----------
    base : float
        Transformed score before adjustment.
    rules : sequence of PatternRule
        The metric's rules in declaration order.
    state : SignalState
        Current derived signals.
    locale : str
        Label language of the recorded firings.
    """
    firing = [r for r in rules if r.evaluate(state) is not None]
    # sorted() is stable: equal magnitudes keep declaration order
    kept = sorted(firing, key=lambda r: abs(r.adjustment), reverse=True)[:max_fired]

    bonus = 0.0
    for r in kept:
        bonus += r.adjustment

    return PatternOutcome(
        bonus=bonus,
        final=_clamp(base + bonus, floor, ceiling),
        firings=tuple(
            PatternFiring(metric_id=r.metric_id, name=r.label(locale),
                          adjustment=r.adjustment, condition=r.condition)
            for r in kept
        ),
        candidates=len(firing),
    )


# ═══════════════════════════════════════════════════════════════════
# Utilities for what-if sweeps
# ═══════════════════════════════════════════════════════════════════

def rules_for(
    metric_id: int,
    rules: Optional[Sequence[PatternRule]] = None,
) -> List[PatternRule]:
    """The rules of one metric, in declaration order."""
    source = rules if rules is not None else PATTERN_RULES
    return [r for r in source if r.metric_id == metric_id]


def get_rules(
    metric_id: Optional[int] = None,
    name_contains: Optional[str] = None,
    signal: Optional[str] = None,
    rules: Optional[Sequence[PatternRule]] = None,
) -> List[PatternRule]:
    """Filter the registry by metric, name substring, or inspected signal."""
    source = rules if rules is not None else PATTERN_RULES
    result = list(source)
    if metric_id is not None:
        result = [r for r in result if r.metric_id == metric_id]
    if name_contains is not None:
        result = [r for r in result if name_contains in r.name]
    if signal is not None:
        result = [r for r in result if any(
            signal == c.signal or (isinstance(c.signal, tuple) and signal in c.signal)
            for c in r.clauses)]
    return result


def replace_rules(
    original: Sequence[PatternRule],
    replacements: Dict[Tuple[int, str], PatternRule],
) -> Tuple[PatternRule, ...]:
    """Return a new rule set with ``(metric_id, name)``-keyed rules replaced.

    Rule names are unique only within a metric, hence the compound key.
    """
    return tuple(
        replacements.get((r.metric_id, r.name), r) for r in original
    )
