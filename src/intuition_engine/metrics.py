"""The 20 sub-metrics — coefficient tables and the signal composer.

Every sub-metric is a :class:`MetricSpec` holding one to three
:class:`StyleFormula` objects.  A style's raw signal is a fixed linear
combination over the :class:`~intuition_engine.signals.SignalState`:

    raw = Σ coefficient · signal        (summed in declaration order)

The coefficients are exact constants, not derived from a rule; the
tables below are the single source of truth for them.

Groups
------
============  =======  ==========================================
Category      Ids      Scale key
============  =======  ==========================================
insight       1–5      ``scale.insight``      (0.45)
timing        6–10     ``scale.timing``       (0.50)
sensitivity   11–14    ``scale.sensitivity``  (0.45)
sensitivity   15       ``scale.risk``         (0.55, overload risk)
premonition   16–20    ``scale.premonition``  (0.50)
============  =======  ==========================================

Metric 15 is filed under *sensitivity* but is excluded from the
sensitivity average; its score is read directly as the overload risk.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .signals import SignalState

__all__ = [
    "StyleFormula",
    "StyleCandidate",
    "MetricSpec",
    "METRICS",
    "CATEGORIES",
    "OVERLOAD_RISK_ID",
    "get_metric",
    "LOCALES",
    "localized",
    "compose_styles",
]


LOCALES: Tuple[str, ...] = ("en", "ko")


def localized(name: str, name_ko: str, locale: str = "en") -> str:
    """Pick the Korean label under the ``"ko"`` locale when one is set."""
    return name_ko if locale == "ko" and name_ko else name


# ═══════════════════════════════════════════════════════════════════
# Data types
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StyleFormula:
    """One named linear formula.

    Parameters
    ----------
    name : str
        Style label reported as the metric's dominant style.
    terms : tuple of (signal, coefficient)
        Signal names follow :meth:`SignalState.__getitem__`.
    name_ko : str
        Korean style label.
    """

    name: str
    terms: Tuple[Tuple[str, float], ...]
    name_ko: str = ""

    def label(self, locale: str = "en") -> str:
        return localized(self.name, self.name_ko, locale)

    def evaluate(self, state: SignalState) -> float:
        raw = 0.0
        for signal, coefficient in self.terms:
            raw += coefficient * state[signal]
        return raw

    @property
    def signals(self) -> Tuple[str, ...]:
        return tuple(s for s, _ in self.terms)


@dataclass(frozen=True)
class StyleCandidate:
    """Evaluated style: ``{name, raw}``."""
    name: str
    raw: float


@dataclass(frozen=True)
class MetricSpec:
    """Static definition of one sub-metric.

    Parameters
    ----------
    id : int
        1–20, also the report order.
    key : str
        snake_case identifier.
    name : str
        Display name.
    category : str
        One of :data:`CATEGORIES`.
    scale_key : str
        Constant-registry key of the tanh scale.
    styles : tuple of StyleFormula
        One (unstyled) or two to three (styled) formulas.
    in_average : bool
        Whether the metric contributes to its category average.
    name_ko : str
        Korean display name.
    """

    id: int
    key: str
    name: str
    category: str
    scale_key: str
    styles: Tuple[StyleFormula, ...]
    in_average: bool = True
    name_ko: str = ""

    def label(self, locale: str = "en") -> str:
        return localized(self.name, self.name_ko, locale)

    @property
    def styled(self) -> bool:
        return len(self.styles) > 1


# ═══════════════════════════════════════════════════════════════════
# Coefficient tables
# ═══════════════════════════════════════════════════════════════════

BIGYEOP, SIKSANG, JAESEONG, GWANSEONG, INSEONG = (
    "a.bigyeop", "a.siksang", "a.jaeseong", "a.gwanseong", "a.inseong")
WOOD, FIRE, EARTH, METAL, WATER = (
    "b.wood", "b.fire", "b.earth", "b.metal", "b.water")
NOISE, CONNECT = "noise", "connect"

CATEGORIES: Tuple[str, ...] = ("insight", "timing", "sensitivity", "premonition")
OVERLOAD_RISK_ID: int = 15

_METRICS: List[MetricSpec] = []


def _s(name: str, name_ko: str, *terms: Tuple[str, float]) -> StyleFormula:
    return StyleFormula(name=name, terms=tuple(terms), name_ko=name_ko)


def _m(id: int, key: str, name: str, name_ko: str, category: str,
       *styles: StyleFormula, scale_key: Optional[str] = None,
       in_average: bool = True) -> None:
    """Register a metric (builder shorthand)."""
    _METRICS.append(MetricSpec(
        id=id, key=key, name=name, category=category,
        scale_key=scale_key or f"scale.{category}",
        styles=tuple(styles), in_average=in_average, name_ko=name_ko,
    ))


# ── INSIGHT ─────────────────────────────────────────────────────

_m(1, "structure_grasp", "Structure Grasp",
   "구조 파악력", "insight",
   _s("conceptual", "개념형", (INSEONG, 1.55), (SIKSANG, 0.95), (NOISE, -0.10)),
   _s("board-reading", "판읽기형", (GWANSEONG, 1.35), (EARTH, 0.70), (CONNECT, 0.12),
      (NOISE, -0.16)),
   _s("gut-feel", "직감형", (WATER, 1.05), (INSEONG, 0.70), (CONNECT, 0.05),
      (NOISE, -0.20)))

_m(2, "subtle_signal_detection", "Subtle Signal Detection",
   "미세신호 감지", "insight",
   _s("sensory", "감각형", (WATER, 1.15), (INSEONG, 0.80), (CONNECT, 0.05),
      (NOISE, -0.14)),
   _s("observe-express", "관찰·표현형", (SIKSANG, 1.10), (INSEONG, 0.85), (NOISE, -0.10)),
   _s("exchange", "교류형", (WOOD, 0.95), (WATER, 0.75), (GWANSEONG, 0.40),
      (NOISE, -0.12)))

_m(3, "risk_radar", "Risk Radar",
   "리스크 레이더", "insight",
   _s("structure-risk", "구조·리스크형", (GWANSEONG, 1.45), (METAL, 0.75), (CONNECT, 0.10),
      (NOISE, -0.15)),
   _s("detector", "감지형", (WATER, 1.10), (GWANSEONG, 1.05), (CONNECT, 0.05),
      (NOISE, -0.18)),
   _s("cautious", "신중형", (EARTH, 1.05), (GWANSEONG, 1.10), (INSEONG, 0.30),
      (NOISE, -0.12)))

_m(4, "judgment_precision", "Judgment Precision",
   "판단 정밀도", "insight",
   _s("precise-analytic", "정밀·분석형", (SIKSANG, 1.25), (INSEONG, 0.95), (NOISE, -0.10)),
   _s("rule-judgment", "규칙·판단형", (GWANSEONG, 1.20), (EARTH, 0.70), (CONNECT, 0.06),
      (NOISE, -0.12)),
   _s("integrative", "통합형", (INSEONG, 1.00), (GWANSEONG, 0.85), (SIKSANG, 0.65),
      (CONNECT, 0.03), (NOISE, -0.10)))

_m(5, "strategy_design", "Strategy Design",
   "전략 설계력", "insight",
   _s("design-concept", "설계·개념형", (INSEONG, 1.20), (GWANSEONG, 0.85), (SIKSANG, 0.55),
      (CONNECT, 0.06), (NOISE, -0.10)),
   _s("board-building", "판짜기형", (GWANSEONG, 1.30), (WOOD, 0.85), (CONNECT, 0.10),
      (NOISE, -0.14)),
   _s("resource-allocation", "자원배치형", (JAESEONG, 1.15), (GWANSEONG, 0.95),
      (SIKSANG, 0.45), (NOISE, -0.10)))


# ── TIMING ──────────────────────────────────────────────────────

_m(6, "entry_timing", "Entry Timing",
   "진입 타이밍", "timing",
   _s("experiment-breakthrough", "실험·돌파형", (SIKSANG, 1.25), (BIGYEOP, 1.05),
      (CONNECT, 0.05), (NOISE, -0.14)),
   _s("opportunity-reward", "기회·보상형", (JAESEONG, 1.20), (SIKSANG, 0.75),
      (CONNECT, 0.10), (NOISE, -0.10)),
   _s("cautious-conviction", "신중·확신형", (GWANSEONG, 1.10), (INSEONG, 0.75),
      (CONNECT, 0.05), (NOISE, -0.16)))

_m(7, "exit_timing", "Exit Timing",
   "회수/정리 타이밍", "timing",
   _s("rule-cleanup", "규칙·정리형", (GWANSEONG, 1.55), (METAL, 0.75), (CONNECT, 0.06),
      (NOISE, -0.14)),
   _s("profit-taking", "수익·회수형", (JAESEONG, 1.20), (METAL, 0.85), (SIKSANG, 0.45),
      (NOISE, -0.10)),
   _s("hunch-avoidance", "촉·회피형", (WATER, 1.05), (GWANSEONG, 1.10), (NOISE, -0.18)))

_m(8, "opportunity_capture", "Opportunity Capture",
   "기회 포착력", "timing",
   _s("money-reward", "돈·리워드형", (JAESEONG, 1.35), (SIKSANG, 0.75), (CONNECT, 0.06),
      (NOISE, -0.10)),
   _s("network", "네트워크형", (BIGYEOP, 1.10), (WOOD, 0.85), (CONNECT, 0.10),
      (NOISE, -0.12)),
   _s("pattern", "패턴형", (INSEONG, 1.05), (JAESEONG, 0.95), (NOISE, -0.10)))

_m(9, "luck_reception", "Luck Reception",
   "운 수용력", "timing",
   _s("flow-acceptance", "흐름·수용형", (WOOD, 1.25), (WATER, 0.90), (CONNECT, 0.12),
      (NOISE, -0.12)),
   _s("drive-ride", "추진·승차형", (BIGYEOP, 1.15), (SIKSANG, 0.75), (CONNECT, 0.05),
      (NOISE, -0.14)),
   _s("belief-alignment", "신념·정렬형", (INSEONG, 1.15), (FIRE, 0.75), (CONNECT, 0.05),
      (NOISE, -0.10)))

_m(10, "result_conversion", "Result Conversion",
   "성과 전환", "timing",
   _s("execute-convert", "실행·전환형", (GWANSEONG, 1.20), (JAESEONG, 1.00),
      (CONNECT, 0.05), (NOISE, -0.12)),
   _s("make-deliver", "제작·성과형", (SIKSANG, 1.25), (JAESEONG, 0.95), (CONNECT, 0.05),
      (NOISE, -0.10)),
   _s("system", "시스템형", (INSEONG, 1.10), (GWANSEONG, 1.00), (CONNECT, 0.05),
      (NOISE, -0.12)))


# ── SENSITIVITY ─────────────────────────────────────────────────

_m(11, "affinity_distance_sensing", "Affinity Distance Sensing",
   "호감/거리감 감지", "sensitivity",
   _s("mood-distance", "분위기·거리형", (WATER, 1.25), (WOOD, 1.05), (CONNECT, 0.05),
      (NOISE, -0.10)),
   _s("empathy-care", "공감·배려형", (INSEONG, 1.20), (WATER, 0.85), (CONNECT, 0.08),
      (NOISE, -0.12)),
   _s("relation-radar", "관계·레이더형", (GWANSEONG, 1.05), (WOOD, 0.85), (CONNECT, 0.04),
      (NOISE, -0.12)))

_m(12, "atmosphere_absorption", "Atmosphere Absorption",
   "분위기 흡수력", "sensitivity",
   _s("absorber", "흡수형", (WATER, 1.35), (INSEONG, 0.65), (CONNECT, 0.05),
      (NOISE, -0.12)),
   _s("attuner", "동조형", (INSEONG, 1.15), (WOOD, 0.85), (CONNECT, 0.05),
      (NOISE, -0.10)),
   _s("space-current", "공간·기류형", (WATER, 1.10), (WOOD, 0.75), (CONNECT, 0.10),
      (NOISE, -0.14)))

_m(13, "emotional_attunement", "Emotional Attunement",
   "공감/정서 동조", "sensitivity",
   _s("emotional-empathy", "정서 공감형", (INSEONG, 1.45), (WATER, 0.65), (CONNECT, 0.05),
      (NOISE, -0.12)),
   _s("warmth-healing", "따뜻함·치유형", (FIRE, 1.15), (INSEONG, 1.05), (CONNECT, 0.05),
      (NOISE, -0.10)),
   _s("mirroring", "미러링형", (WATER, 1.10), (WOOD, 0.80), (INSEONG, 0.40),
      (NOISE, -0.12)))

_m(14, "relationship_upkeep", "Relationship Upkeep",
   "관계 유지력", "sensitivity",
   _s("duty-keeping", "책임·유지형", (GWANSEONG, 1.25), (INSEONG, 0.90), (CONNECT, 0.05),
      (NOISE, -0.14)),
   _s("bond-linking", "유대·연결형", (BIGYEOP, 1.15), (WOOD, 0.80), (CONNECT, 0.12),
      (NOISE, -0.12)),
   _s("understanding-mediation", "이해·조율형", (INSEONG, 1.25), (SIKSANG, 0.60),
      (CONNECT, 0.05), (NOISE, -0.10)))

_m(15, "sensory_overload_risk", "Sensory Overload Risk",
   "감응 과부하 위험", "sensitivity",
   _s("water-resource hypersensitive", "수·인성 과민", (WATER, 1.25), (INSEONG, 0.85),
      (NOISE, 0.60), (EARTH, -0.60)),
   _s("volatility hypersensitive", "변동성 과민", (WATER, 1.10), (NOISE, 0.95),
      (EARTH, -0.70), (METAL, -0.25)),
   scale_key="scale.risk", in_average=False)


# ── PREMONITION ─────────────────────────────────────────────────

_m(16, "premonition_accuracy", "Premonition Accuracy",
   "예감 적중률", "premonition",
   _s("symbol-pattern", "상징·패턴형", (WATER, 1.30), (INSEONG, 1.00), (CONNECT, 0.10),
      (NOISE, -0.14)),
   _s("radar", "레이다형", (GWANSEONG, 1.25), (WATER, 0.85), (CONNECT, 0.05),
      (NOISE, -0.16)),
   _s("spark", "스파크형", (WATER, 1.05), (NOISE, 0.55), (CONNECT, 0.20),
      (NOISE, -0.18)))

_m(17, "intuition_spark", "Intuition Spark",
   "직감 스파크", "premonition",
   _s("emergent-maker", "창발·제작형", (SIKSANG, 1.25), (FIRE, 0.70), (CONNECT, 0.05),
      (NOISE, -0.12)),
   _s("water-resonance spark", "수감응 스파크", (WATER, 1.05), (SIKSANG, 1.05),
      (NOISE, -0.14)),
   _s("dreamy", "몽환형", (WATER, 1.15), (NOISE, 0.45), (EARTH, -0.55),
      (METAL, -0.20)))

_m(18, "symbol_interpretation", "Symbol Interpretation",
   "상징 해석력", "premonition",
   _s("interpret-concept", "해석·개념형", (INSEONG, 1.35), (METAL, 0.55), (CONNECT, 0.05),
      (NOISE, -0.12)),
   _s("nature-association", "자연·연상형", (WOOD, 1.10), (WATER, 1.00), (CONNECT, 0.05),
      (NOISE, -0.14)),
   _s("rule-context", "규칙·맥락형", (GWANSEONG, 1.05), (INSEONG, 0.85), (CONNECT, 0.05),
      (NOISE, -0.12)))

_m(19, "prophetic_dream_disposition", "Prophetic Dream Disposition",
   "예지몽 체질", "premonition",
   _s("prophetic", "예지몽형", (WATER, 1.45), (INSEONG, 0.95), (NOISE, 0.30),
      (METAL, -0.35), (EARTH, -0.35)),
   _s("symbolic", "상징몽형", (INSEONG, 1.25), (WATER, 0.95), (NOISE, 0.20),
      (EARTH, -0.30), (METAL, -0.30)),
   _s("cleansing", "정화몽형", (WATER, 1.20), (INSEONG, 0.60), (CONNECT, 0.15),
      (EARTH, -0.45)))

_m(20, "mystic_sensitivity", "Mystic Sensitivity",
   "신비 체감 민감도", "premonition",
   _s("mystic-sense", "신비감각형", (WATER, 1.20), (INSEONG, 0.90), (NOISE, 0.55),
      (CONNECT, 0.20), (EARTH, -0.50)),
   _s("volatile-hunch", "변동·촉형", (WATER, 1.10), (NOISE, 0.95), (CONNECT, 0.10),
      (EARTH, -0.55)),
   _s("symbol-immersion", "상징·몰입형", (INSEONG, 1.25), (WATER, 0.85), (CONNECT, 0.15),
      (EARTH, -0.50)))


METRICS: Tuple[MetricSpec, ...] = tuple(_METRICS)
del _METRICS

_BY_ID: Dict[int, MetricSpec] = {m.id: m for m in METRICS}


def get_metric(metric_id: int, metrics: Optional[Sequence[MetricSpec]] = None) -> MetricSpec:
    """Look up a metric by id (``KeyError`` if unknown)."""
    if metrics is None:
        return _BY_ID[metric_id]
    for m in metrics:
        if m.id == metric_id:
            return m
    raise KeyError(metric_id)


# ═══════════════════════════════════════════════════════════════════
# Signal composer
# ═══════════════════════════════════════════════════════════════════

def compose_styles(
    metric: MetricSpec,
    state: SignalState,
    spike_coupling: float = 0.0,
    locale: str = "en",
) -> List[StyleCandidate]:
    """Evaluate every style of *metric* against *state*.

    A non-zero *spike_coupling* adds ``spike_coupling · state.spike`` to
    each style's raw value.  Candidates carry the *locale* label.
    """
    extra = spike_coupling * state.spike if spike_coupling else 0.0
    return [
        StyleCandidate(name=s.label(locale), raw=s.evaluate(state) + extra)
        for s in metric.styles
    ]
