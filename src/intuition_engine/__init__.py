"""Intuition Engine: deterministic intuition-facet scoring from a profile.

Turns two five-way proportion vectors (the ten-god groups and the five
elements), a strength value and five interaction counts into a report of
20 sub-metric scores, 4 category averages, 4 weighted composites and an
overload-risk indicator, each with a grade and percentile-band label.

The pipeline is a pure function: normalise → compose per-style linear
signals → blend styles → tanh transform → pattern bonuses → aggregate →
classify.  Formula generations are selected through named
:class:`EngineProfile` objects rather than separate code paths.
"""
from .engine import IntuitionEngine, compute
from .profile import InputProfile, CATEGORY_A_KEYS, CATEGORY_B_KEYS
from .report import Report, SubMetricResult, CategoryAverage, OverallResult

# Configuration
from .constants import ConstantRegistry, DEFAULT_CONSTANTS
from .profiles import EngineProfile, PROFILES, DEFAULT_PROFILE, get_profile
from .classify import Band, GradeLadder, FIVE_BAND, SEVEN_BAND, FIVE_BAND_KO

# Pipeline building blocks
from .normalization import normalize_auto, reduce_interactions, as_count, to_finite
from .dispersion import dominance, entropy, spike
from .signals import SignalState, derive_signals
from .metrics import (
    StyleFormula, StyleCandidate, MetricSpec,
    METRICS, CATEGORIES, OVERLOAD_RISK_ID, LOCALES, get_metric, localized,
    compose_styles,
)
from .patterns import (
    Clause, PatternRule, PatternFiring, PatternOutcome,
    PATTERN_RULES, apply_patterns, rules_for, get_rules, replace_rules,
)
from .scoring import round_half_up, to_score, blend_styles, score_metric
from .aggregate import (
    AGGREGATION_POLICIES, CompositeSpec, COMPOSITES,
    category_value, category_averages, composite_scores,
)

__version__ = "0.4.0"

__all__ = [
    # Entry points
    "IntuitionEngine", "compute",
    "InputProfile", "CATEGORY_A_KEYS", "CATEGORY_B_KEYS",
    "Report", "SubMetricResult", "CategoryAverage", "OverallResult",
    # Configuration
    "ConstantRegistry", "DEFAULT_CONSTANTS",
    "EngineProfile", "PROFILES", "DEFAULT_PROFILE", "get_profile",
    "Band", "GradeLadder", "FIVE_BAND", "SEVEN_BAND", "FIVE_BAND_KO",
    # Pipeline building blocks
    "normalize_auto", "reduce_interactions", "as_count", "to_finite",
    "dominance", "entropy", "spike",
    "SignalState", "derive_signals",
    "StyleFormula", "StyleCandidate", "MetricSpec",
    "METRICS", "CATEGORIES", "OVERLOAD_RISK_ID", "LOCALES",
    "get_metric", "localized", "compose_styles",
    "Clause", "PatternRule", "PatternFiring", "PatternOutcome",
    "PATTERN_RULES", "apply_patterns", "rules_for", "get_rules", "replace_rules",
    "round_half_up", "to_score", "blend_styles", "score_metric",
    "AGGREGATION_POLICIES", "CompositeSpec", "COMPOSITES",
    "category_value", "category_averages", "composite_scores",
]
