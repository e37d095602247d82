"""Grade and percentile-band classification.

A :class:`GradeLadder` is an ordered list of bands, highest threshold
first.  ``classify(score)`` returns the labels of the first band whose
threshold the score meets (``score >= threshold``); the final band has
no threshold and catches everything below.

Ladders
-------
=================  ==========================================
Name               Thresholds
=================  ==========================================
FIVE_BAND          82 / 72 / 62 / 52 / else
SEVEN_BAND         90 / 82 / 72 / 62 / 52 / 42 / else
FIVE_BAND_KO       FIVE_BAND with Korean labels
=================  ==========================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

__all__ = [
    "Band",
    "GradeLadder",
    "FIVE_BAND",
    "SEVEN_BAND",
    "FIVE_BAND_KO",
]


@dataclass(frozen=True)
class Band:
    """One rung: ``threshold`` is ``None`` for the catch-all bottom band."""
    threshold: Optional[float]
    grade: str
    percentile: str


@dataclass(frozen=True)
class GradeLadder:
    """Ordered threshold ladder, highest threshold first."""

    name: str
    bands: Tuple[Band, ...]

    def __post_init__(self):
        if not self.bands or self.bands[-1].threshold is not None:
            raise ValueError(
                f"ladder {self.name!r} must end with a catch-all band")
        thresholds = [b.threshold for b in self.bands[:-1]]
        if any(t is None for t in thresholds):
            raise ValueError(
                f"ladder {self.name!r} has a catch-all band before the end")
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError(
                f"ladder {self.name!r} thresholds must be descending")

    def band(self, score: float) -> Band:
        for b in self.bands:
            if b.threshold is None or score >= b.threshold:
                return b
        return self.bands[-1]

    def classify(self, score: float) -> Tuple[str, str]:
        """Return ``(grade, percentile_band)`` for *score*."""
        b = self.band(score)
        return b.grade, b.percentile

    def grade(self, score: float) -> str:
        return self.band(score).grade

    def percentile(self, score: float) -> str:
        return self.band(score).percentile

    @property
    def grades(self) -> Tuple[str, ...]:
        return tuple(b.grade for b in self.bands)


FIVE_BAND = GradeLadder("five-band", (
    Band(82, "top", "top tier"),
    Band(72, "upper", "upper tier"),
    Band(62, "upper-middle", "above average"),
    Band(52, "middle", "average band"),
    Band(None, "lower", "lower band"),
))

SEVEN_BAND = GradeLadder("seven-band", (
    Band(90, "exceptional", "top 3%"),
    Band(82, "top", "top 10%"),
    Band(72, "upper", "top 25%"),
    Band(62, "upper-middle", "top 40%"),
    Band(52, "middle", "middle 40–60%"),
    Band(42, "lower-middle", "bottom 40%"),
    Band(None, "lower", "bottom 25%"),
))

FIVE_BAND_KO = GradeLadder("five-band-ko", (
    Band(82, "최상", "최상위"),
    Band(72, "상위", "상위권"),
    Band(62, "중상", "평균 이상"),
    Band(52, "중위", "평균권"),
    Band(None, "하위", "하위권"),
))
