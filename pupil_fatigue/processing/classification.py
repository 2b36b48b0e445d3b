"""Fatigue classification from average pupil diameter."""
from __future__ import annotations

from typing import Optional

from ..config.constants import FatigueThresholds
from ..domain.dataset import EyeStatistics, FatigueLevel
from .statistics import combined_pupil_average


def classify_average(avg_pupil_mm: Optional[float]) -> FatigueLevel:
    """Map an average pupil diameter to a fatigue level.

    Smaller pupils indicate drowsiness. Without an average the neutral
    ``moderate`` level is returned.
    """
    if avg_pupil_mm is None:
        return FatigueLevel.MODERATE
    if avg_pupil_mm < FatigueThresholds.HIGH_BELOW_MM:
        return FatigueLevel.HIGH
    if avg_pupil_mm > FatigueThresholds.LOW_ABOVE_MM:
        return FatigueLevel.LOW
    return FatigueLevel.MODERATE


def classify_fatigue(
    left: Optional[EyeStatistics] = None,
    right: Optional[EyeStatistics] = None,
) -> FatigueLevel:
    """Classify using the eyes that are present and have a mean > 0."""
    return classify_average(combined_pupil_average(left, right))
