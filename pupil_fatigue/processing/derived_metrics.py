# pupil_fatigue/processing/derived_metrics.py
"""
Secondary metrics derived from the fatigue level and the raw samples.

The analysis service does not yet measure reaction time, eye movement,
focus, acuity or contrast sensitivity. Those values are SIMULATED: drawn
from level-keyed ranges with a seedable numpy Generator so a measured
implementation can replace them without changing the record schema. Their
document keys are listed in ``SIMULATED_FIELDS`` and copied into every
record's ``simulatedFields``.

Blink statistics are the exception: they are computed from the samples.

Example:
    >>> import numpy as np
    >>> gen = DerivedMetricsGenerator(np.random.default_rng(0))
    >>> 250 <= gen.reaction_time(FatigueLevel.LOW) <= 300
    True
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from ..config.constants import BlinkConstants, ReactionTimeConstants, ValidationMessages
from ..domain.dataset import FatigueLevel, Sample
from ..utils import round_half_up

SIMULATED_ANALYSIS_FIELDS: Tuple[str, ...] = ("reactionTime",)
SIMULATED_FIELDS: Tuple[str, ...] = SIMULATED_ANALYSIS_FIELDS + (
    "eyeMovementPattern",
    "focusAccuracy",
    "visualAcuity",
    "contrastSensitivity",
)

EYE_MOVEMENT_PATTERNS: Dict[FatigueLevel, Tuple[str, ...]] = {
    FatigueLevel.LOW: ("smooth", "precise", "coordinated"),
    FatigueLevel.MODERATE: ("slightly irregular", "mostly coordinated", "minor tremor"),
    FatigueLevel.HIGH: ("irregular", "uncoordinated", "significant tremor", "delayed"),
}

FOCUS_ACCURACY_RANGES: Dict[FatigueLevel, Tuple[float, float]] = {
    FatigueLevel.LOW: (90.0, 100.0),
    FatigueLevel.MODERATE: (75.0, 90.0),
    FatigueLevel.HIGH: (60.0, 75.0),
}

# Snellen 20/20, 20/25, 20/30 as decimal acuity
VISUAL_ACUITY: Dict[FatigueLevel, float] = {
    FatigueLevel.LOW: 20 / 20,
    FatigueLevel.MODERATE: 20 / 25,
    FatigueLevel.HIGH: 20 / 30,
}

CONTRAST_SENSITIVITY_RANGES: Dict[FatigueLevel, Tuple[float, float]] = {
    FatigueLevel.LOW: (95.0, 100.0),
    FatigueLevel.MODERATE: (80.0, 95.0),
    FatigueLevel.HIGH: (65.0, 80.0),
}


def _rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def estimate_reaction_time(
    level: FatigueLevel,
    avg_pupil_mm: Optional[float] = None,
    rng: Optional[np.random.Generator] = None,
) -> int:
    """SIMULATED reaction time in ms, floor-clamped at 200 ms."""
    low, high = ReactionTimeConstants.BASE_RANGES_MS[level.value]
    base = float(_rng(rng).uniform(low, high))
    if avg_pupil_mm:
        if avg_pupil_mm < ReactionTimeConstants.SMALL_PUPIL_MM:
            base += ReactionTimeConstants.SMALL_PUPIL_PENALTY_MS
        elif avg_pupil_mm > ReactionTimeConstants.LARGE_PUPIL_MM:
            base -= ReactionTimeConstants.LARGE_PUPIL_BONUS_MS
    return max(ReactionTimeConstants.MIN_REACTION_TIME_MS, int(round_half_up(base)))


def calculate_blink_stats(
    samples: Sequence[Sample],
    test_duration_s: float = BlinkConstants.DEFAULT_TEST_DURATION_S,
) -> Tuple[int, float]:
    """
    Count blinks as sudden diameter drops between list-adjacent samples.

    Only pairs of the same eye count. List order is the parse order, which
    is not necessarily time order when the eyes are not interleaved.

    Returns:
        (blink_count, blinks per minute rounded to one decimal)
    """
    if test_duration_s <= 0:
        raise ValueError(ValidationMessages.INVALID_TEST_DURATION)
    blink_count = 0
    for previous, current in zip(samples, samples[1:]):
        if previous.eye != current.eye:
            continue
        if previous.diameter_mm - current.diameter_mm > BlinkConstants.DROP_THRESHOLD_MM:
            blink_count += 1
    rate = round_half_up(blink_count / test_duration_s * 60.0, 1)
    return blink_count, rate


def generate_eye_movement_pattern(
    level: FatigueLevel, rng: Optional[np.random.Generator] = None
) -> str:
    """SIMULATED descriptive label, not derived from motion data."""
    options = EYE_MOVEMENT_PATTERNS[level]
    return options[int(_rng(rng).integers(len(options)))]


def estimate_focus_accuracy(
    level: FatigueLevel, rng: Optional[np.random.Generator] = None
) -> int:
    """SIMULATED focus accuracy percentage."""
    low, high = FOCUS_ACCURACY_RANGES[level]
    return int(round_half_up(float(_rng(rng).uniform(low, high))))


def estimate_contrast_sensitivity(
    level: FatigueLevel, rng: Optional[np.random.Generator] = None
) -> float:
    """SIMULATED contrast sensitivity percentage, one decimal."""
    low, high = CONTRAST_SENSITIVITY_RANGES[level]
    return round_half_up(float(_rng(rng).uniform(low, high)), 1)


@dataclass(frozen=True)
class EyeTestMetrics:
    """Eye-test specific metrics of one measurement."""

    blink_count: int
    average_blink_rate: float
    eye_movement_pattern: str
    focus_accuracy: int
    visual_acuity: float
    contrast_sensitivity: float


class DerivedMetricsGenerator:
    """Bundle the metric functions around one random generator."""

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = _rng(rng)

    @classmethod
    def from_seed(cls, seed: Optional[int]) -> DerivedMetricsGenerator:
        return cls(np.random.default_rng(seed))

    def reaction_time(self, level: FatigueLevel, avg_pupil_mm: Optional[float] = None) -> int:
        return estimate_reaction_time(level, avg_pupil_mm, self.rng)

    def eye_test_metrics(
        self,
        level: FatigueLevel,
        samples: Sequence[Sample],
        test_duration_s: float = BlinkConstants.DEFAULT_TEST_DURATION_S,
    ) -> EyeTestMetrics:
        blink_count, blink_rate = calculate_blink_stats(samples, test_duration_s)
        return EyeTestMetrics(
            blink_count=blink_count,
            average_blink_rate=blink_rate,
            eye_movement_pattern=generate_eye_movement_pattern(level, self.rng),
            focus_accuracy=estimate_focus_accuracy(level, self.rng),
            visual_acuity=VISUAL_ACUITY[level],
            contrast_sensitivity=estimate_contrast_sensitivity(level, self.rng),
        )
