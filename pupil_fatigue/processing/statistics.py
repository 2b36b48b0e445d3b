"""Per-eye descriptive statistics."""
from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from ..domain.dataset import Eye, EyeStatistics, Sample


def compute_eye_stats(samples: Iterable[Sample], eye: Eye) -> EyeStatistics:
    """
    Mean, population std-dev (divide by N), min and max of one eye.

    Returns the zero-filled statistics when the eye has no samples.
    """
    values = np.array([s.diameter_mm for s in samples if s.eye == eye], dtype=float)
    if values.size == 0:
        return EyeStatistics.empty()
    return EyeStatistics(
        mean=float(values.mean()),
        std_dev=float(values.std(ddof=0)),
        min=float(values.min()),
        max=float(values.max()),
    )


def combined_pupil_average(
    left: Optional[EyeStatistics] = None,
    right: Optional[EyeStatistics] = None,
) -> Optional[float]:
    """Average of the eye means that are present and > 0; None if neither is."""
    means = [stats.mean for stats in (left, right) if stats is not None and stats.mean > 0]
    if not means:
        return None
    return sum(means) / len(means)
