# pupil_fatigue/processing/trend.py
"""
Same-day trend of repeated measurements.

The day's series is split into an earlier and a later half; the difference
of their mean pupil diameters decides between declining and improving. A
flat series is then labelled variable or stable by its population std-dev.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..config.constants import TrendConstants
from ..domain.dataset import EyeStatistics
from .statistics import combined_pupil_average


@dataclass(frozen=True)
class DailyPoint:
    """Average pupil diameter of one measurement."""

    time: datetime
    pupil_diameter: float
    reaction_time_ms: Optional[int] = None


@dataclass(frozen=True)
class TrendResult:
    trend: str
    message: str
    recommendation: str
    icon: str
    color: str
    delta_mm: Optional[float] = None
    variability_mm: Optional[float] = None


TREND_OUTCOMES: Dict[str, Dict[str, str]] = {
    "insufficient": {
        "message": "Need more measurements to identify trends",
        "recommendation": "Take additional measurements throughout the day",
        "icon": "📊",
        "color": "#6B7280",
    },
    "declining": {
        "message": "Pupil diameter decreasing throughout the day - indicates increasing cognitive fatigue",
        "recommendation": "Consider taking breaks, reducing cognitive load, or checking sleep quality",
        "icon": "📉",
        "color": "#EF4444",
    },
    "improving": {
        "message": "Pupil diameter increasing - cognitive alertness improving throughout the day",
        "recommendation": "Great! Your cognitive state is improving. Maintain current activities",
        "icon": "📈",
        "color": "#10B981",
    },
    "variable": {
        "message": "High variability in pupil diameter - inconsistent cognitive state",
        "recommendation": "Try to maintain consistent work patterns and minimize distractions",
        "icon": "📊",
        "color": "#F59E0B",
    },
    "stable": {
        "message": "Stable pupil diameter - consistent cognitive performance",
        "recommendation": "Excellent cognitive stability. Continue your current routine",
        "icon": "⚖️",
        "color": "#3B82F6",
    },
}


def _result(trend: str, delta: Optional[float] = None, variability: Optional[float] = None) -> TrendResult:
    return TrendResult(trend=trend, delta_mm=delta, variability_mm=variability, **TREND_OUTCOMES[trend])


def analyze_trend(points: Sequence[DailyPoint]) -> TrendResult:
    """Classify the day's trajectory: declining, improving, variable or stable."""
    if len(points) < TrendConstants.MIN_POINTS:
        return _result("insufficient")

    ordered = sorted(points, key=lambda p: p.time)
    sizes = np.array([p.pupil_diameter for p in ordered], dtype=float)
    split = math.ceil(len(sizes) / 2)
    delta = float(sizes[split:].mean() - sizes[:split].mean())
    variability = float(sizes.std(ddof=0))

    if delta < -TrendConstants.DELTA_THRESHOLD_MM:
        trend = "declining"
    elif delta > TrendConstants.DELTA_THRESHOLD_MM:
        trend = "improving"
    elif variability > TrendConstants.VARIABILITY_THRESHOLD_MM:
        trend = "variable"
    else:
        trend = "stable"
    return _result(trend, delta, variability)


def _document_time(doc: Dict[str, Any]) -> datetime:
    # Store timestamp when read back, otherwise the client id (epoch ms)
    millis = doc.get("timestamp") or doc.get("id") or 0
    return datetime.fromtimestamp(int(millis) / 1000.0)


def _document_pupil_average(doc: Dict[str, Any]) -> float:
    avg = combined_pupil_average(
        EyeStatistics.from_dict(doc.get("leftEyeStats")),
        EyeStatistics.from_dict(doc.get("rightEyeStats")),
    )
    return avg if avg is not None else 0.0


def documents_to_frame(documents: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    """
    Tabulate stored records for history views.

    Columns: id, date, time, pupil_diameter, reaction_time, fatigue_level
    """
    rows = [
        {
            "id": str(doc.get("id", "")),
            "date": doc.get("date", ""),
            "time": _document_time(doc),
            "pupil_diameter": _document_pupil_average(doc),
            "reaction_time": doc.get("reactionTime"),
            "fatigue_level": doc.get("fatigueLevel"),
        }
        for doc in documents
    ]
    columns = ["id", "date", "time", "pupil_diameter", "reaction_time", "fatigue_level"]
    return pd.DataFrame(rows, columns=columns)


def build_daily_series(
    documents: Iterable[Dict[str, Any]],
    day: Union[date, str, None] = None,
) -> List[DailyPoint]:
    """Points of one day (default: today), ordered by write time."""
    day_str = (day or date.today()).isoformat() if not isinstance(day, str) else day
    df = documents_to_frame(documents)
    df = df[df["date"] == day_str].sort_values("time", kind="stable")
    return [
        DailyPoint(
            time=row.time.to_pydatetime() if isinstance(row.time, pd.Timestamp) else row.time,
            pupil_diameter=float(row.pupil_diameter),
            reaction_time_ms=None if pd.isna(row.reaction_time) else int(row.reaction_time),
        )
        for row in df.itertuples(index=False)
    ]
