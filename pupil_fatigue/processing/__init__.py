"""Statistics, classification, derived metrics, trend and record assembly."""

from .statistics import compute_eye_stats, combined_pupil_average
from .classification import classify_fatigue, classify_average
from .derived_metrics import (
    DerivedMetricsGenerator,
    EyeTestMetrics,
    SIMULATED_FIELDS,
    calculate_blink_stats,
    estimate_contrast_sensitivity,
    estimate_focus_accuracy,
    estimate_reaction_time,
    generate_eye_movement_pattern,
)
from .trend import DailyPoint, TrendResult, analyze_trend, build_daily_series, documents_to_frame
from .assembler import RecordAssembler

__all__ = [
    "compute_eye_stats",
    "combined_pupil_average",
    "classify_fatigue",
    "classify_average",
    "DerivedMetricsGenerator",
    "EyeTestMetrics",
    "SIMULATED_FIELDS",
    "calculate_blink_stats",
    "estimate_contrast_sensitivity",
    "estimate_focus_accuracy",
    "estimate_reaction_time",
    "generate_eye_movement_pattern",
    "DailyPoint",
    "TrendResult",
    "analyze_trend",
    "build_daily_series",
    "documents_to_frame",
    "RecordAssembler",
]
