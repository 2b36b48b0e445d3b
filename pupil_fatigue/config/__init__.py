"""Configuration and constants for pupil fatigue analysis."""

from .config import (
    AnalysisSettings,
    PipelineConfig,
    StoreConfig,
)
from .constants import (
    BlinkConstants,
    FatigueThresholds,
    ReactionTimeConstants,
    ReportMarkers,
    ServiceDefaults,
    TrendConstants,
    ValidationMessages,
)
from .config_builder import ConfigBuilder

__all__ = [
    "AnalysisSettings",
    "PipelineConfig",
    "StoreConfig",
    "BlinkConstants",
    "FatigueThresholds",
    "ReactionTimeConstants",
    "ReportMarkers",
    "ServiceDefaults",
    "TrendConstants",
    "ValidationMessages",
    "ConfigBuilder",
]
