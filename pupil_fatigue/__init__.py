"""Cognitive fatigue analysis from pupil diameter reports."""

from .config import AnalysisSettings, PipelineConfig, StoreConfig
from .domain import (
    AnalysisRecord,
    Eye,
    EyeStatistics,
    EyeTestRecord,
    FatigueLevel,
    NoValidDataError,
    PipelineResult,
    Sample,
    StoreWriteError,
)
from .parsing import parse_report
from .processing import analyze_trend, classify_fatigue, compute_eye_stats
from .io import FatiguePipeline, InMemoryDocumentStore, JsonFileDocumentStore, StoreClient

__version__ = "0.1.0"

__all__ = [
    "AnalysisSettings",
    "PipelineConfig",
    "StoreConfig",
    "AnalysisRecord",
    "Eye",
    "EyeStatistics",
    "EyeTestRecord",
    "FatigueLevel",
    "NoValidDataError",
    "PipelineResult",
    "Sample",
    "StoreWriteError",
    "parse_report",
    "analyze_trend",
    "classify_fatigue",
    "compute_eye_stats",
    "FatiguePipeline",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
    "StoreClient",
]
