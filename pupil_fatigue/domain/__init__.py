"""Domain models for pupil analysis reports and the records derived from them."""

from .dataset import Eye, EyeStatistics, FatigueLevel, ParsedReport, Sample
from .errors import NoValidDataError, StoreWriteError
from .records import AnalysisRecord, EyeTestRecord, PipelineResult

__all__ = [
    "Eye",
    "EyeStatistics",
    "FatigueLevel",
    "ParsedReport",
    "Sample",
    "NoValidDataError",
    "StoreWriteError",
    "AnalysisRecord",
    "EyeTestRecord",
    "PipelineResult",
]
