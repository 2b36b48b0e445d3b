"""Persistable records produced by the record assembler."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..config.config import AnalysisSettings
from .dataset import EyeStatistics, FatigueLevel, Sample


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class AnalysisRecord:
    """
    One general analysis, created once and never updated in place.

    Attributes:
        id: Client epoch-millisecond timestamp as string, unique per save
        date: Client local date (YYYY-MM-DD) at save time
        left_eye_stats / right_eye_stats: None when the eye had no samples
        frame_count: max(frame) + 1, not the number of samples
        simulated_fields: Document keys whose values come from randomized
            stand-ins rather than measurements
        timestamp: Write time assigned by the store; only known on records
            read back from it
    """

    id: str
    date: str
    summary: str
    fatigue_level: FatigueLevel
    pupil_data: Tuple[Sample, ...]
    frame_count: int
    left_eye_stats: Optional[EyeStatistics] = None
    right_eye_stats: Optional[EyeStatistics] = None
    reaction_time_ms: Optional[int] = None
    analysis_url: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    settings: Optional[AnalysisSettings] = None
    uid: Optional[str] = None
    simulated_fields: Tuple[str, ...] = ()
    timestamp: Optional[int] = None

    def to_document(self) -> Dict[str, Any]:
        """Store document; None values are dropped, never written as null."""
        return _drop_none({
            "id": self.id,
            "date": self.date,
            "uid": self.uid,
            "summary": self.summary,
            "fatigueLevel": self.fatigue_level.value,
            "pupilData": [s.to_dict() for s in self.pupil_data],
            "frameCount": self.frame_count,
            "leftEyeStats": self.left_eye_stats.to_dict() if self.left_eye_stats else None,
            "rightEyeStats": self.right_eye_stats.to_dict() if self.right_eye_stats else None,
            "reactionTime": self.reaction_time_ms,
            "analysisUrl": self.analysis_url,
            "metadata": self.metadata,
            "settings": self.settings.to_dict() if self.settings else None,
            "simulatedFields": list(self.simulated_fields) or None,
        })

    @staticmethod
    def _base_kwargs(doc: Dict[str, Any]) -> Dict[str, Any]:
        reaction_time = doc.get("reactionTime")
        return {
            "id": str(doc["id"]),
            "date": doc.get("date", ""),
            "summary": doc.get("summary", ""),
            "fatigue_level": FatigueLevel(doc.get("fatigueLevel", FatigueLevel.MODERATE.value)),
            "pupil_data": tuple(Sample.from_dict(d) for d in doc.get("pupilData", [])),
            "frame_count": int(doc.get("frameCount", 0)),
            "left_eye_stats": EyeStatistics.from_dict(doc.get("leftEyeStats")),
            "right_eye_stats": EyeStatistics.from_dict(doc.get("rightEyeStats")),
            "reaction_time_ms": int(reaction_time) if reaction_time is not None else None,
            "analysis_url": doc.get("analysisUrl"),
            "metadata": doc.get("metadata"),
            "settings": AnalysisSettings.from_dict(doc["settings"]) if doc.get("settings") else None,
            "uid": doc.get("uid"),
            "simulated_fields": tuple(doc.get("simulatedFields", ())),
            "timestamp": doc.get("timestamp"),
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> AnalysisRecord:
        return cls(**cls._base_kwargs(doc))


@dataclass(frozen=True)
class EyeTestRecord(AnalysisRecord):
    """
    Eye-test variant: every analysis field plus the eye-test metrics.
    """

    test_type: str = "pupil_analysis"
    test_duration_s: float = 30.0
    blink_count: Optional[int] = None
    average_blink_rate: Optional[float] = None
    eye_movement_pattern: Optional[str] = None
    focus_accuracy: Optional[int] = None
    visual_acuity: Optional[float] = None
    contrast_sensitivity: Optional[float] = None

    def to_document(self) -> Dict[str, Any]:
        doc = super().to_document()
        doc.update(_drop_none({
            "testType": self.test_type,
            "testDuration": self.test_duration_s,
            "blinkCount": self.blink_count,
            "averageBlinkRate": self.average_blink_rate,
            "eyeMovementPattern": self.eye_movement_pattern,
            "focusAccuracy": self.focus_accuracy,
            "visualAcuity": self.visual_acuity,
            "contrastSensitivity": self.contrast_sensitivity,
        }))
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> EyeTestRecord:
        return cls(
            **cls._base_kwargs(doc),
            test_type=doc.get("testType", "pupil_analysis"),
            test_duration_s=float(doc.get("testDuration", 30.0)),
            blink_count=doc.get("blinkCount"),
            average_blink_rate=doc.get("averageBlinkRate"),
            eye_movement_pattern=doc.get("eyeMovementPattern"),
            focus_accuracy=doc.get("focusAccuracy"),
            visual_acuity=doc.get("visualAcuity"),
            contrast_sensitivity=doc.get("contrastSensitivity"),
        )


@dataclass
class PipelineResult:
    """Records produced by one pipeline run."""

    analysis: AnalysisRecord
    eye_test: Optional[EyeTestRecord] = None
    eye_test_saved: bool = False
    warnings: List[str] = field(default_factory=list)
