# pupil_fatigue/processing/assembler.py
"""
Record assembly: statistics, classification and derived metrics packed
into the records handed to the document store.

An eye with zero samples is omitted from the record (not zero-filled);
history views distinguish "no data for this eye" from a measured value.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Optional, Sequence

from ..config.config import AnalysisSettings, PipelineConfig
from ..domain.dataset import Eye, EyeStatistics, Sample
from ..domain.errors import NoValidDataError
from ..domain.records import AnalysisRecord, EyeTestRecord
from .classification import classify_fatigue
from .derived_metrics import (
    SIMULATED_ANALYSIS_FIELDS,
    SIMULATED_FIELDS,
    DerivedMetricsGenerator,
)
from .statistics import combined_pupil_average, compute_eye_stats


def _present(stats: EyeStatistics) -> Optional[EyeStatistics]:
    return stats if stats.mean != 0 else None


class RecordAssembler:
    """Build AnalysisRecord / EyeTestRecord instances from parsed samples."""

    def __init__(
        self,
        generator: Optional[DerivedMetricsGenerator] = None,
        clock: Callable[[], datetime] = datetime.now,
        uid: Optional[str] = None,
    ) -> None:
        self.generator = generator or DerivedMetricsGenerator()
        self.clock = clock
        self.uid = uid
        self._last_id_ms = 0

    def _next_id(self, now: datetime) -> str:
        # Epoch ms, strictly increasing per assembler even when the clock repeats
        id_ms = max(round(now.timestamp() * 1000), self._last_id_ms + 1)
        self._last_id_ms = id_ms
        return str(id_ms)

    def assemble(
        self,
        samples: Sequence[Sample],
        summary: str,
        settings: Optional[AnalysisSettings] = None,
        analysis_url: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AnalysisRecord:
        """
        Raises:
            NoValidDataError: if ``samples`` is empty
        """
        if not samples:
            raise NoValidDataError()

        left = _present(compute_eye_stats(samples, Eye.LEFT))
        right = _present(compute_eye_stats(samples, Eye.RIGHT))
        level = classify_fatigue(left, right)
        reaction_time = self.generator.reaction_time(level, combined_pupil_average(left, right))

        now = self.clock()
        return AnalysisRecord(
            id=self._next_id(now),
            date=now.date().isoformat(),
            summary=summary,
            fatigue_level=level,
            pupil_data=tuple(samples),
            frame_count=max(s.frame for s in samples) + 1,
            left_eye_stats=left,
            right_eye_stats=right,
            reaction_time_ms=reaction_time,
            analysis_url=analysis_url,
            metadata=metadata,
            settings=settings,
            uid=self.uid,
            simulated_fields=SIMULATED_ANALYSIS_FIELDS,
        )

    def assemble_eye_test(
        self,
        analysis: AnalysisRecord,
        config: Optional[PipelineConfig] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> EyeTestRecord:
        """Extend an analysis record with the eye-test metrics.

        The shared fields are copied unchanged, only ``metadata`` may be
        replaced.
        """
        config = config or PipelineConfig()
        metrics = self.generator.eye_test_metrics(
            analysis.fatigue_level, analysis.pupil_data, config.test_duration_s
        )
        return EyeTestRecord(
            id=analysis.id,
            date=analysis.date,
            summary=analysis.summary,
            fatigue_level=analysis.fatigue_level,
            pupil_data=analysis.pupil_data,
            frame_count=analysis.frame_count,
            left_eye_stats=analysis.left_eye_stats,
            right_eye_stats=analysis.right_eye_stats,
            reaction_time_ms=analysis.reaction_time_ms,
            analysis_url=analysis.analysis_url,
            metadata=metadata if metadata is not None else analysis.metadata,
            settings=analysis.settings,
            uid=analysis.uid,
            simulated_fields=SIMULATED_FIELDS,
            test_type=config.test_type,
            test_duration_s=config.test_duration_s,
            blink_count=metrics.blink_count,
            average_blink_rate=metrics.average_blink_rate,
            eye_movement_pattern=metrics.eye_movement_pattern,
            focus_accuracy=metrics.focus_accuracy,
            visual_acuity=metrics.visual_acuity,
            contrast_sensitivity=metrics.contrast_sensitivity,
        )
