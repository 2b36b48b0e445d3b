# pupil_fatigue/io/observers.py
"""
Observers that report pipeline runs without coupling the pipeline to them.

Example:
    >>> pipeline = FatiguePipeline(client)
    >>> pipeline.register_observer(ConsoleReporter())
    >>> pipeline.register_observer(MetricsLogger("logs/analyses.csv"))
    >>> result = pipeline.process(report_text, settings)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from ..config.config import PipelineConfig
from ..domain.records import PipelineResult
from ..processing.recommendations import fatigue_level_emoji, format_pupil_diameter, generate_recommendations


class PipelineObserver(ABC):
    """
    Abstract base class for pipeline observers.
    """

    @abstractmethod
    def on_pipeline_start(self, config: PipelineConfig):
        """
        Called before the report is parsed.

        Args:
            config: Pipeline configuration of the run
        """
        pass

    @abstractmethod
    def on_pipeline_complete(self, config: PipelineConfig, result: PipelineResult):
        """
        Called after the analysis record was written.

        Args:
            config: Pipeline configuration of the run
            result: Records produced and whether the eye test was saved
        """
        pass

    @abstractmethod
    def on_pipeline_error(self, config: PipelineConfig, error: Exception):
        """
        Called when parsing, assembly or the analysis write failed.
        """
        pass


class ConsoleReporter(PipelineObserver):
    """
    Prints each run and its outcome to the console.
    """

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def on_pipeline_start(self, config: PipelineConfig):
        print(f"\n{'='*70}")
        print(f"🚀 Analyzing report ({config.test_type}, {config.test_duration_s:g} s)")
        print(f"{'='*70}\n")

    def on_pipeline_complete(self, config: PipelineConfig, result: PipelineResult):
        analysis = result.analysis
        level = analysis.fatigue_level
        print(f"\n{'='*70}")
        print(f"✅ Analysis {analysis.id} saved")
        print(f"   Samples: {len(analysis.pupil_data)} ({analysis.frame_count} frames)")
        print(f"   Fatigue level: {fatigue_level_emoji(level)} {level.value}")
        if self.verbose:
            for name, stats in (("Left", analysis.left_eye_stats), ("Right", analysis.right_eye_stats)):
                if stats is not None:
                    print(
                        f"   - {name} eye: mean {format_pupil_diameter(stats.mean)}, "
                        f"std {format_pupil_diameter(stats.std_dev)}"
                    )
            print(f"   - Reaction time: {analysis.reaction_time_ms} ms (simulated)")
            if result.eye_test is not None:
                print(
                    f"   - Blinks: {result.eye_test.blink_count} "
                    f"({result.eye_test.average_blink_rate}/min)"
                )
            print("\n   Recommendations:")
            for line in generate_recommendations(level, analysis.left_eye_stats, analysis.right_eye_stats):
                print(f"   {line}")
        if not result.eye_test_saved and config.save_eye_test:
            print("   ⚠️ Eye-test record was not saved")
        print(f"{'='*70}\n")

    def on_pipeline_error(self, config: PipelineConfig, error: Exception):
        print(f"\n{'='*70}")
        print("❌ Analysis failed")
        print(f"   Error: {error}")
        print(f"{'='*70}\n")


class MetricsLogger(PipelineObserver):
    """
    Appends one CSV line per analysis.

    Example:
        >>> pipeline.register_observer(MetricsLogger("logs/analyses.csv"))
    """

    HEADER = [
        "timestamp",
        "analysis_id",
        "test_type",
        "fatigue_level",
        "n_samples",
        "frame_count",
        "left_mean_mm",
        "right_mean_mm",
        "reaction_time_ms",
        "blink_count",
        "eye_test_saved",
    ]

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        if not self.log_file.exists():
            self._append(self.HEADER)

    def _append(self, row):
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(",".join(row) + "\n")

    def on_pipeline_start(self, config: PipelineConfig):
        """No action on start."""
        pass

    def on_pipeline_complete(self, config: PipelineConfig, result: PipelineResult):
        analysis = result.analysis
        left, right = analysis.left_eye_stats, analysis.right_eye_stats
        blink_count = result.eye_test.blink_count if result.eye_test is not None else None
        self._append([
            datetime.now().isoformat(),
            analysis.id,
            config.test_type,
            analysis.fatigue_level.value,
            str(len(analysis.pupil_data)),
            str(analysis.frame_count),
            f"{left.mean:.4f}" if left else "",
            f"{right.mean:.4f}" if right else "",
            str(analysis.reaction_time_ms),
            "" if blink_count is None else str(blink_count),
            str(result.eye_test_saved),
        ])

    def on_pipeline_error(self, config: PipelineConfig, error: Exception):
        # Commas would shift the columns
        message = str(error).replace(",", ";")
        self._append([datetime.now().isoformat(), "ERROR", config.test_type, message] + [""] * 7)
