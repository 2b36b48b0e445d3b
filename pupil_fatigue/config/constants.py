# pupil_fatigue/config/constants.py
"""Calibration and format constants for pupil fatigue analysis."""

from __future__ import annotations


class FatigueThresholds:
    """Average pupil diameter bounds (mm) separating the fatigue levels."""

    # avg < HIGH_BELOW_MM -> high fatigue
    HIGH_BELOW_MM: float = 2.2

    # avg > LOW_ABOVE_MM -> low fatigue (alert)
    LOW_ABOVE_MM: float = 2.6

    # Mean of both eyes' std-devs above this adds the variability note
    VARIABILITY_NOTE_STD_MM: float = 0.15


class ReactionTimeConstants:
    """Stand-in reaction time model (ms) until the service reports one."""

    BASE_RANGES_MS = {
        "low": (250.0, 300.0),
        "moderate": (300.0, 400.0),
        "high": (400.0, 550.0),
    }

    SMALL_PUPIL_MM: float = 2.0
    SMALL_PUPIL_PENALTY_MS: float = 50.0

    LARGE_PUPIL_MM: float = 3.0
    LARGE_PUPIL_BONUS_MS: float = 25.0

    MIN_REACTION_TIME_MS: int = 200


class BlinkConstants:
    """Blink detection from diameter discontinuities."""

    # Minimum diameter drop (mm) between adjacent same-eye samples
    DROP_THRESHOLD_MM: float = 0.5

    DEFAULT_TEST_DURATION_S: float = 30.0


class TrendConstants:
    """Same-day trend classification."""

    MIN_POINTS: int = 2

    # Second-half minus first-half mean (mm)
    DELTA_THRESHOLD_MM: float = 0.1

    # Population std-dev of the whole series (mm)
    VARIABILITY_THRESHOLD_MM: float = 0.15


class ReportMarkers:
    """Structural markers of the analysis service report text."""

    CSV_SECTION = "--- CSV Data ---"
    CSV_HEADER = "Frame,Eye_Type,Diameter_mm"
    SUMMARY_TRIGGERS = ("Processed", "frames")
    SUMMARY_KEYS = ("Eye:", "Mean:", "Std:", "Min:", "Max:")


class ServiceDefaults:
    """Defaults of the external analysis and TTS services."""

    ANALYSIS_FN_INDEX: int = 1
    DEFAULT_TV_MODEL: str = "ResNet18"

    TTS_MAX_CHARS: int = 300
    TTS_EXAGGERATION: float = 0.5
    TTS_TEMPERATURE: float = 0.8
    TTS_SEED: int = 0
    TTS_CFGW: float = 0.5


class ValidationMessages:
    """Standard validation and error messages."""

    EMPTY_REPORT = "Report text is required"
    NO_VALID_DATA = "No valid pupil data found in results"
    INVALID_TEST_DURATION = "Test duration must be > 0 seconds"
    EMPTY_TTS_TEXT = "Text input is required"
    TTS_TEXT_TOO_LONG = "Text must be 300 characters or less"
