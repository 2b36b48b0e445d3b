# pupil_fatigue/config/config.py
"""
Configuration classes for the pupil fatigue pipeline.

This module defines the parameters for:
  - the analysis request echoed into every record (AnalysisSettings)
  - the eye-test variant of the pipeline (PipelineConfig)
  - the document store layout (StoreConfig)

Example:
    >>> from pupil_fatigue.config import AnalysisSettings, PipelineConfig
    >>>
    >>> settings = AnalysisSettings(pupil_selection="both", tv_model="ResNet18")
    >>> cfg = PipelineConfig(test_type="blink_test", test_duration_s=45.0, seed=7)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, get_args

from .constants import BlinkConstants, ServiceDefaults, ValidationMessages

PupilSelection = Literal["both", "left", "right"]
TVModel = Literal["ResNet18", "ResNet50"]
TestType = Literal["pupil_analysis", "blink_test", "eye_movement", "focus_test"]


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Model and selection parameters used to request the external analysis.

    Passed through to the records for audit; the pipeline never interprets them.
    """

    pupil_selection: PupilSelection = "both"
    tv_model: TVModel = ServiceDefaults.DEFAULT_TV_MODEL
    blink_detection: bool = True

    def __post_init__(self) -> None:
        if self.pupil_selection not in get_args(PupilSelection):
            raise ValueError(f"Unknown pupil selection: {self.pupil_selection}")
        if self.tv_model not in get_args(TVModel):
            raise ValueError(f"Unknown tv model: {self.tv_model}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pupilSelection": self.pupil_selection,
            "tvModel": self.tv_model,
            "blinkDetection": self.blink_detection,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AnalysisSettings:
        return cls(
            pupil_selection=data.get("pupilSelection", "both"),
            tv_model=data.get("tvModel", ServiceDefaults.DEFAULT_TV_MODEL),
            blink_detection=bool(data.get("blinkDetection", True)),
        )


@dataclass
class PipelineConfig:
    """
    Configuration for the parse -> score -> persist pipeline.
    """

    # Which eye test the record is filed under
    test_type: TestType = "pupil_analysis"

    # Recording length used for the blink rate (seconds)
    test_duration_s: float = BlinkConstants.DEFAULT_TEST_DURATION_S

    # Also write the eye-test record next to the analysis record
    save_eye_test: bool = True

    # Seed for the simulated metrics; None draws fresh entropy
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.test_type not in get_args(TestType):
            raise ValueError(f"Unknown test type: {self.test_type}")
        if self.test_duration_s <= 0:
            raise ValueError(ValidationMessages.INVALID_TEST_DURATION)


@dataclass
class StoreConfig:
    """
    Document store layout.

    One collection per (record kind, user) pair; both kinds live under the
    same pseudo-identity.
    """

    # Directory of the JSON file store; None keeps records in memory
    store_dir: Optional[str] = None

    user_id: str = "demo-user-12345"

    analyses_path_template: str = "users/{uid}/analyses"
    eye_tests_path_template: str = "eye-test/{uid}"
