"""Data structures for parsed pupil analysis reports.

The classes carry only data and minimal helpers; the parser and the
processing modules implement the behaviour.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Eye(str, Enum):
    """The two eyes a sample can belong to."""

    LEFT = "left_eye"
    RIGHT = "right_eye"


class FatigueLevel(str, Enum):
    """Categorical fatigue classification of one measurement."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


@dataclass(frozen=True)
class Sample:
    """Pupil diameter of one eye at one frame."""

    frame: int
    eye: Eye
    diameter_mm: float

    def to_dict(self) -> Dict[str, Any]:
        return {"frame": self.frame, "eye": self.eye.value, "diameter": self.diameter_mm}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Sample:
        return cls(frame=int(data["frame"]), eye=Eye(data["eye"]), diameter_mm=float(data["diameter"]))


@dataclass(frozen=True)
class EyeStatistics:
    """Descriptive statistics over all samples of one eye."""

    mean: float = 0.0
    std_dev: float = 0.0
    min: float = 0.0
    max: float = 0.0

    @classmethod
    def empty(cls) -> EyeStatistics:
        return cls()

    @property
    def has_data(self) -> bool:
        return self.mean > 0

    def to_dict(self) -> Dict[str, float]:
        # "std" is the key used by already stored documents
        return {"mean": self.mean, "std": self.std_dev, "min": self.min, "max": self.max}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional[EyeStatistics]:
        if not data:
            return None
        return cls(
            mean=float(data.get("mean", 0.0)),
            std_dev=float(data.get("std", data.get("std_dev", 0.0))),
            min=float(data.get("min", 0.0)),
            max=float(data.get("max", 0.0)),
        )


@dataclass
class ParsedReport:
    """Samples and summary block extracted from one report."""

    samples: List[Sample] = field(default_factory=list)
    summary: str = ""

    @property
    def frame_count(self) -> int:
        if not self.samples:
            return 0
        return max(s.frame for s in self.samples) + 1

    def samples_for(self, eye: Eye) -> List[Sample]:
        return [s for s in self.samples if s.eye == eye]
