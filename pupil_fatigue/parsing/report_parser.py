# pupil_fatigue/parsing/report_parser.py
"""
Parser for the text report returned by the pupil analysis service.

A report mixes a free-text summary block with comma separated per-frame rows:

    37,left_eye,2.300457715988159
    Processed 255 frames
    Left Eye:
      Mean: 2.40 mm
    --- CSV Data ---
    Frame,Eye_Type,Diameter_mm
    0,left_eye,2.3495993614196777

Parsing is best-effort and lossy: rows that fail any check are dropped
without raising. Rows listed both before and after the CSV marker are kept
twice; downstream statistics rely on the exact sample count.

Example:
    >>> report = parse_report("0,left,2.5\\n1,Right,2.4")
    >>> [s.eye.value for s in report.samples]
    ['left_eye', 'right_eye']
"""
from __future__ import annotations

import math
import re
from enum import Enum, auto
from typing import List, Optional

from ..config.constants import ReportMarkers, ValidationMessages
from ..domain.dataset import Eye, ParsedReport, Sample

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

EYE_LABELS = {
    "left_eye": Eye.LEFT,
    "right_eye": Eye.RIGHT,
    "left": Eye.LEFT,
    "Left": Eye.LEFT,
    "right": Eye.RIGHT,
    "Right": Eye.RIGHT,
}


class SectionState(Enum):
    """Where in the report the parser currently is."""

    IDLE = auto()
    IN_SUMMARY = auto()
    IN_CSV = auto()


def normalize_eye_label(label: str) -> Optional[Eye]:
    """Map a report eye label to an Eye; None for unknown labels."""
    return EYE_LABELS.get(label.strip())


def _parse_int(text: str) -> Optional[int]:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else None


def _parse_float(text: str) -> Optional[float]:
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def parse_row(line: str) -> Optional[Sample]:
    """Parse ``frame,eye,diameter[,...]``; None if the row is malformed."""
    parts = line.split(",")
    if len(parts) < 3:
        return None
    frame = _parse_int(parts[0])
    eye = normalize_eye_label(parts[1])
    diameter = _parse_float(parts[2])
    if frame is None or frame < 0 or eye is None or diameter is None:
        return None
    return Sample(frame=frame, eye=eye, diameter_mm=diameter)


class ReportParser:
    """Turn report text into ordered samples plus the summary block."""

    def __init__(self, markers: type[ReportMarkers] = ReportMarkers) -> None:
        self.markers = markers

    def _is_summary_start(self, line: str) -> bool:
        return all(token in line for token in self.markers.SUMMARY_TRIGGERS)

    def _is_summary_content(self, line: str) -> bool:
        return any(key in line for key in self.markers.SUMMARY_KEYS)

    def parse(self, report_text: Optional[str]) -> ParsedReport:
        if not report_text:
            raise ValueError(ValidationMessages.EMPTY_REPORT)

        state = SectionState.IDLE
        samples: List[Sample] = []
        summary_lines: List[str] = []

        for raw in report_text.split("\n"):
            line = raw.strip()
            if not line:
                continue

            if self._is_summary_start(line):
                summary_lines.append(line)
                if state is SectionState.IDLE:
                    state = SectionState.IN_SUMMARY
                continue

            if line == self.markers.CSV_SECTION:
                state = SectionState.IN_CSV
                continue

            if line == self.markers.CSV_HEADER:
                continue

            if state is SectionState.IN_SUMMARY:
                if self._is_summary_content(line):
                    summary_lines.append(line)
                continue

            if "," in line:
                sample = parse_row(line)
                if sample is not None:
                    samples.append(sample)

        return ParsedReport(samples=samples, summary="\n".join(summary_lines).strip())


def parse_report(report_text: Optional[str]) -> ParsedReport:
    """Convenience wrapper around :class:`ReportParser`."""
    return ReportParser().parse(report_text)
