"""Report text parsing."""

from .report_parser import (
    ReportParser,
    SectionState,
    normalize_eye_label,
    parse_report,
    parse_row,
)

__all__ = [
    "ReportParser",
    "SectionState",
    "normalize_eye_label",
    "parse_report",
    "parse_row",
]
