# pupil_fatigue/io/io.py
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from ..domain.dataset import Sample

SAMPLE_COLUMNS = ["frame", "eye", "diameter_mm"]


def read_report(path: str) -> str:
    """Report text as returned by the analysis service (UTF-8)."""
    return Path(path).read_text(encoding="utf-8")


def samples_to_frame(samples: Sequence[Sample]) -> pd.DataFrame:
    """
    Samples as a DataFrame in report order.

    Columns: frame, eye ("left_eye" / "right_eye"), diameter_mm
    """
    rows = [(s.frame, s.eye.value, s.diameter_mm) for s in samples]
    return pd.DataFrame(rows, columns=SAMPLE_COLUMNS)


def write_tsv(df: pd.DataFrame, path: str) -> None:
    """
    DataFrame als TSV schreiben (Tab-separiert, Punkt als Dezimaltrennzeichen).
    """
    df.to_csv(path, sep="\t", index=False)


def read_tsv(path: str) -> pd.DataFrame:
    return pd.read_csv(path, sep="\t", low_memory=False)


def write_samples_tsv(samples: Sequence[Sample], path: str) -> None:
    write_tsv(samples_to_frame(samples), path)
