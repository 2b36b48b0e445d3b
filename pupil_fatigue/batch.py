# pupil_fatigue/batch.py
"""
Parallel analysis of several report files.

Reports are independent: every job parses and assembles its own report
with its own random generator and shares no mutable state. Writing to the
store happens afterwards in the calling process, one record at a time.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from joblib import Parallel, delayed

from .config import AnalysisSettings, PipelineConfig
from .domain.errors import StoreWriteError
from .domain.records import AnalysisRecord, EyeTestRecord
from .io.io import read_report
from .io.pipeline import eye_test_metadata
from .io.store import StoreClient
from .parsing.report_parser import ReportParser
from .processing.assembler import RecordAssembler
from .processing.derived_metrics import DerivedMetricsGenerator


@dataclass
class BatchItem:
    """Outcome of one report file."""

    path: str
    analysis: Optional[AnalysisRecord] = None
    eye_test: Optional[EyeTestRecord] = None
    error: Optional[str] = None
    saved: bool = False
    eye_test_saved: bool = False

    @property
    def ok(self) -> bool:
        return self.analysis is not None


def _analyze_file(
    path: str,
    index: int,
    started: datetime,
    settings: AnalysisSettings,
    config: PipelineConfig,
    uid: Optional[str],
) -> BatchItem:
    seed = None if config.seed is None else config.seed + index
    # Offset by index so records of one batch never share an id
    written_at = started + timedelta(milliseconds=index)
    assembler = RecordAssembler(
        generator=DerivedMetricsGenerator.from_seed(seed),
        clock=lambda: written_at,
        uid=uid,
    )
    try:
        report = ReportParser().parse(read_report(path))
        analysis = assembler.assemble(
            report.samples, report.summary, settings, metadata={"sourceFile": str(path)}
        )
    except (OSError, ValueError) as e:
        return BatchItem(path=str(path), error=f"{type(e).__name__}: {e}")

    item = BatchItem(path=str(path), analysis=analysis)
    if config.save_eye_test:
        item.eye_test = assembler.assemble_eye_test(analysis, config, eye_test_metadata(analysis.metadata))
    return item


def analyze_reports(
    paths: Sequence[str],
    settings: Optional[AnalysisSettings] = None,
    config: Optional[PipelineConfig] = None,
    uid: Optional[str] = None,
    n_jobs: int = -1,
    backend: Optional[str] = None,
    started: Optional[datetime] = None,
) -> List[BatchItem]:
    """
    Parse and assemble every report in parallel.

    Args:
        paths: Report files
        n_jobs: Number of parallel jobs (-1 = all CPUs, 1 = sequential)
        backend: joblib backend (None = joblib default)
        started: Batch start time; record i is stamped ``started + i`` ms

    Returns:
        One BatchItem per path, in input order. Unreadable reports and
        reports without samples carry ``error`` instead of records.
    """
    settings = settings or AnalysisSettings()
    config = config or PipelineConfig()
    started = started or datetime.now()

    print(f"[Batch] Analyzing {len(paths)} reports with n_jobs={n_jobs}")
    return Parallel(n_jobs=n_jobs, backend=backend)(
        delayed(_analyze_file)(path, i, started, settings, config, uid)
        for i, path in enumerate(paths)
    )


def save_batch(client: StoreClient, items: Sequence[BatchItem]) -> int:
    """
    Write the records of successful items; returns the number saved.

    A failed analysis write marks the item's error; its eye test is then
    not written either.
    """
    saved = 0
    for item in items:
        if not item.ok:
            continue
        try:
            client.save_analysis(item.analysis)
        except StoreWriteError as e:
            item.error = str(e)
            continue
        item.saved = True
        saved += 1
        if item.eye_test is not None:
            try:
                client.save_eye_test(item.eye_test)
                item.eye_test_saved = True
            except StoreWriteError as e:
                print(f"Warning: eye-test record for {item.path} was not saved: {e}")
    return saved
