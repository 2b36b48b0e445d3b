# pupil_fatigue/io/pipeline.py
"""Report processing pipeline: parse -> score -> assemble -> persist.

Observers are notified of every run; their failures are printed and never
interrupt the pipeline.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..config.config import AnalysisSettings, PipelineConfig
from ..domain.errors import StoreWriteError
from ..domain.records import AnalysisRecord, PipelineResult
from ..parsing.report_parser import ReportParser
from ..processing.assembler import RecordAssembler
from ..processing.derived_metrics import DerivedMetricsGenerator
from .store import StoreClient


def eye_test_metadata(metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Metadata of an eye-test record derived from an analysis."""
    extended = dict(metadata or {})
    extended.update({"source": "analysis_service", "originalAnalysis": True})
    return extended


class FatiguePipeline:
    """Turns one analysis service report into stored records.

    Responsibilities:
        - Parse the report once
        - Assemble the analysis record and its eye-test extension
        - Write both to the store
        - Notify observers

    Example:
        >>> client = StoreClient(InMemoryDocumentStore())
        >>> pipeline = FatiguePipeline(client, PipelineConfig(seed=1))
        >>> result = pipeline.process(report_text, AnalysisSettings())
        >>> result.analysis.fatigue_level
        <FatigueLevel.MODERATE: 'moderate'>
    """

    def __init__(
        self,
        client: StoreClient,
        config: Optional[PipelineConfig] = None,
        parser: Optional[ReportParser] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.client = client
        self.config = config or PipelineConfig()
        self.parser = parser or ReportParser()
        self.assembler = RecordAssembler(
            generator=DerivedMetricsGenerator.from_seed(self.config.seed),
            clock=clock,
            uid=client.uid,
        )
        self._observers: List[Any] = []

    def register_observer(self, observer: Any) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister_observer(self, observer: Any) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify_start(self) -> None:
        for observer in self._observers:
            try:
                observer.on_pipeline_start(self.config)
            except Exception as e:
                print(f"Warning: Observer {type(observer).__name__} failed on start: {e}")

    def _notify_complete(self, result: PipelineResult) -> None:
        for observer in self._observers:
            try:
                observer.on_pipeline_complete(self.config, result)
            except Exception as e:
                print(f"Warning: Observer {type(observer).__name__} failed on complete: {e}")

    def _notify_error(self, error: Exception) -> None:
        for observer in self._observers:
            try:
                observer.on_pipeline_error(self.config, error)
            except Exception as e:
                print(f"Warning: Observer {type(observer).__name__} failed on error: {e}")

    def analyze(
        self,
        report_text: str,
        settings: Optional[AnalysisSettings] = None,
        analysis_url: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AnalysisRecord:
        """Parse and assemble without touching the store.

        Raises:
            ValueError: if the report text is empty
            NoValidDataError: if the report holds no sample rows
        """
        report = self.parser.parse(report_text)
        return self.assembler.assemble(report.samples, report.summary, settings, analysis_url, metadata)

    def process(
        self,
        report_text: str,
        settings: Optional[AnalysisSettings] = None,
        analysis_url: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> PipelineResult:
        """Analyze a report and persist the analysis and eye-test records.

        The analysis record is written first; its failure aborts the run. The
        eye-test write is best effort: a failure is kept as a warning and
        ``eye_test_saved`` stays False.

        Raises:
            NoValidDataError: if the report holds no sample rows
            StoreWriteError: if the analysis record could not be written
        """
        self._notify_start()

        try:
            analysis = self.analyze(report_text, settings, analysis_url, metadata)
            self.client.save_analysis(analysis)
        except Exception as e:
            self._notify_error(e)
            raise

        result = PipelineResult(analysis=analysis)
        if self.config.save_eye_test:
            result.eye_test = self.assembler.assemble_eye_test(
                analysis, self.config, eye_test_metadata(metadata)
            )
            try:
                self.client.save_eye_test(result.eye_test)
                result.eye_test_saved = True
            except StoreWriteError as e:
                message = f"Eye-test record {result.eye_test.id} was not saved: {e}"
                print(f"Warning: {message}")
                result.warnings.append(message)

        self._notify_complete(result)
        return result
