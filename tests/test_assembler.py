import pytest

from pupil_fatigue.config import AnalysisSettings, PipelineConfig
from pupil_fatigue.domain import (
    AnalysisRecord,
    Eye,
    EyeTestRecord,
    FatigueLevel,
    NoValidDataError,
    Sample,
)
from pupil_fatigue.parsing import parse_report
from pupil_fatigue.processing import DerivedMetricsGenerator, RecordAssembler, SIMULATED_FIELDS

from conftest import FIXED_NOW, make_samples


@pytest.fixture
def assembler(clock):
    return RecordAssembler(DerivedMetricsGenerator.from_seed(0), clock=clock, uid="u1")


def test_no_samples_raises(assembler):
    with pytest.raises(NoValidDataError, match="No valid pupil data found in results"):
        assembler.assemble([], "summary")


def test_record_fields(assembler):
    samples = make_samples([2.0, 3.0], [2.5])
    record = assembler.assemble(samples, "Processed 2 frames", AnalysisSettings(), "http://plot", {"k": 1})
    assert record.id == str(round(FIXED_NOW.timestamp() * 1000))
    assert record.date == "2025-03-14"
    assert record.uid == "u1"
    assert record.frame_count == 2
    assert record.left_eye_stats.mean == pytest.approx(2.5)
    assert record.left_eye_stats.std_dev == pytest.approx(0.5)
    assert record.right_eye_stats.mean == pytest.approx(2.5)
    assert record.fatigue_level is FatigueLevel.MODERATE
    assert 300 <= record.reaction_time_ms <= 400
    assert record.analysis_url == "http://plot"
    assert record.metadata == {"k": 1}
    assert record.simulated_fields == ("reactionTime",)


def test_ids_increase_when_clock_repeats():
    assembler = RecordAssembler(DerivedMetricsGenerator.from_seed(0), clock=lambda: FIXED_NOW)
    ids = [int(assembler.assemble(make_samples([2.4]), "").id) for _ in range(3)]
    base = round(FIXED_NOW.timestamp() * 1000)
    assert ids == [base, base + 1, base + 2]


def test_frame_count_uses_max_frame_not_sample_count(assembler):
    samples = [Sample(7, Eye.LEFT, 2.4), Sample(2, Eye.LEFT, 2.4)]
    assert assembler.assemble(samples, "").frame_count == 8


def test_missing_eye_is_omitted(assembler):
    record = assembler.assemble(make_samples([2.7, 2.9]), "")
    assert record.right_eye_stats is None
    assert record.fatigue_level is FatigueLevel.LOW
    doc = record.to_document()
    assert "rightEyeStats" not in doc
    assert doc["leftEyeStats"]["std"] == pytest.approx(0.1)


def test_document_drops_none_values(assembler):
    doc = assembler.assemble(make_samples([2.4]), "").to_document()
    assert None not in doc.values()
    assert "analysisUrl" not in doc
    assert "metadata" not in doc
    assert "settings" not in doc
    assert doc["pupilData"] == [{"frame": 0, "eye": "left_eye", "diameter": 2.4}]


def test_eye_test_extends_analysis(assembler):
    samples = make_samples([3.0, 2.0, 2.1], [2.2])
    analysis = assembler.assemble(samples, "s", AnalysisSettings(tv_model="ResNet50"))
    config = PipelineConfig(test_type="blink_test", test_duration_s=60)
    eye_test = assembler.assemble_eye_test(analysis, config, {"source": "analysis_service"})

    assert isinstance(eye_test, EyeTestRecord)
    assert eye_test.id == analysis.id
    assert eye_test.reaction_time_ms == analysis.reaction_time_ms
    assert eye_test.fatigue_level is analysis.fatigue_level
    assert eye_test.pupil_data == analysis.pupil_data
    assert eye_test.blink_count == 1
    assert eye_test.average_blink_rate == 1.0
    assert eye_test.test_type == "blink_test"
    assert eye_test.simulated_fields == SIMULATED_FIELDS
    assert eye_test.metadata == {"source": "analysis_service"}

    analysis_doc = analysis.to_document()
    eye_doc = eye_test.to_document()
    shared = set(analysis_doc) - {"metadata", "simulatedFields"}
    assert all(eye_doc[key] == analysis_doc[key] for key in shared)
    assert eye_doc["testDuration"] == 60
    assert eye_doc["settings"] == {"pupilSelection": "both", "tvModel": "ResNet50", "blinkDetection": True}


def test_document_round_trip(assembler, sample_report):
    report = parse_report(sample_report)
    analysis = assembler.assemble(report.samples, report.summary, AnalysisSettings())
    eye_test = assembler.assemble_eye_test(analysis)
    assert AnalysisRecord.from_document(analysis.to_document()) == analysis
    assert EyeTestRecord.from_document(eye_test.to_document()) == eye_test


def test_sample_report_record(assembler, sample_report):
    report = parse_report(sample_report)
    record = assembler.assemble(report.samples, report.summary)
    assert record.fatigue_level is FatigueLevel.MODERATE
    assert record.left_eye_stats is not None and record.right_eye_stats is not None
    assert record.frame_count == 51
    assert len(record.pupil_data) == 35
