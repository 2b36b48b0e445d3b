import json
from datetime import date

import pandas as pd
import pytest

from pupil_fatigue.cli import build_arg_parser, main
from pupil_fatigue.config import ConfigBuilder

from conftest import make_report


@pytest.fixture
def report_paths(tmp_path, sample_report):
    sample = tmp_path / "sample.txt"
    sample.write_text(sample_report, encoding="utf-8")
    alert = tmp_path / "alert.txt"
    alert.write_text(make_report([2.8, 2.9], [2.7]), encoding="utf-8")
    return str(sample), str(alert)


def test_parse_writes_tsv(tmp_path, capsys):
    out = tmp_path / "samples.tsv"
    assert main(["parse", "--output", str(out)]) == 0
    assert "Samples: 35" in capsys.readouterr().out

    df = pd.read_csv(out, sep="\t")
    assert list(df.columns) == ["frame", "eye", "diameter_mm"]
    assert len(df) == 35
    assert df.loc[0, "frame"] == 37


def test_analyze_sample_in_memory(capsys):
    assert main(["analyze", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "Fatigue level: 🟡 moderate" in out


@pytest.mark.parametrize("text", ["Processed 0 frames", "   \n", ""])
def test_analyze_empty_report_fails(tmp_path, text):
    report = tmp_path / "empty.txt"
    report.write_text(text, encoding="utf-8")
    assert main(["analyze", str(report), "--quiet"]) == 1


def test_analyze_persists_and_logs(tmp_path, report_paths):
    store_dir = tmp_path / "store"
    log = tmp_path / "metrics.csv"
    code = main([
        "analyze", report_paths[0],
        "--store-dir", str(store_dir),
        "--user-id", "alice",
        "--test-type", "blink_test",
        "--metrics-log", str(log),
        "--quiet",
    ])
    assert code == 0
    analyses = json.loads((store_dir / "users" / "alice" / "analyses.json").read_text(encoding="utf-8"))
    eye_tests = json.loads((store_dir / "eye-test" / "alice.json").read_text(encoding="utf-8"))
    (doc,) = analyses.values()
    (eye_doc,) = eye_tests.values()
    assert doc["uid"] == "alice"
    assert eye_doc["testType"] == "blink_test"
    assert len(log.read_text(encoding="utf-8").splitlines()) == 2


def test_batch_then_trend_and_dashboard(tmp_path, report_paths, capsys):
    store_dir = str(tmp_path / "store")
    assert main(["batch", *report_paths, "--store-dir", store_dir, "--n-jobs", "1", "--seed", "2"]) == 0
    assert "2/2 reports saved" in capsys.readouterr().out

    assert main(["trend", "--store-dir", store_dir]) == 0
    assert "Trend: improving (2 measurements)" in capsys.readouterr().out

    assert main(["dashboard", "--store-dir", store_dir, "--today", date.today().isoformat()]) == 0
    out = capsys.readouterr().out
    assert "Today:      2 analyses, 2 eye tests" in out
    assert "Great Progress!" in out


def test_batch_reports_failures(tmp_path, report_paths, capsys):
    missing = str(tmp_path / "missing.txt")
    assert main(["batch", report_paths[0], missing, "--n-jobs", "1"]) == 1
    out = capsys.readouterr().out
    assert "1/2 reports saved" in out
    assert "FileNotFoundError" in out


def test_trend_on_empty_store(tmp_path, capsys):
    assert main(["trend", "--store-dir", str(tmp_path)]) == 0
    assert "insufficient" in capsys.readouterr().out


def test_tts_request(capsys):
    assert main(["tts-request", "  Take a short walk.  "]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["text_input"] == "Take a short walk."
    assert payload["temperature_input"] == 0.8


def test_tts_request_too_long(capsys):
    assert main(["tts-request", "x" * 301]) == 2
    assert "300 characters or less" in capsys.readouterr().out


def test_config_builder_maps_cli_options():
    args = build_arg_parser().parse_args([
        "analyze", "r.txt",
        "--pupil-selection", "left",
        "--tv-model", "ResNet50",
        "--no-blink-detection",
        "--duration", "45",
        "--no-eye-test",
        "--seed", "9",
        "--store-dir", "db",
    ])
    settings, pipeline_cfg, store_cfg = ConfigBuilder.build_all_configs(args)
    assert settings.to_dict() == {"pupilSelection": "left", "tvModel": "ResNet50", "blinkDetection": False}
    assert pipeline_cfg.test_duration_s == 45
    assert pipeline_cfg.save_eye_test is False
    assert pipeline_cfg.seed == 9
    assert store_cfg.store_dir == "db"
    assert store_cfg.user_id == "demo-user-12345"


def test_config_builder_defaults_for_store_only_commands():
    args = build_arg_parser().parse_args(["trend"])
    assert ConfigBuilder.build_pipeline_config(args).test_type == "pupil_analysis"
    assert ConfigBuilder.build_analysis_settings(args).blink_detection is True
