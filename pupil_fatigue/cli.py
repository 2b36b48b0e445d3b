# pupil_fatigue/cli.py
from __future__ import annotations

import argparse
import json
from datetime import date, datetime
from typing import Optional

from .batch import analyze_reports, save_batch
from .config import ConfigBuilder
from .domain.errors import StoreWriteError
from .domain.records import PipelineResult
from .io import (
    ConsoleReporter,
    FatiguePipeline,
    MetricsLogger,
    StoreClient,
    build_tts_request,
    read_report,
    write_samples_tsv,
)
from .parsing import parse_report
from .processing import analyze_trend, build_daily_series
from .processing.recommendations import (
    count_assessments,
    count_recommendation,
    filter_by_date_range,
    pattern_recommendation,
    time_based_greeting,
)
from .sample_data import SAMPLE_METADATA, SAMPLE_REPORT


def _add_store_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--store-dir",
        default=None,
        help="Directory of the JSON document store (default: in-memory, nothing persists).",
    )
    parser.add_argument(
        "--user-id",
        default=None,
        help="User id the records are filed under (default: demo user).",
    )


def _add_analysis_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--pupil-selection",
        choices=["both", "left", "right"],
        default="both",
        help="Pupil selection sent to the analysis service (default: both).",
    )
    parser.add_argument(
        "--tv-model",
        choices=["ResNet18", "ResNet50"],
        default="ResNet18",
        help="Analysis model (default: ResNet18).",
    )
    parser.add_argument(
        "--no-blink-detection",
        action="store_true",
        help="Record that blink detection was disabled for the analysis.",
    )
    parser.add_argument(
        "--test-type",
        choices=["pupil_analysis", "blink_test", "eye_movement", "focus_test"],
        default="pupil_analysis",
        help="Eye-test type of the eye-test record (default: pupil_analysis).",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=30.0,
        help="Recording length in seconds used for the blink rate (default: 30).",
    )
    parser.add_argument(
        "--no-eye-test",
        action="store_true",
        help="Only write the analysis record.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the simulated metrics (default: random).",
    )
    parser.add_argument(
        "--metrics-log",
        default=None,
        help="CSV file that receives one line per analysis.",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    """
    CLI parser for pupil fatigue analysis.

    Only parsing and option descriptions; the work is done by the
    ``cmd_*`` functions.
    """
    parser = argparse.ArgumentParser(
        prog="pupil-fatigue",
        description=(
            "Parse pupil analysis reports, classify cognitive fatigue and "
            "keep a history of analyses and eye tests."
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Parse a report and show its samples.")
    p_parse.add_argument("report", nargs="?", help="Report text file (default: bundled sample).")
    p_parse.add_argument("--output", default=None, help="Write the samples as TSV.")

    p_analyze = sub.add_parser("analyze", help="Analyze a report and store the records.")
    p_analyze.add_argument("report", nargs="?", help="Report text file (default: bundled sample).")
    p_analyze.add_argument("--analysis-url", default=None, help="Plot URL returned by the service.")
    p_analyze.add_argument("--quiet", action="store_true", help="Only print the outcome.")
    _add_analysis_options(p_analyze)
    _add_store_options(p_analyze)

    p_batch = sub.add_parser("batch", help="Analyze several reports in parallel.")
    p_batch.add_argument("reports", nargs="+", help="Report text files.")
    p_batch.add_argument(
        "--n-jobs",
        type=int,
        default=-1,
        help="Number of parallel jobs (-1 = all CPUs, 1 = sequential).",
    )
    _add_analysis_options(p_batch)
    _add_store_options(p_batch)

    p_trend = sub.add_parser("trend", help="Trend of one day's analyses.")
    p_trend.add_argument("--day", default=None, help="Day as YYYY-MM-DD (default: today).")
    _add_store_options(p_trend)

    p_dash = sub.add_parser("dashboard", help="Assessment counts and recommendations.")
    p_dash.add_argument("--today", default=None, help="Reference day as YYYY-MM-DD (default: today).")
    p_dash.add_argument("--start", default=None, help="Only count records from this day on.")
    p_dash.add_argument("--end", default=None, help="Only count records up to this day.")
    _add_store_options(p_dash)

    p_tts = sub.add_parser("tts-request", help="Validate a text-to-speech request and print its payload.")
    p_tts.add_argument("text", help="Text to speak (at most 300 characters).")
    p_tts.add_argument("--exaggeration", type=float, default=0.5)
    p_tts.add_argument("--temperature", type=float, default=0.8)
    p_tts.add_argument("--seed", type=int, default=0)
    p_tts.add_argument("--cfgw", type=float, default=0.5)

    return parser


def _load_report(path: Optional[str]) -> str:
    return read_report(path) if path else SAMPLE_REPORT


def cmd_parse(args: argparse.Namespace) -> int:
    report = parse_report(_load_report(args.report))
    print(f"Samples: {len(report.samples)}")
    print(f"Frames:  {report.frame_count}")
    if report.summary:
        print("\nSummary:")
        print(report.summary)
    if args.output:
        write_samples_tsv(report.samples, args.output)
        print(f"\nSamples written to {args.output}")
    return 0


def cmd_analyze(args: argparse.Namespace) -> int:
    settings, pipeline_cfg, store_cfg = ConfigBuilder.build_all_configs(args)
    client = StoreClient.from_config(store_cfg)
    pipeline = FatiguePipeline(client, pipeline_cfg)
    pipeline.register_observer(ConsoleReporter(verbose=not args.quiet))
    if args.metrics_log:
        pipeline.register_observer(MetricsLogger(args.metrics_log))

    metadata = None if args.report else dict(SAMPLE_METADATA)
    try:
        pipeline.process(_load_report(args.report), settings, args.analysis_url, metadata)
    except (ValueError, StoreWriteError):
        return 1
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    settings, pipeline_cfg, store_cfg = ConfigBuilder.build_all_configs(args)
    client = StoreClient.from_config(store_cfg)
    items = analyze_reports(args.reports, settings, pipeline_cfg, uid=client.uid, n_jobs=args.n_jobs)
    saved = save_batch(client, items)

    for item in items:
        if item.saved:
            print(f"✅ {item.path}: {item.analysis.fatigue_level.value} ({item.analysis.id})")
        else:
            print(f"❌ {item.path}: {item.error}")
    print(f"\n{saved}/{len(items)} reports saved")

    if args.metrics_log:
        logger = MetricsLogger(args.metrics_log)
        for item in items:
            if item.saved:
                logger.on_pipeline_complete(
                    pipeline_cfg,
                    PipelineResult(item.analysis, item.eye_test, item.eye_test_saved),
                )
    return 0 if saved == len(items) else 1


def cmd_trend(args: argparse.Namespace) -> int:
    client = StoreClient.from_config(ConfigBuilder.build_store_config(args))
    points = build_daily_series(client.analyses(), args.day)
    result = analyze_trend(points)
    print(f"{result.icon} Trend: {result.trend} ({len(points)} measurements)")
    print(f"   {result.message}")
    print(f"   {result.recommendation}")
    if result.delta_mm is not None:
        print(f"   Change: {result.delta_mm:+.2f} mm, variability: {result.variability_mm:.2f} mm")
    return 0


def cmd_dashboard(args: argparse.Namespace) -> int:
    client = StoreClient.from_config(ConfigBuilder.build_store_config(args))
    today = date.fromisoformat(args.today) if args.today else date.today()
    analyses = client.analyses()
    eye_tests = client.eye_tests()
    if args.start or args.end:
        start = args.start or "0000-00-00"
        end = args.end or "9999-99-99"
        analyses = filter_by_date_range(analyses, start, end)
        eye_tests = filter_by_date_range(eye_tests, start, end)

    def by_time(doc):
        return doc.get("timestamp") or int(doc.get("id") or 0)

    analyses = sorted(analyses, key=by_time)
    eye_tests = sorted(eye_tests, key=by_time)
    counts = count_assessments(analyses, eye_tests, today)

    print(time_based_greeting(datetime.now()))
    print(f"\nToday:      {counts.today_analyses} analyses, {counts.today_eye_tests} eye tests")
    print(f"Last 7 days: {counts.week_analyses} analyses, {counts.week_eye_tests} eye tests\n")
    for rec in (count_recommendation(counts.today_total), pattern_recommendation(analyses, eye_tests)):
        print(f"{rec.icon} {rec.title}")
        print(f"   {rec.message}")
    return 0


def cmd_tts_request(args: argparse.Namespace) -> int:
    try:
        request = build_tts_request({
            "text_input": args.text,
            "exaggeration_input": args.exaggeration,
            "temperature_input": args.temperature,
            "seed_num_input": args.seed,
            "cfgw_input": args.cfgw,
        })
    except ValueError as e:
        print(f"Error: {e}")
        return 2
    print(json.dumps(request.to_payload(), indent=2, ensure_ascii=False))
    return 0


COMMANDS = {
    "parse": cmd_parse,
    "analyze": cmd_analyze,
    "batch": cmd_batch,
    "trend": cmd_trend,
    "dashboard": cmd_dashboard,
    "tts-request": cmd_tts_request,
}


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
