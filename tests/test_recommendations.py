from datetime import date, datetime

import pytest

from pupil_fatigue.domain.dataset import EyeStatistics, FatigueLevel
from pupil_fatigue.processing.recommendations import (
    FATIGUE_RECOMMENDATIONS,
    VARIABILITY_NOTE,
    count_assessments,
    count_recommendation,
    fatigue_level_color,
    fatigue_level_emoji,
    filter_by_date_range,
    format_pupil_diameter,
    generate_recommendations,
    pattern_recommendation,
    time_based_greeting,
)

from conftest import stored_analysis


def _eye(std: float) -> EyeStatistics:
    return EyeStatistics(mean=2.4, std_dev=std, min=2.0, max=2.8)


@pytest.mark.parametrize("level", list(FatigueLevel))
def test_four_recommendations_per_level(level):
    assert generate_recommendations(level) == FATIGUE_RECOMMENDATIONS[level]
    assert len(FATIGUE_RECOMMENDATIONS[level]) == 4


def test_variability_note_needs_both_eyes():
    recs = generate_recommendations(FatigueLevel.MODERATE, _eye(0.2), _eye(0.2))
    assert recs[-1] == VARIABILITY_NOTE
    assert VARIABILITY_NOTE not in generate_recommendations(FatigueLevel.MODERATE, _eye(0.3), None)
    assert VARIABILITY_NOTE not in generate_recommendations(FatigueLevel.MODERATE, _eye(0.1), _eye(0.15))


def test_colors_and_emojis():
    assert fatigue_level_color(FatigueLevel.LOW) == "#10B981"
    assert fatigue_level_color(FatigueLevel.MODERATE) == "#F59E0B"
    assert fatigue_level_color(FatigueLevel.HIGH) == "#EF4444"
    assert fatigue_level_color(None) == "#6B7280"
    assert fatigue_level_emoji(FatigueLevel.HIGH) == "🔴"
    assert fatigue_level_emoji(None) == "⚪"


def test_format_pupil_diameter():
    assert format_pupil_diameter(2.3) == "2.30mm"
    assert format_pupil_diameter(2.0) == "2.00mm"


@pytest.mark.parametrize(
    "hour,prefix",
    [(6, "Good morning"), (11, "Good morning"), (12, "Good afternoon"), (16, "Good afternoon"), (17, "Good evening")],
)
def test_greeting(hour, prefix):
    assert time_based_greeting(datetime(2025, 3, 14, hour)).startswith(prefix)


def test_filter_by_date_range():
    docs = [{"date": "2025-03-01"}, {"date": "2025-03-10"}, {"date": "2025-03-20"}, {}]
    assert filter_by_date_range(docs, "2025-03-01", "2025-03-10") == docs[:2]


def test_count_assessments():
    today = date(2025, 3, 14)
    analyses = [{"date": "2025-03-14"}, {"date": "2025-03-10"}, {"date": "2025-03-01"}]
    eye_tests = [{"date": "2025-03-14"}, {"date": "2025-03-14"}, {"date": "2025-03-07"}]
    counts = count_assessments(analyses, eye_tests, today)
    assert (counts.today_analyses, counts.week_analyses) == (1, 2)
    assert (counts.today_eye_tests, counts.week_eye_tests) == (2, 3)
    assert counts.today_total == 3


@pytest.mark.parametrize(
    "total,title",
    [(0, "Start Your Day Right"), (2, "Keep Monitoring"), (3, "Great Progress!"), (5, "Great Progress!"), (6, "Excellent Monitoring")],
)
def test_count_recommendation(total, title):
    assert count_recommendation(total).title == title


def test_pattern_recommendation_needs_history():
    rec = pattern_recommendation([stored_analysis(1, "2025-03-14", 2.5, 2.5)], [])
    assert rec.title == "Building Your Profile"


def test_pattern_recommendation_fatigue():
    analyses = [stored_analysis(i, "2025-03-14", 2.0, 2.1) for i in range(3)]
    rec = pattern_recommendation(analyses, [{"focusAccuracy": 90}])
    assert rec.title == "Potential Fatigue Detected"


def test_pattern_recommendation_excellent():
    analyses = [stored_analysis(i, "2025-03-14", 2.7, 2.8) for i in range(2)]
    eye_tests = [{"focusAccuracy": 92}, {"focusAccuracy": 95}]
    assert pattern_recommendation(analyses, eye_tests).title == "Excellent Performance"


def test_pattern_recommendation_balanced():
    analyses = [stored_analysis(i, "2025-03-14", 2.4, 2.4) for i in range(2)]
    eye_tests = [{"focusAccuracy": 80}]
    assert pattern_recommendation(analyses, eye_tests).title == "Balanced State"


def test_pattern_recommendation_without_focus_data_flags_fatigue():
    analyses = [stored_analysis(i, "2025-03-14", 2.8, 2.8) for i in range(3)]
    assert pattern_recommendation(analyses, []).title == "Potential Fatigue Detected"
