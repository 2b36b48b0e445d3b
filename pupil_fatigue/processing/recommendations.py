"""Recommendations and display helpers for fatigue results."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..config.constants import FatigueThresholds
from ..domain.dataset import EyeStatistics, FatigueLevel

FATIGUE_RECOMMENDATIONS: Dict[FatigueLevel, List[str]] = {
    FatigueLevel.HIGH: [
        "🛑 High cognitive fatigue detected. Consider taking a break.",
        "💤 Ensure you get adequate sleep (7-9 hours).",
        "🚶‍♂️ Take a short walk or do light exercise.",
        "💧 Stay hydrated and avoid excessive caffeine.",
    ],
    FatigueLevel.MODERATE: [
        "⚖️ Moderate cognitive load detected.",
        "⏰ Consider taking short breaks every 25-30 minutes.",
        "🧘‍♂️ Practice brief mindfulness or breathing exercises.",
        "👀 Give your eyes a rest with the 20-20-20 rule.",
    ],
    FatigueLevel.LOW: [
        "✅ Good cognitive alertness detected!",
        "🎯 This is a good time for focused work.",
        "📚 Consider tackling challenging tasks now.",
        "🔄 Maintain your current routine for optimal performance.",
    ],
}

VARIABILITY_NOTE = "📊 High pupil variability detected - this may indicate stress or distraction."

FATIGUE_COLORS = {
    FatigueLevel.LOW: "#10B981",
    FatigueLevel.MODERATE: "#F59E0B",
    FatigueLevel.HIGH: "#EF4444",
}
DEFAULT_COLOR = "#6B7280"

FATIGUE_EMOJIS = {
    FatigueLevel.LOW: "🟢",
    FatigueLevel.MODERATE: "🟡",
    FatigueLevel.HIGH: "🔴",
}
DEFAULT_EMOJI = "⚪"


@dataclass(frozen=True)
class Recommendation:
    title: str
    message: str
    color: str
    icon: str


def generate_recommendations(
    level: FatigueLevel,
    left: Optional[EyeStatistics] = None,
    right: Optional[EyeStatistics] = None,
) -> List[str]:
    """Level recommendations, plus a variability note when both eyes are present."""
    recommendations = list(FATIGUE_RECOMMENDATIONS[level])
    if left is not None and right is not None:
        avg_std = (left.std_dev + right.std_dev) / 2
        if avg_std > FatigueThresholds.VARIABILITY_NOTE_STD_MM:
            recommendations.append(VARIABILITY_NOTE)
    return recommendations


def fatigue_level_color(level: Optional[FatigueLevel]) -> str:
    return FATIGUE_COLORS.get(level, DEFAULT_COLOR)


def fatigue_level_emoji(level: Optional[FatigueLevel]) -> str:
    return FATIGUE_EMOJIS.get(level, DEFAULT_EMOJI)


def format_pupil_diameter(diameter_mm: float) -> str:
    return f"{diameter_mm:.2f}mm"


def time_based_greeting(now: Optional[datetime] = None) -> str:
    hour = (now or datetime.now()).hour
    if hour < 12:
        return "Good morning! 🌅"
    if hour < 17:
        return "Good afternoon! ☀️"
    return "Good evening! 🌙"


# Dashboard


@dataclass(frozen=True)
class DashboardCounts:
    today_analyses: int
    week_analyses: int
    today_eye_tests: int
    week_eye_tests: int

    @property
    def today_total(self) -> int:
        return self.today_analyses + self.today_eye_tests


def filter_by_date_range(
    documents: Iterable[Dict[str, Any]], start: str, end: str
) -> List[Dict[str, Any]]:
    """Documents whose ``date`` lies in [start, end] (ISO strings compare lexically)."""
    return [doc for doc in documents if doc.get("date") and start <= doc["date"] <= end]


def count_assessments(
    analyses: Sequence[Dict[str, Any]],
    eye_tests: Sequence[Dict[str, Any]],
    today: Optional[date] = None,
) -> DashboardCounts:
    today = today or date.today()
    today_str = today.isoformat()
    week_ago = (today - timedelta(days=7)).isoformat()
    return DashboardCounts(
        today_analyses=sum(1 for a in analyses if a.get("date") == today_str),
        week_analyses=sum(1 for a in analyses if (a.get("date") or "") >= week_ago),
        today_eye_tests=sum(1 for e in eye_tests if e.get("date") == today_str),
        week_eye_tests=sum(1 for e in eye_tests if (e.get("date") or "") >= week_ago),
    )


def count_recommendation(today_total: int) -> Recommendation:
    """Encourage a few assessments spread over the day."""
    if today_total == 0:
        return Recommendation(
            "Start Your Day Right",
            "Take your first cognitive assessment or eye test to establish a baseline for today.",
            "#3B82F6",
            "🌅",
        )
    if today_total < 3:
        return Recommendation(
            "Keep Monitoring",
            "Consider taking 2-3 assessments throughout the day for better insights.",
            "#10B981",
            "📈",
        )
    if today_total < 6:
        return Recommendation(
            "Great Progress!",
            "You're doing well with regular monitoring. This helps track your cognitive and visual patterns.",
            "#059669",
            "✅",
        )
    return Recommendation(
        "Excellent Monitoring",
        "You're taking great care of your cognitive and visual health with frequent assessments.",
        "#7C3AED",
        "🏆",
    )


def pattern_recommendation(
    analyses: Sequence[Dict[str, Any]],
    eye_tests: Sequence[Dict[str, Any]],
) -> Recommendation:
    """
    Combine the last three analyses (pupil size) and eye tests (focus accuracy).
    """
    if len(analyses) + len(eye_tests) < 3:
        return Recommendation(
            "Building Your Profile",
            "Take a few more assessments to start seeing meaningful patterns in your cognitive and visual data.",
            "#6B7280",
            "📊",
        )

    pupil_sizes = []
    for doc in analyses[-3:]:
        left = EyeStatistics.from_dict(doc.get("leftEyeStats"))
        right = EyeStatistics.from_dict(doc.get("rightEyeStats"))
        left_mean = left.mean if left else 0.0
        right_mean = right.mean if right else 0.0
        if left_mean > 0 or right_mean > 0:
            pupil_sizes.append((left_mean + right_mean) / 2)
    focus = [doc["focusAccuracy"] for doc in eye_tests[-3:] if doc.get("focusAccuracy")]

    avg_pupil = sum(pupil_sizes) / len(pupil_sizes) if pupil_sizes else 0.0
    avg_focus = sum(focus) / len(focus) if focus else 0.0

    if avg_pupil < FatigueThresholds.HIGH_BELOW_MM or avg_focus < 70:
        return Recommendation(
            "Potential Fatigue Detected",
            "Your recent assessments suggest increased cognitive fatigue or reduced visual performance. "
            "Consider taking breaks and ensuring adequate rest.",
            "#EF4444",
            "⚠️",
        )
    if avg_pupil > 2.5 and avg_focus > 85:
        return Recommendation(
            "Excellent Performance",
            "Your assessments indicate excellent cognitive alertness and visual performance. Keep up the great work!",
            "#10B981",
            "🎯",
        )
    return Recommendation(
        "Balanced State",
        "Your cognitive and visual state appears balanced. Continue your current routine for optimal performance.",
        "#3B82F6",
        "⚖️",
    )
