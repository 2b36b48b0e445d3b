from datetime import datetime
from typing import Dict, List, Optional

import pytest

from pupil_fatigue.domain.dataset import Eye, Sample
from pupil_fatigue.io.store import InMemoryDocumentStore, StoreClient
from pupil_fatigue.sample_data import SAMPLE_REPORT

FIXED_NOW = datetime(2025, 3, 14, 9, 26, 53)


class FixedClock:
    """Clock returning ``start`` and advancing one second per call."""

    def __init__(self, start: datetime = FIXED_NOW, step_s: float = 1.0):
        self.current = start
        self.step_s = step_s

    def __call__(self) -> datetime:
        now = self.current
        self.current = datetime.fromtimestamp(now.timestamp() + self.step_s)
        return now


def make_samples(left: List[float], right: Optional[List[float]] = None) -> List[Sample]:
    samples = [Sample(i, Eye.LEFT, d) for i, d in enumerate(left)]
    samples += [Sample(i, Eye.RIGHT, d) for i, d in enumerate(right or [])]
    return samples


def make_report(left: List[float], right: Optional[List[float]] = None) -> str:
    lines = [f"{i},left_eye,{d}" for i, d in enumerate(left)]
    lines += [f"{i},right_eye,{d}" for i, d in enumerate(right or [])]
    return "\n".join(lines)


def stored_analysis(
    doc_id: int,
    date: str,
    left_mean: Optional[float] = None,
    right_mean: Optional[float] = None,
    **extra,
) -> Dict:
    doc = {"id": str(doc_id), "date": date, "fatigueLevel": "moderate", "timestamp": doc_id}
    if left_mean is not None:
        doc["leftEyeStats"] = {"mean": left_mean, "std": 0.1, "min": left_mean, "max": left_mean}
    if right_mean is not None:
        doc["rightEyeStats"] = {"mean": right_mean, "std": 0.1, "min": right_mean, "max": right_mean}
    doc.update(extra)
    return doc


@pytest.fixture
def sample_report() -> str:
    return SAMPLE_REPORT


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    ticks = iter(range(1_000, 1_000_000, 1_000))
    return InMemoryDocumentStore(clock=lambda: next(ticks))


@pytest.fixture
def client(store) -> StoreClient:
    return StoreClient(store)
