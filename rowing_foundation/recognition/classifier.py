from __future__ import annotations

from typing import Optional

from ..config import AnalysisConfig
from ..models.types import StrokeRecord


def _within(value: Optional[float], lower: float, upper: float) -> bool:
    return value is not None and lower <= value <= upper


def classify_stroke(
    stroke: StrokeRecord,
    min_hr: float,
    max_hr: float,
    min_rate: float,
    max_rate: float,
) -> bool:
    """True when the stroke is a work stroke.

    - heart rate within [min_hr, max_hr]
    - stroke rate within [min_rate, max_rate]
    - cumulative distance present and above zero
    Any missing field makes it a rest stroke.
    """
    if not _within(stroke.heart_rate, min_hr, max_hr):
        return False
    if not _within(stroke.stroke_rate, min_rate, max_rate):
        return False
    return stroke.cumulative_distance is not None and stroke.cumulative_distance > 0


def is_work_stroke(stroke: StrokeRecord, config: AnalysisConfig) -> bool:
    return classify_stroke(
        stroke,
        config.target_min_hr,
        config.target_max_hr,
        config.min_work_rate,
        config.max_work_rate,
    )
