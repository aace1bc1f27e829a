from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import numpy as np

from ..config import AnalysisConfig, MIN_BLOCK_STROKES, MIN_REST_DURATION_S, MIN_REST_STROKES
from ..models.types import BlockSummary, RecoverySummary, RestPeriod, StrokeDetail, WorkBlock
from .efficiency import efficiency_rating, efficiency_score


def _present_mean(values: Iterable[Optional[float]]) -> Optional[float]:
    """Mean of the present values; missing values are left out of the divisor."""
    present = [v for v in values if v is not None]
    if not present:
        return None
    return float(np.mean(present))


def _round_or_none(value: Optional[float], digits: int) -> Optional[float]:
    return round(value, digits) if value is not None else None


def _at_target(dps: Optional[float], threshold: float) -> bool:
    return dps is not None and dps >= threshold


def accept_work_block(block: WorkBlock, min_block_dist: float) -> bool:
    """More than MIN_BLOCK_STROKES strokes and at least min_block_dist metres."""
    return block.stroke_count > MIN_BLOCK_STROKES and block.total_distance_m >= min_block_dist


def summarize_work_block(
    block: WorkBlock,
    block_number: int,
    config: AnalysisConfig,
    session_id: str,
) -> Tuple[BlockSummary, List[StrokeDetail]]:
    strokes = block.strokes
    threshold = config.target_dps_threshold

    avg_dps = _present_mean(s.distance_per_stroke for s in strokes)
    avg_speed = _present_mean(s.speed for s in strokes)
    avg_hr = _present_mean(s.heart_rate for s in strokes)
    avg_rate = _present_mean(s.stroke_rate for s in strokes)

    target_count = sum(1 for s in strokes if _at_target(s.distance_per_stroke, threshold))
    success_rate = target_count / len(strokes) * 100.0 if strokes else 0.0

    score = round(efficiency_score(avg_speed, avg_hr, config.eff_floor, config.eff_ceiling), 1)

    summary = BlockSummary(
        session_id=session_id,
        block_number=block_number,
        avg_dps=_round_or_none(avg_dps, 2),
        target_count=target_count,
        success_rate_pct=round(success_rate, 1),
        efficiency_score=score,
        efficiency_rating=efficiency_rating(score),
        avg_hr=_round_or_none(avg_hr, 0),
        avg_rate=_round_or_none(avg_rate, 0),
        total_distance_m=round(block.total_distance_m, 0),
        stroke_count=len(strokes),
        avg_speed=_round_or_none(avg_speed, 2),
    )

    details = [
        StrokeDetail(
            session_id=session_id,
            block_number=block_number,
            stroke_number=idx,
            elapsed_time_s=s.elapsed_time_s,
            heart_rate=s.heart_rate,
            stroke_rate=s.stroke_rate,
            speed=s.speed,
            cumulative_distance=s.cumulative_distance,
            distance_per_stroke=s.distance_per_stroke,
            power=s.power,
            at_target=_at_target(s.distance_per_stroke, threshold),
        )
        for idx, s in enumerate(strokes, start=1)
    ]
    return summary, details


def accept_rest_period(period: RestPeriod) -> bool:
    """More than MIN_REST_STROKES strokes over more than MIN_REST_DURATION_S, with HR at both ends."""
    if period.stroke_count <= MIN_REST_STROKES or period.duration_s <= MIN_REST_DURATION_S:
        return False
    hr_start = period.first.heart_rate
    hr_end = period.last.heart_rate
    return bool(hr_start) and bool(hr_end)


def summarize_rest_period(period: RestPeriod, session_id: str, rest_number: Optional[int] = None) -> RecoverySummary:
    """HR drop from the first to the last stroke, and that drop per minute.

    Only call on a period that passed accept_rest_period.
    """
    hr_start = float(period.first.heart_rate)
    hr_end = float(period.last.heart_rate)
    duration_s = period.duration_s
    hr_drop = hr_start - hr_end
    recovery_rate = hr_drop / (duration_s / 60.0) if duration_s > 0 else 0.0
    return RecoverySummary(
        session_id=session_id,
        hr_start=hr_start,
        hr_end=hr_end,
        hr_drop=hr_drop,
        recovery_rate_bpm_per_min=round(recovery_rate, 1),
        duration_s=round(duration_s, 1),
        stroke_count=period.stroke_count,
        rest_number=rest_number,
    )
