from typing import List, Optional

import pytest

from rowing_foundation.config import AnalysisConfig
from rowing_foundation.models.types import StrokeRecord


def make_stroke(
    t: float = 0.0,
    hr: Optional[float] = 150.0,
    rate: Optional[float] = 22.0,
    speed: Optional[float] = 4.0,
    dist: Optional[float] = 100.0,
    dps: Optional[float] = 9.0,
    power: Optional[float] = None,
) -> StrokeRecord:
    return StrokeRecord(
        elapsed_time_s=t,
        heart_rate=hr,
        stroke_rate=rate,
        speed=speed,
        cumulative_distance=dist,
        distance_per_stroke=dps,
        power=power,
    )


def make_run(
    n: int,
    start_t: float = 0.0,
    dt: float = 3.0,
    hr: Optional[float] = 150.0,
    rate: Optional[float] = 22.0,
    start_dist: float = 10.0,
    step_m: float = 10.0,
    speed: Optional[float] = 4.0,
    dps: Optional[float] = 9.0,
) -> List[StrokeRecord]:
    return [
        make_stroke(t=start_t + i * dt, hr=hr, rate=rate, speed=speed, dist=start_dist + i * step_m, dps=dps)
        for i in range(n)
    ]


@pytest.fixture
def config() -> AnalysisConfig:
    return AnalysisConfig(
        target_min_hr=120,
        target_max_hr=180,
        min_work_rate=16.0,
        max_work_rate=36.0,
        min_block_dist=500.0,
        target_dps_threshold=8.0,
        eff_floor=0.020,
        eff_ceiling=0.035,
    )
