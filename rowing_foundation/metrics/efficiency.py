from __future__ import annotations

from typing import Optional

import numpy as np

ELITE_MIN: float = 8.5
STRONG_MIN: float = 6.5
GOOD_MIN: float = 4.5


def efficiency_score(speed: Optional[float], hr: Optional[float], eff_floor: float, eff_ceiling: float) -> float:
    """Speed:HR ratio normalized onto 0-10 between eff_floor and eff_ceiling."""
    if hr is None or hr == 0 or speed is None:
        return 0.0
    raw_eff = speed / hr
    score = (raw_eff - eff_floor) / (eff_ceiling - eff_floor) * 10.0
    return float(np.clip(score, 0.0, 10.0))


def efficiency_rating(score: float) -> str:
    if score >= ELITE_MIN:
        return "Elite"
    if score >= STRONG_MIN:
        return "Strong"
    if score >= GOOD_MIN:
        return "Good"
    return "Developing"
