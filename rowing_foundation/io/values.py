from __future__ import annotations

import math
from typing import Any, Optional

from ..config import MISSING_SENTINEL


def resolve_numeric(raw: Any, sentinel: str = MISSING_SENTINEL) -> Optional[float]:
    """Return a usable float, or None when the field is missing or unparseable."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else None
    text = str(raw).strip()
    if not text or text == sentinel:
        return None
    try:
        value = float(text.replace(",", ""))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_elapsed_time(raw: Any, sentinel: str = MISSING_SENTINEL) -> float:
    """Convert 'H:M:S.t' or 'M:S.t' to seconds; anything unparseable gives 0.0."""
    if raw is None:
        return 0.0
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
        return value if math.isfinite(value) else 0.0
    text = str(raw).strip()
    if not text or text == sentinel:
        return 0.0
    parts = text.split(":")
    try:
        if len(parts) == 3:
            hours, minutes, seconds = int(parts[0]), int(parts[1]), float(parts[2])
            return float(hours * 3600 + minutes * 60 + seconds)
        if len(parts) == 2:
            minutes, seconds = int(parts[0]), float(parts[1])
            return float(minutes * 60 + seconds)
    except ValueError:
        return 0.0
    return 0.0
