"""Central config with default rower constants and the analysis parameter set."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

# Work-stroke window
TARGET_MIN_HR: int = 130
TARGET_MAX_HR: int = 185
MIN_WORK_RATE: float = 16.0
MAX_WORK_RATE: float = 40.0

# Block and DPS targets
MIN_BLOCK_DIST_M: float = 500.0
TARGET_DPS_M: float = 8.0

# Speed:HR ratio bounds mapped onto the 0-10 efficiency scale
EFF_FLOOR: float = 0.020
EFF_CEILING: float = 0.035

# Fixed acceptance rules (strict inequalities)
MIN_BLOCK_STROKES: int = 10
MIN_REST_STROKES: int = 5
MIN_REST_DURATION_S: float = 30.0

# Instrument export marker for a missing value
MISSING_SENTINEL: str = "---"


@dataclass(frozen=True)
class AnalysisConfig:
    """Thresholds used by the classifier, segmenter and scorers."""
    target_min_hr: int = TARGET_MIN_HR
    target_max_hr: int = TARGET_MAX_HR
    min_work_rate: float = MIN_WORK_RATE
    max_work_rate: float = MAX_WORK_RATE
    min_block_dist: float = MIN_BLOCK_DIST_M
    target_dps_threshold: float = TARGET_DPS_M
    eff_floor: float = EFF_FLOOR
    eff_ceiling: float = EFF_CEILING

    def validate(self) -> "AnalysisConfig":
        """Raise ValueError listing every inconsistent setting."""
        errors = []
        if self.target_min_hr >= self.target_max_hr:
            errors.append("target_min_hr must be lower than target_max_hr")
        if self.min_work_rate >= self.max_work_rate:
            errors.append("min_work_rate must be lower than max_work_rate")
        if self.min_block_dist < 0:
            errors.append("min_block_dist must not be negative")
        if self.target_dps_threshold < 0:
            errors.append("target_dps_threshold must not be negative")
        if self.eff_floor >= self.eff_ceiling:
            errors.append("eff_floor must be lower than eff_ceiling")

        if errors:
            raise ValueError(f"Configuration errors: {'; '.join(errors)}")
        return self

    def with_overrides(self, **kwargs: Any) -> "AnalysisConfig":
        """Return a validated copy with the given settings replaced."""
        known = {f.name for f in fields(self)}
        for key in kwargs:
            if key not in known:
                raise ValueError(f"Unknown analysis setting: {key}")
        updates = {k: self._coerce(k, v) for k, v in kwargs.items() if v is not None}
        return replace(self, **updates).validate()

    def _coerce(self, key: str, value: Any) -> Any:
        """Convert a setting to the type of its default, e.g. "130" from a JSON profile."""
        target = type(getattr(self, key))
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid value for {key}: {value!r}")
        if not math.isfinite(number):
            raise ValueError(f"Invalid value for {key}: {value!r}")
        if target is int:
            if not number.is_integer():
                raise ValueError(f"Invalid value for {key}: {value!r} (expected a whole number)")
            return int(number)
        return number

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Optional[str] = None, **overrides: Any) -> AnalysisConfig:
    """Build a validated config from defaults, an optional JSON profile, then overrides.

    The profile is a flat JSON object whose keys are AnalysisConfig field names.
    """
    config = AnalysisConfig()
    if path:
        profile_path = Path(path)
        with open(profile_path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config profile must be a JSON object: {profile_path}")
        config = config.with_overrides(**data)
    return config.with_overrides(**overrides)
