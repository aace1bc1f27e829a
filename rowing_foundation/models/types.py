from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class StrokeRecord:
    elapsed_time_s: float
    heart_rate: Optional[float] = None
    stroke_rate: Optional[float] = None
    speed: Optional[float] = None
    cumulative_distance: Optional[float] = None
    distance_per_stroke: Optional[float] = None
    power: Optional[float] = None  # informational only


@dataclass
class _StrokeRun:
    strokes: List[StrokeRecord] = field(default_factory=list)

    def append(self, stroke: StrokeRecord) -> None:
        self.strokes.append(stroke)

    @property
    def stroke_count(self) -> int:
        return len(self.strokes)

    @property
    def first(self) -> Optional[StrokeRecord]:
        return self.strokes[0] if self.strokes else None

    @property
    def last(self) -> Optional[StrokeRecord]:
        return self.strokes[-1] if self.strokes else None

    def __bool__(self) -> bool:
        return bool(self.strokes)


@dataclass
class WorkBlock(_StrokeRun):
    """Contiguous run of work strokes, evaluated once when the run ends."""

    @property
    def total_distance_m(self) -> float:
        # A missing distance at either end fails the distance filter
        if not self.strokes:
            return 0.0
        start = self.strokes[0].cumulative_distance
        end = self.strokes[-1].cumulative_distance
        if start is None or end is None:
            return 0.0
        return float(end - start)


@dataclass
class RestPeriod(_StrokeRun):
    """Contiguous run of rest strokes between work efforts."""

    @property
    def duration_s(self) -> float:
        if not self.strokes:
            return 0.0
        return float(self.strokes[-1].elapsed_time_s - self.strokes[0].elapsed_time_s)


@dataclass
class BlockSummary:
    session_id: str
    block_number: int
    avg_dps: Optional[float]
    target_count: int
    success_rate_pct: float
    efficiency_score: float
    efficiency_rating: str
    avg_hr: Optional[float]
    avg_rate: Optional[float]
    total_distance_m: float
    stroke_count: int
    avg_speed: Optional[float] = None


@dataclass
class StrokeDetail:
    session_id: str
    block_number: int
    stroke_number: int
    elapsed_time_s: float
    heart_rate: Optional[float]
    stroke_rate: Optional[float]
    speed: Optional[float]
    cumulative_distance: Optional[float]
    distance_per_stroke: Optional[float]
    power: Optional[float]
    at_target: bool


@dataclass
class RecoverySummary:
    session_id: str
    hr_start: float
    hr_end: float
    hr_drop: float
    recovery_rate_bpm_per_min: float
    duration_s: Optional[float] = None
    stroke_count: Optional[int] = None
    rest_number: Optional[int] = None


@dataclass
class SessionResult:
    session_id: str
    source_path: Optional[str] = None
    block_summaries: List[BlockSummary] = field(default_factory=list)
    stroke_details: List[StrokeDetail] = field(default_factory=list)
    recovery_summaries: List[RecoverySummary] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.block_summaries or self.stroke_details or self.recovery_summaries)
