"""Typed domain objects for strokes, segments and result records."""

from .types import (
    StrokeRecord,
    WorkBlock,
    RestPeriod,
    BlockSummary,
    StrokeDetail,
    RecoverySummary,
    SessionResult,
)

__all__ = [
    "StrokeRecord",
    "WorkBlock",
    "RestPeriod",
    "BlockSummary",
    "StrokeDetail",
    "RecoverySummary",
    "SessionResult",
]
