"""Work/rest classification and the block segmentation state machine."""

from .classifier import classify_stroke, is_work_stroke
from .segmenter import SegmenterState, StrokeSegmenter, segment_session

__all__ = [
    "classify_stroke",
    "is_work_stroke",
    "SegmenterState",
    "StrokeSegmenter",
    "segment_session",
]
