"""Session export ingestion: missing-value resolution, time parsing, stroke tables."""

from .values import resolve_numeric, parse_elapsed_time
from .stroke_loader import find_stroke_table, frame_to_strokes, load_session, load_stroke_table

__all__ = [
    "resolve_numeric",
    "parse_elapsed_time",
    "find_stroke_table",
    "frame_to_strokes",
    "load_session",
    "load_stroke_table",
]
