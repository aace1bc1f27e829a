"""CSV export of per-session and consolidated result tables."""

from .export import (
    block_summaries_to_frame,
    stroke_details_to_frame,
    recovery_summaries_to_frame,
    export_session,
    export_history,
)

__all__ = [
    "block_summaries_to_frame",
    "stroke_details_to_frame",
    "recovery_summaries_to_frame",
    "export_session",
    "export_history",
]
