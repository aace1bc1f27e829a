"""Metrics for accepted work blocks and rest periods."""

from .efficiency import efficiency_score, efficiency_rating
from .compute import accept_work_block, summarize_work_block, accept_rest_period, summarize_rest_period

__all__ = [
    "efficiency_score",
    "efficiency_rating",
    "accept_work_block",
    "summarize_work_block",
    "accept_rest_period",
    "summarize_rest_period",
]
