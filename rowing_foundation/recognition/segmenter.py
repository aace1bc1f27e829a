from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Iterable, Optional

from ..config import AnalysisConfig
from ..metrics.compute import (
    accept_rest_period,
    accept_work_block,
    summarize_rest_period,
    summarize_work_block,
)
from ..models.types import RestPeriod, SessionResult, StrokeRecord, WorkBlock
from .classifier import is_work_stroke

logger = logging.getLogger(__name__)


class SegmenterState(Enum):
    IDLE = auto()
    WORK = auto()
    REST = auto()


class StrokeSegmenter:
    """Split one session's stroke stream into work blocks and rest periods.

    Strokes are fed in order through process(). A run is finalized only when
    the classification flips or when flush() is called at end of stream, and
    its acceptance is decided on the complete run. Rejected work blocks do not
    consume a block number and their strokes are dropped.
    """

    def __init__(self, config: AnalysisConfig, session_id: str, source_path: Optional[str] = None):
        self.config = config
        self.session_id = session_id
        self.source_path = source_path
        self._reset()

    def _reset(self) -> None:
        self.state = SegmenterState.IDLE
        self.work = WorkBlock()
        self.rest = RestPeriod()
        self.next_block_number = 1
        self.next_rest_number = 1
        self.result = SessionResult(session_id=self.session_id, source_path=self.source_path)

    def process(self, stroke: StrokeRecord) -> None:
        if is_work_stroke(stroke, self.config):
            if self.state != SegmenterState.WORK:
                self._finalize_rest()
                self.state = SegmenterState.WORK
            self.work.append(stroke)
        else:
            if self.state != SegmenterState.REST:
                self._finalize_work()
                self.state = SegmenterState.REST
            self.rest.append(stroke)

    def flush(self) -> SessionResult:
        """Finalize the open run and return the session result; the segmenter is reset."""
        if self.work:
            self._finalize_work()
        if self.rest:
            self._finalize_rest()
        result = self.result
        self._reset()
        return result

    def _finalize_work(self) -> None:
        block = self.work
        self.work = WorkBlock()
        if not block:
            return
        if not accept_work_block(block, self.config.min_block_dist):
            logger.debug(
                f"{self.session_id}: rejected work run of {block.stroke_count} strokes "
                f"over {block.total_distance_m:.0f} m"
            )
            return
        summary, details = summarize_work_block(block, self.next_block_number, self.config, self.session_id)
        self.result.block_summaries.append(summary)
        self.result.stroke_details.extend(details)
        logger.debug(
            f"{self.session_id}: block {summary.block_number} accepted "
            f"({summary.stroke_count} strokes, {summary.total_distance_m:.0f} m)"
        )
        self.next_block_number += 1

    def _finalize_rest(self) -> None:
        period = self.rest
        self.rest = RestPeriod()
        if not period:
            return
        if not accept_rest_period(period):
            logger.debug(
                f"{self.session_id}: rejected rest run of {period.stroke_count} strokes "
                f"over {period.duration_s:.1f} s"
            )
            return
        recovery = summarize_rest_period(period, self.session_id, self.next_rest_number)
        self.result.recovery_summaries.append(recovery)
        logger.debug(
            f"{self.session_id}: rest {recovery.rest_number} accepted "
            f"(HR {recovery.hr_start:.0f}->{recovery.hr_end:.0f}, {recovery.recovery_rate_bpm_per_min} bpm/min)"
        )
        self.next_rest_number += 1


def segment_session(
    strokes: Iterable[StrokeRecord],
    config: AnalysisConfig,
    session_id: str,
    source_path: Optional[str] = None,
) -> SessionResult:
    """Run one independent segmenter over a session's strokes, in order."""
    segmenter = StrokeSegmenter(config, session_id, source_path)
    for stroke in strokes:
        segmenter.process(stroke)
    return segmenter.flush()
