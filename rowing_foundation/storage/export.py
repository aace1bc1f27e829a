from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Sequence

import pandas as pd

from ..models.types import BlockSummary, RecoverySummary, SessionResult, StrokeDetail

logger = logging.getLogger(__name__)

BLOCK_COLUMNS = [
    "Date", "Block", "Avg_DPS", "Target_Count", "Success_Rate_Pct", "Eff_Score",
    "Eff_Rating", "Avg_HR", "Avg_Rate", "Avg_Speed", "Dist_m", "Strokes",
]
STROKE_COLUMNS = [
    "Date", "Block", "Stroke", "Elapsed_s", "HR", "Rate", "Speed",
    "Distance_m", "DPS", "Power", "At_Target",
]
RECOVERY_COLUMNS = [
    "Date", "Rest", "HR_Start", "HR_End", "HR_Drop", "Recovery_Rate_BPM_per_min",
    "Duration_s", "Strokes",
]


def block_summaries_to_frame(summaries: Sequence[BlockSummary]) -> pd.DataFrame:
    rows = []
    for b in summaries:
        rows.append(
            {
                "Date": b.session_id,
                "Block": b.block_number,
                "Avg_DPS": b.avg_dps,
                "Target_Count": b.target_count,
                "Success_Rate_Pct": b.success_rate_pct,
                "Eff_Score": b.efficiency_score,
                "Eff_Rating": b.efficiency_rating,
                "Avg_HR": b.avg_hr,
                "Avg_Rate": b.avg_rate,
                "Avg_Speed": b.avg_speed,
                "Dist_m": b.total_distance_m,
                "Strokes": b.stroke_count,
            }
        )
    return pd.DataFrame(rows, columns=BLOCK_COLUMNS)


def stroke_details_to_frame(details: Sequence[StrokeDetail]) -> pd.DataFrame:
    rows = []
    for d in details:
        rows.append(
            {
                "Date": d.session_id,
                "Block": d.block_number,
                "Stroke": d.stroke_number,
                "Elapsed_s": d.elapsed_time_s,
                "HR": d.heart_rate,
                "Rate": d.stroke_rate,
                "Speed": d.speed,
                "Distance_m": d.cumulative_distance,
                "DPS": d.distance_per_stroke,
                "Power": d.power,
                "At_Target": d.at_target,
            }
        )
    return pd.DataFrame(rows, columns=STROKE_COLUMNS)


def recovery_summaries_to_frame(recoveries: Sequence[RecoverySummary]) -> pd.DataFrame:
    rows = []
    for r in recoveries:
        rows.append(
            {
                "Date": r.session_id,
                "Rest": r.rest_number,
                "HR_Start": r.hr_start,
                "HR_End": r.hr_end,
                "HR_Drop": r.hr_drop,
                "Recovery_Rate_BPM_per_min": r.recovery_rate_bpm_per_min,
                "Duration_s": r.duration_s,
                "Strokes": r.stroke_count,
            }
        )
    return pd.DataFrame(rows, columns=RECOVERY_COLUMNS)


def export_block_summaries_csv(summaries: Sequence[BlockSummary], path: str) -> None:
    block_summaries_to_frame(summaries).to_csv(path, index=False)


def export_stroke_details_csv(details: Sequence[StrokeDetail], path: str) -> None:
    stroke_details_to_frame(details).to_csv(path, index=False)


def export_recovery_summaries_csv(recoveries: Sequence[RecoverySummary], path: str) -> None:
    recovery_summaries_to_frame(recoveries).to_csv(path, index=False)


def _session_base(result: SessionResult) -> str:
    if result.source_path:
        stem = Path(result.source_path).stem
        if stem != result.session_id:
            return f"{result.session_id}_{stem}"
    return result.session_id


def export_session(result: SessionResult, output_dir: str) -> Dict[str, str]:
    """Write the non-empty result tables of one session; return {table: path}."""
    os.makedirs(output_dir, exist_ok=True)
    base = _session_base(result)
    written: Dict[str, str] = {}
    if result.block_summaries:
        path = os.path.join(output_dir, f"{base}_block_summaries.csv")
        export_block_summaries_csv(result.block_summaries, path)
        written["block_summaries"] = path
    if result.stroke_details:
        path = os.path.join(output_dir, f"{base}_stroke_details.csv")
        export_stroke_details_csv(result.stroke_details, path)
        written["stroke_details"] = path
    if result.recovery_summaries:
        path = os.path.join(output_dir, f"{base}_recovery.csv")
        export_recovery_summaries_csv(result.recovery_summaries, path)
        written["recovery"] = path
    if not written:
        logger.info(f"No accepted blocks or rest periods for session {result.session_id}; nothing exported")
    return written


def export_history(results: Sequence[SessionResult], output_dir: str) -> Dict[str, str]:
    """Write the concatenated rows of all sessions, in session order."""
    os.makedirs(output_dir, exist_ok=True)
    blocks: List[BlockSummary] = [b for r in results for b in r.block_summaries]
    details: List[StrokeDetail] = [d for r in results for d in r.stroke_details]
    recoveries: List[RecoverySummary] = [x for r in results for x in r.recovery_summaries]

    written: Dict[str, str] = {}
    if blocks:
        path = os.path.join(output_dir, "block_summaries_history.csv")
        export_block_summaries_csv(blocks, path)
        written["block_summaries"] = path
    if details:
        path = os.path.join(output_dir, "stroke_details_history.csv")
        export_stroke_details_csv(details, path)
        written["stroke_details"] = path
    if recoveries:
        path = os.path.join(output_dir, "recovery_history.csv")
        export_recovery_summaries_csv(recoveries, path)
        written["recovery"] = path
    for table, path in written.items():
        logger.info(f"Wrote consolidated {table} CSV: {path}")
    return written
