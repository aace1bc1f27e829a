from __future__ import annotations

import csv
import io
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from ..config import MISSING_SENTINEL
from ..models.types import StrokeRecord
from .values import parse_elapsed_time, resolve_numeric

logger = logging.getLogger(__name__)

SECTION_MARKER = "per-stroke data"
TIME_HEADER = "elapsed time"
SESSION_ID_KEYS = ("session date", "start time")

# Field name -> header candidates, first match wins
COLUMN_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "elapsed_time": ("Elapsed Time",),
    "heart_rate": ("Heart Rate",),
    "stroke_rate": ("Stroke Rate",),
    "speed": ("Speed (GPS)", "Speed (IMP)", "Speed"),
    "cumulative_distance": ("Distance (GPS)", "Distance (IMP)", "Distance"),
    "distance_per_stroke": ("Distance/Stroke (GPS)", "Distance/Stroke (IMP)", "Distance/Stroke"),
    "power": ("Power",),
}

_TIME_LIKE_RE = re.compile(r"^\d+(:\d+){1,2}(\.\d+)?$")


def _split_cells(line: str) -> List[str]:
    return [cell.strip() for cell in next(csv.reader([line]), [])]


def _is_blank(cells: Sequence[str]) -> bool:
    return all(not c for c in cells)


def _looks_like_data(cells: Sequence[str]) -> bool:
    if not cells:
        return False
    if _TIME_LIKE_RE.match(cells[0]):
        return True
    return any(resolve_numeric(c) is not None for c in cells)


def find_stroke_table(lines: Sequence[str]) -> Optional[Tuple[int, int]]:
    """Locate the per-stroke table; return (header_index, data_start_index).

    The header row is the first row with an 'Elapsed Time' cell after the
    'Per-Stroke Data:' marker, or anywhere in the file when the marker is absent.
    A units row directly below the header is skipped.
    """
    start = 0
    for idx, line in enumerate(lines):
        cells = _split_cells(line)
        if cells and cells[0].rstrip(":").strip().lower() == SECTION_MARKER:
            start = idx + 1
            break

    header_idx: Optional[int] = None
    for idx in range(start, len(lines)):
        cells = [c.lower() for c in _split_cells(lines[idx])]
        if TIME_HEADER in cells:
            header_idx = idx
            break
    if header_idx is None:
        return None

    data_start = header_idx + 1
    if data_start < len(lines):
        cells = _split_cells(lines[data_start])
        if not _is_blank(cells) and not _looks_like_data(cells):
            data_start += 1
    return header_idx, data_start


def read_session_id(lines: Sequence[str], fallback: str) -> str:
    """Session date from the export metadata as YYYYMMDD, else the fallback."""
    for line in lines:
        cells = _split_cells(line)
        if not cells or not cells[0]:
            continue
        key = cells[0].rstrip(":").strip().lower()
        if key == SECTION_MARKER:
            break
        if key not in SESSION_ID_KEYS or len(cells) < 2 or not cells[1]:
            continue
        try:
            return pd.to_datetime(cells[1]).strftime("%Y%m%d")
        except (ValueError, TypeError, OverflowError):
            return re.sub(r"[^A-Za-z0-9_-]+", "_", cells[1]).strip("_") or fallback
    return fallback


def load_stroke_table(path: str) -> pd.DataFrame:
    """Read the per-stroke table of an export into a string-typed DataFrame.

    Returns an empty DataFrame if the file has no recognizable stroke table.
    """
    lines = _read_lines(path)
    return _table_from_lines(lines)


def _read_lines(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8-sig", errors="replace") as f:
        return f.read().splitlines()


def _fit_row(row: List[str], width: int, line_no: int) -> List[str]:
    """Cut a stroke row to the header width; only non-empty extra cells are reported."""
    if len(row) <= width:
        return row
    extra = [c for c in row[width:] if c.strip()]
    if extra:
        logger.warning(f"Line {line_no}: {len(row)} cells for {width} columns, dropped {extra}")
    return row[:width]


def _table_from_lines(lines: Sequence[str]) -> pd.DataFrame:
    located = find_stroke_table(lines)
    if located is None:
        return pd.DataFrame()
    header_idx, data_start = located

    data_end = data_start
    while data_end < len(lines) and not _is_blank(_split_cells(lines[data_end])):
        data_end += 1

    width = len(next(csv.reader([lines[header_idx]]), []))
    text = io.StringIO()
    writer = csv.writer(text, lineterminator="\n")
    writer.writerow(next(csv.reader([lines[header_idx]]), []))
    for line_no, row in enumerate(csv.reader(lines[data_start:data_end]), start=data_start + 1):
        writer.writerow(_fit_row(row, width, line_no))

    text.seek(0)
    df = pd.read_csv(text, dtype=str, keep_default_na=False, skipinitialspace=True, index_col=False)
    df.columns = [str(c).strip() for c in df.columns]
    return df


def _pick_column(df: pd.DataFrame, candidates: Sequence[str]) -> Optional[str]:
    lookup = {c.lower(): c for c in df.columns}
    for name in candidates:
        if name.lower() in lookup:
            return lookup[name.lower()]
    return None


def frame_to_strokes(df: pd.DataFrame, sentinel: str = MISSING_SENTINEL) -> List[StrokeRecord]:
    """Resolve every row of a stroke table into a StrokeRecord, in file order."""
    if df.empty:
        return []
    columns = {field: _pick_column(df, names) for field, names in COLUMN_CANDIDATES.items()}

    def _cell(row: pd.Series, field: str) -> Optional[str]:
        col = columns[field]
        return row[col] if col is not None else None

    strokes: List[StrokeRecord] = []
    for _, row in df.iterrows():
        strokes.append(
            StrokeRecord(
                elapsed_time_s=parse_elapsed_time(_cell(row, "elapsed_time"), sentinel),
                heart_rate=resolve_numeric(_cell(row, "heart_rate"), sentinel),
                stroke_rate=resolve_numeric(_cell(row, "stroke_rate"), sentinel),
                speed=resolve_numeric(_cell(row, "speed"), sentinel),
                cumulative_distance=resolve_numeric(_cell(row, "cumulative_distance"), sentinel),
                distance_per_stroke=resolve_numeric(_cell(row, "distance_per_stroke"), sentinel),
                power=resolve_numeric(_cell(row, "power"), sentinel),
            )
        )
    return strokes


def load_session(path: str, sentinel: str = MISSING_SENTINEL) -> Tuple[str, List[StrokeRecord]]:
    """Load one session export as (session_id, strokes).

    Unreadable files and files without a stroke table give an empty stroke list.
    """
    fallback = Path(path).stem
    try:
        lines = _read_lines(path)
    except OSError as e:
        logger.warning(f"Failed to open session file: {path} ({e})")
        return fallback, []

    session_id = read_session_id(lines, fallback)
    try:
        df = _table_from_lines(lines)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.warning(f"Failed to parse stroke table in {path} ({e})")
        return session_id, []

    if df.empty:
        logger.warning(f"No per-stroke data found in {path}")
        return session_id, []
    strokes = frame_to_strokes(df, sentinel)
    logger.debug(f"Loaded {len(strokes)} strokes from {path} (session {session_id})")
    return session_id, strokes
