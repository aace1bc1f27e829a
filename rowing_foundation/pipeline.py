from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .config import AnalysisConfig
from .io.stroke_loader import load_session
from .models.types import SessionResult, StrokeRecord
from .recognition.segmenter import segment_session

logger = logging.getLogger(__name__)

SESSION_SUFFIXES = (".csv",)


def iter_session_files(inputs: Iterable[str]) -> List[str]:
    """Expand files and directories into a sorted, deduplicated list of session exports."""
    files: List[str] = []
    for inp in inputs:
        p = Path(inp)
        if p.is_file():
            files.append(str(p))
        elif p.is_dir():
            files.extend(
                str(fp)
                for fp in p.rglob("*")
                if fp.is_file() and not fp.name.startswith(".") and fp.suffix.lower() in SESSION_SUFFIXES
            )
        else:
            logger.warning(f"Input not found: {inp}")
    return sorted(dict.fromkeys(files))


def analyze_strokes(
    strokes: Iterable[StrokeRecord],
    config: AnalysisConfig,
    session_id: str,
    source_path: Optional[str] = None,
) -> SessionResult:
    return segment_session(strokes, config, session_id, source_path)


def analyze_file(path: str, config: AnalysisConfig) -> SessionResult:
    session_id, strokes = load_session(path)
    result = analyze_strokes(strokes, config, session_id, source_path=str(path))
    logger.info(
        f"Processed {Path(path).name} (session {session_id}): {len(strokes)} strokes, "
        f"{len(result.block_summaries)} work blocks, {len(result.recovery_summaries)} rest periods"
    )
    return result


def analyze_files(paths: Iterable[str], config: AnalysisConfig) -> List[SessionResult]:
    """Each file is an independent session with its own segmenter."""
    return [analyze_file(path, config) for path in paths]
