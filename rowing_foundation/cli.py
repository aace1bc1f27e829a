from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional

from .config import load_config
from .pipeline import analyze_files, iter_session_files
from .storage.export import export_history, export_session

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rowing Foundation CLI: work blocks, DPS success and HR recovery per session"
    )
    parser.add_argument("--input", nargs="+", required=True, help="One or more session CSV exports or directories")
    parser.add_argument("--output", required=True, help="Output directory for exports")
    parser.add_argument("--config", help="JSON profile with analysis settings")
    parser.add_argument("--min-hr", dest="target_min_hr", type=int, help="Lowest work heart rate (bpm)")
    parser.add_argument("--max-hr", dest="target_max_hr", type=int, help="Highest work heart rate (bpm)")
    parser.add_argument("--min-rate", dest="min_work_rate", type=float, help="Lowest work stroke rate (spm)")
    parser.add_argument("--max-rate", dest="max_work_rate", type=float, help="Highest work stroke rate (spm)")
    parser.add_argument("--min-block-dist", dest="min_block_dist", type=float, help="Minimum work block distance (m)")
    parser.add_argument("--target-dps", dest="target_dps_threshold", type=float, help="Distance-per-stroke target (m)")
    parser.add_argument("--eff-floor", dest="eff_floor", type=float, help="Speed:HR ratio mapped to score 0")
    parser.add_argument("--eff-ceiling", dest="eff_ceiling", type=float, help="Speed:HR ratio mapped to score 10")
    parser.add_argument("--no-history", action="store_true", help="Skip the consolidated history CSVs")
    parser.add_argument("--verbose", action="store_true", help="Log every block and rest decision")
    return parser


CONFIG_OPTIONS = (
    "target_min_hr",
    "target_max_hr",
    "min_work_rate",
    "max_work_rate",
    "min_block_dist",
    "target_dps_threshold",
    "eff_floor",
    "eff_ceiling",
)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {name: getattr(args, name) for name in CONFIG_OPTIONS}
    try:
        config = load_config(args.config, **overrides)
    except (OSError, json.JSONDecodeError, ValueError, TypeError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    files = iter_session_files(args.input)
    if not files:
        logger.error("No session CSV files found.")
        return 1

    results = analyze_files(files, config)
    for result in results:
        export_session(result, args.output)

    if not args.no_history:
        export_history(results, args.output)

    total_blocks = sum(len(r.block_summaries) for r in results)
    total_rests = sum(len(r.recovery_summaries) for r in results)
    logger.info(f"Analyzed {len(results)} sessions: {total_blocks} work blocks, {total_rests} rest periods")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
