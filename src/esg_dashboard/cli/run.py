# src/esg_dashboard/cli/run.py

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from esg_dashboard.config import load_config, setup_logging
from esg_dashboard.core.exceptions import UploadError
from esg_dashboard.insights.llm_insights import generate_insights
from esg_dashboard.pipeline.io_utils import load_upload_file, save_report_json

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="ESG dashboard data builder")

    parser.add_argument(
        "input",
        help="ESG KPI spreadsheet (.xlsx/.xls/.csv) or dataset JSON.",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Where to save the dataset as JSON (default: print to stdout).",
    )
    parser.add_argument(
        "--insights",
        action="store_true",
        help="Also request overall AI insights (needs OPENAI_API_KEY).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: ESG_LOG_LEVEL or INFO).",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = load_config()
    level = args.log_level or cfg.log_level
    setup_logging(level)
    if not isinstance(getattr(logging, level.upper(), None), int):
        logger.warning("Unknown log level %r, using INFO", level)

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error("Input file not found: %s", input_path)
        return 1

    # Step 1: decode + aggregate
    logger.info("Building ESG dataset from %s", input_path)
    try:
        data = load_upload_file(input_path)
    except UploadError as exc:
        logger.error("Could not use %s: %s", input_path, exc)
        return 2

    # Step 2: optional insights
    insights: List[str] = []
    if args.insights:
        logger.info("Requesting insights...")
        insights = generate_insights(
            cfg.system_prompt("overall"),
            data,
            model=cfg.openai_model,
            limit=cfg.insight_limit,
        )

    result = {"mockData": data, "insights": insights}

    if args.output:
        out_path = save_report_json(result, args.output)
        logger.info("Saved ESG dataset to %s", out_path)
    else:
        print(json.dumps(result, indent=2, ensure_ascii=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
