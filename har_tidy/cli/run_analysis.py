from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from har_tidy.data_processing.run_analysis import run_analysis
from har_tidy.utils.config import default_config, ensure_dirs, load_config
from har_tidy.utils.logging import setup_logging

log = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Average the mean()/std() UCI HAR measurements per subject and activity."
    )
    p.add_argument(
        "--config",
        default=None,
        help="Optional YAML config (supports extends). Without it, reads 'UCI HAR Dataset/' "
        "in the working directory and writes tidy_data_summary.txt.",
    )
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = load_config(args.config) if args.config else default_config()

    ensure_dirs(cfg)
    setup_logging(level=cfg.get("logging", {}).get("level", "INFO"))

    result = run_analysis(cfg)
    log.info(
        "Tidy summary with %d rows and %d columns written to %s",
        result["n_rows"],
        result["n_columns"],
        result["summary_path"],
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
