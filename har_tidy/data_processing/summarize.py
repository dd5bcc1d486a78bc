from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Union

import pandas as pd

from har_tidy.data_processing.schemas import DEFAULT_SUMMARY_PREFIX, ID_COLUMNS

log = logging.getLogger(__name__)


def summarize_by_subject_activity(tidy: pd.DataFrame, prefix: str = DEFAULT_SUMMARY_PREFIX) -> pd.DataFrame:
    """Mean of every measurement per (subject, activity), one row per observed pair.

    Rows are sorted by subject, then by activity category order (activity code
    order when the column comes from label_activities).
    """
    keys = list(ID_COLUMNS)
    missing = [k for k in keys if k not in tidy.columns]
    if missing:
        raise ValueError(f"Missing identifier columns: {missing}")

    summary = (
        tidy.groupby(keys, observed=True, sort=True)
        .mean(numeric_only=False)
        .reset_index()
    )
    summary[ID_COLUMNS[1]] = summary[ID_COLUMNS[1]].astype(str)

    summary.columns = keys + [f"{prefix}{c}" for c in summary.columns[len(keys):]]
    return summary


def write_summary(summary: pd.DataFrame, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    summary.to_csv(
        path,
        sep=" ",
        index=False,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
        encoding="utf-8",
    )
    log.info("Wrote summary %d x %d: %s", summary.shape[0], summary.shape[1], path.as_posix())
    return path
