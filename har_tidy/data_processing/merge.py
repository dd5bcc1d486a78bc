from __future__ import annotations

import logging
from typing import Dict, List

import pandas as pd

from har_tidy.data_processing.schemas import ID_COLUMNS, PARTITIONS

log = logging.getLogger(__name__)


def measurement_columns(n: int) -> List[str]:
    return [f"V{i}" for i in range(1, n + 1)]


def bind_partition(
    subject: pd.DataFrame,
    activity: pd.DataFrame,
    measurements: pd.DataFrame,
    partition: str,
) -> pd.DataFrame:
    """Column-binds subject, activity code and measurements of one partition."""
    sizes = {"subject": len(subject), "activity": len(activity), "measurements": len(measurements)}
    if len(set(sizes.values())) != 1:
        raise ValueError(f"Row counts differ within partition '{partition}': {sizes}")

    values = measurements.reset_index(drop=True).copy()
    values.columns = measurement_columns(values.shape[1])

    ids = pd.DataFrame(
        {
            ID_COLUMNS[0]: subject.iloc[:, 0].to_numpy(),
            ID_COLUMNS[1]: activity.iloc[:, 0].to_numpy(),
        }
    )
    return pd.concat([ids, values], axis=1)


def merge_partitions(tables: Dict[str, pd.DataFrame]) -> pd.DataFrame:
    parts: List[pd.DataFrame] = []
    for partition in PARTITIONS:
        parts.append(
            bind_partition(
                tables[f"subject_{partition}"],
                tables[f"y_{partition}"],
                tables[f"X_{partition}"],
                partition,
            )
        )

    columns = list(parts[0].columns)
    for partition, part in zip(PARTITIONS[1:], parts[1:]):
        if list(part.columns) != columns:
            raise ValueError(f"Partition '{partition}' columns do not match '{PARTITIONS[0]}'.")

    merged = pd.concat(parts, ignore_index=True)
    log.info("Merged partitions: %s -> %d rows", [len(p) for p in parts], len(merged))
    return merged
