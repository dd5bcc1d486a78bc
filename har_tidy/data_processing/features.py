from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Sequence

import pandas as pd

from har_tidy.data_processing.schemas import (
    DEFAULT_FEATURE_PATTERNS,
    DEFAULT_NAME_FIXES,
    ID_COLUMNS,
)

log = logging.getLogger(__name__)


def select_target_features(
    feature_names: Iterable[str],
    patterns: Sequence[str] = DEFAULT_FEATURE_PATTERNS,
) -> List[int]:
    """
    Positions (0-based) of features whose name contains any of the patterns.

    Patterns are plain, case-sensitive substrings: "mean()" matches
    "tBodyAcc-mean()-X" but not "fBodyAcc-meanFreq()-X".
    """
    if not patterns:
        raise ValueError("At least one feature pattern is required.")
    names = pd.Series(list(feature_names), dtype=object)
    mask = pd.Series(False, index=names.index)
    for p in patterns:
        mask |= names.str.contains(p, regex=False)
    return [int(i) for i in names.index[mask]]


def extract_target_data(merged: pd.DataFrame, target_indexes: Sequence[int]) -> pd.DataFrame:
    # the two identifier columns sit in front of the measurements
    offset = len(ID_COLUMNS)
    positions = list(range(offset)) + [i + offset for i in target_indexes]
    if positions and max(positions) >= merged.shape[1]:
        raise ValueError(f"Feature index out of range for a table with {merged.shape[1]} columns.")
    return merged.iloc[:, positions].copy()


def label_activities(df: pd.DataFrame, activity_labels: pd.DataFrame) -> pd.DataFrame:
    """
    Replaces activity codes by their labels.

    The result is an ordered categorical whose categories follow the order of
    the label table, so later grouping sorts by code rather than alphabetically.
    """
    codes = activity_labels.iloc[:, 0].tolist()
    labels = activity_labels.iloc[:, 1].astype(str).tolist()
    if len(set(codes)) != len(codes) or len(set(labels)) != len(labels):
        raise ValueError("Activity label table contains duplicate codes or labels.")

    col = ID_COLUMNS[1]
    unmapped = sorted(set(df[col].unique()) - set(codes))
    if unmapped:
        raise ValueError(f"Activity codes without a label: {unmapped}")

    out = df.copy()
    mapped = out[col].map(dict(zip(codes, labels)))
    out[col] = pd.Categorical(mapped, categories=labels, ordered=True)
    return out


def clean_feature_names(
    names: Iterable[str],
    fixes: Mapping[str, str] = DEFAULT_NAME_FIXES,
) -> List[str]:
    out = []
    for name in names:
        for old, new in fixes.items():
            name = name.replace(old, new)
        out.append(name)
    return out


def apply_descriptive_names(df: pd.DataFrame, names: Sequence[str]) -> pd.DataFrame:
    columns = list(ID_COLUMNS) + list(names)
    if len(columns) != df.shape[1]:
        raise ValueError(f"Got {len(names)} names for {df.shape[1] - len(ID_COLUMNS)} measurement columns.")
    if len(set(columns)) != len(columns):
        log.warning("Descriptive column names are not unique.")
    out = df.copy()
    out.columns = columns
    return out
