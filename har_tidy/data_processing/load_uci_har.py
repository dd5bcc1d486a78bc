from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Union

import pandas as pd
from tqdm import tqdm

from har_tidy.data_processing.schemas import UCI_HAR_TABLES, TableSpec

log = logging.getLogger(__name__)


_DTYPES = {
    "int": "int64",
    "float": "float64",
    "str": "object",
}


def _coerce(df: pd.DataFrame, spec: TableSpec, path: Path) -> pd.DataFrame:
    dtypes = {}
    for i, kind in enumerate(spec.column_types):
        if kind not in _DTYPES:
            raise ValueError(f"Unknown column type {kind!r} in table spec '{spec.name}'.")
        dtypes[i] = _DTYPES[kind]

    if df.isna().any().any():
        raise ValueError(f"Missing values in {path} (ragged rows?).")

    try:
        return df.astype(dtypes)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Type coercion failed for {path}: {e}") from e


def read_table(spec: TableSpec, root: Union[str, Path], nrows: Optional[int] = None) -> pd.DataFrame:
    """
    Reads one whitespace-delimited table and checks it against its spec.

    Every field is read as text first so that the column count can be checked
    before any typed conversion. Quotes and '#' have no special meaning.
    """
    path = Path(root) / spec.path
    if not path.is_file():
        raise FileNotFoundError(f"Dataset file not found: {path}")

    expected_rows = spec.nrows if nrows is None else int(nrows)

    df = pd.read_csv(
        path,
        sep=r"\s+",
        header=None,
        dtype=str,
        quoting=csv.QUOTE_NONE,
        keep_default_na=False,
    )

    if df.shape[1] != spec.ncols:
        raise ValueError(f"{path}: expected {spec.ncols} columns, found {df.shape[1]}.")
    if df.shape[0] != expected_rows:
        raise ValueError(f"{path}: expected {expected_rows} rows, found {df.shape[0]}.")

    df = _coerce(df, spec, path)
    log.debug("Loaded %s: %d x %d", spec.path, df.shape[0], df.shape[1])
    return df


def load_uci_har_tables(
    root: Union[str, Path],
    expected_rows: Optional[Mapping[str, int]] = None,
    tables: Sequence[TableSpec] = UCI_HAR_TABLES,
) -> Dict[str, pd.DataFrame]:
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Dataset directory not found: {root}")

    overrides = dict(expected_rows or {})
    unknown = set(overrides) - {t.name for t in tables}
    if unknown:
        raise ValueError(f"expected_rows names unknown tables: {sorted(unknown)}")

    out: Dict[str, pd.DataFrame] = {}
    for spec in tqdm(tables, desc="Loading UCI HAR files"):
        out[spec.name] = read_table(spec, root, nrows=overrides.get(spec.name))

    log.info("Loaded %d tables from %s", len(out), root.as_posix())
    return out
