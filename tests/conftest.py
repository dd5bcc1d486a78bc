from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import numpy as np
import pytest

from har_tidy.data_processing.schemas import ACTIVITY_LABELS, N_FEATURES
from har_tidy.utils.config import default_config

# Named features placed first; the remaining columns get filler names.
NAMED_FEATURES = [
    "tBodyAcc-mean()-Z",
    "tBodyAcc-std()-X",
    "tBodyAcc-mad()-X",
    "fBodyAcc-meanFreq()-X",
    "fBodyBodyAccJerkMag-mean()",
    "fBodyBodyAccJerkMag-std()",
    "angle(tBodyAccMean,gravity)",
    "tBodyBodyAcc-mean()-X",
]
# positions (0-based) of the names above matching mean() or std()
TARGET_POSITIONS = [0, 1, 4, 5, 7]

TRAIN_SUBJECTS = [1, 1, 1, 1, 3, 3, 3, 3]
TRAIN_ACTIVITIES = [1, 1, 2, 2, 1, 1, 6, 6]
TEST_SUBJECTS = [2, 2, 2, 2]
TEST_ACTIVITIES = [3, 3, 3, 5]

ROW_COUNTS = {
    "subject_train": len(TRAIN_SUBJECTS),
    "y_train": len(TRAIN_SUBJECTS),
    "X_train": len(TRAIN_SUBJECTS),
    "subject_test": len(TEST_SUBJECTS),
    "y_test": len(TEST_SUBJECTS),
    "X_test": len(TEST_SUBJECTS),
}


def feature_names() -> List[str]:
    fillers = [f"tFiller-energy()-{i}" for i in range(len(NAMED_FEATURES) + 1, N_FEATURES + 1)]
    return NAMED_FEATURES + fillers


def measurements(n_rows: int, offset: int = 0) -> np.ndarray:
    rows = np.arange(offset, offset + n_rows, dtype=float)[:, None]
    cols = np.arange(N_FEATURES, dtype=float)[None, :]
    return (rows + 1.0) * 0.01 + cols * 1e-4


def _write_lines(path: Path, lines: List[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def write_dataset(root: Path) -> Dict[str, np.ndarray]:
    _write_lines(root / "activity_labels.txt", [f"{k} {v}" for k, v in ACTIVITY_LABELS.items()])
    _write_lines(root / "features.txt", [f"{i} {n}" for i, n in enumerate(feature_names(), start=1)])

    X = {
        "train": measurements(len(TRAIN_SUBJECTS)),
        "test": measurements(len(TEST_SUBJECTS), offset=len(TRAIN_SUBJECTS)),
    }
    ids = {
        "train": (TRAIN_SUBJECTS, TRAIN_ACTIVITIES),
        "test": (TEST_SUBJECTS, TEST_ACTIVITIES),
    }
    for part, (subjects, activities) in ids.items():
        _write_lines(root / part / f"subject_{part}.txt", [str(s) for s in subjects])
        _write_lines(root / part / f"y_{part}.txt", [str(a) for a in activities])
        # same layout as the published files: leading blanks, scientific notation
        _write_lines(
            root / part / f"X_{part}.txt",
            [" " + " ".join(f"{v: .7e}" for v in row) for row in X[part]],
        )
    return X


@pytest.fixture()
def uci_dir(tmp_path: Path) -> Path:
    root = tmp_path / "UCI HAR Dataset"
    write_dataset(root)
    return root


@pytest.fixture()
def cfg(uci_dir: Path, tmp_path: Path) -> Dict:
    c = default_config()
    c["datasets"]["uci_har"]["raw_dir"] = str(uci_dir)
    c["datasets"]["uci_har"]["expected_rows"] = dict(ROW_COUNTS)
    c["output"]["summary"] = str(tmp_path / "out" / "tidy_data_summary.txt")
    return c
