from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


N_FEATURES = 561

ID_COLUMNS: Tuple[str, str] = ("subject", "activity")

DEFAULT_FEATURE_PATTERNS: Tuple[str, ...] = ("mean()", "std()")
DEFAULT_NAME_FIXES: Dict[str, str] = {"BodyBody": "Body"}
DEFAULT_SUMMARY_PREFIX = "Avrg-"

# Contents of activity_labels.txt in the published dataset
ACTIVITY_LABELS: Dict[int, str] = {
    1: "WALKING",
    2: "WALKING_UPSTAIRS",
    3: "WALKING_DOWNSTAIRS",
    4: "SITTING",
    5: "STANDING",
    6: "LAYING",
}


@dataclass(frozen=True)
class TableSpec:
    """Fixed layout of one whitespace-delimited file in the dataset tree."""

    name: str
    path: str
    nrows: int
    column_types: Tuple[str, ...]

    @property
    def ncols(self) -> int:
        return len(self.column_types)


UCI_HAR_TABLES: Tuple[TableSpec, ...] = (
    TableSpec("activity_labels", "activity_labels.txt", 6, ("int", "str")),
    TableSpec("features", "features.txt", N_FEATURES, ("int", "str")),
    TableSpec("subject_train", "train/subject_train.txt", 7352, ("int",)),
    TableSpec("y_train", "train/y_train.txt", 7352, ("int",)),
    TableSpec("X_train", "train/X_train.txt", 7352, ("float",) * N_FEATURES),
    TableSpec("subject_test", "test/subject_test.txt", 2947, ("int",)),
    TableSpec("y_test", "test/y_test.txt", 2947, ("int",)),
    TableSpec("X_test", "test/X_test.txt", 2947, ("float",) * N_FEATURES),
)

PARTITIONS: Tuple[str, str] = ("train", "test")
