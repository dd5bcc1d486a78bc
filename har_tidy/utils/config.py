from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

# Reproduces a bare run from the directory that holds "UCI HAR Dataset/"
DEFAULT_CONFIG: Dict[str, Any] = {
    "project": {"name": "har_tidy"},
    "logging": {"level": "INFO"},
    "datasets": {
        "uci_har": {
            "raw_dir": "UCI HAR Dataset",
            "feature_patterns": ["mean()", "std()"],
            "name_fixes": {"BodyBody": "Body"},
            "summary_prefix": "Avrg-",
            "expected_rows": {},
        }
    },
    "output": {
        "summary": "tidy_data_summary.txt",
        "summary_meta": None,
    },
}


def default_config() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_CONFIG)


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a mapping/dict: {path}")
    return data


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Recursively merges override into base (override wins).
    """
    out = dict(base)
    for k, v in override.items():
        if (
            k in out
            and isinstance(out[k], dict)
            and isinstance(v, Mapping)
        ):
            out[k] = _deep_merge(out[k], v)  # type: ignore[arg-type]
        else:
            out[k] = v
    return out


def _load_with_extends(path: Path) -> Dict[str, Any]:
    cfg = load_yaml(path)

    extends = cfg.get("extends")
    merged: Dict[str, Any] = {}

    if extends:
        if isinstance(extends, (str, Path)):
            parents = [extends]
        elif isinstance(extends, list):
            parents = extends
        else:
            raise ValueError("Config key 'extends' must be a string or a list of strings.")

        for parent in parents:
            parent_path = Path(parent)
            if not parent_path.is_absolute():
                parent_path = (path.parent / parent_path).resolve()
            merged = _deep_merge(merged, _load_with_extends(parent_path))

    cfg_no_extends = dict(cfg)
    cfg_no_extends.pop("extends", None)
    return _deep_merge(merged, cfg_no_extends)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Loads a YAML config file on top of DEFAULT_CONFIG, with optional inheritance via:
      extends: "base.yaml"
    or
      extends:
        - "base.yaml"
        - "other.yaml"

    Paths in 'extends' are resolved relative to the current config file.
    """
    path = Path(path)
    merged = _deep_merge(default_config(), _load_with_extends(path))

    merged.setdefault("_meta", {})
    merged["_meta"]["config_path"] = str(path.resolve())
    return merged


def ensure_dirs(cfg: Dict[str, Any]) -> None:
    """
    Creates parent directories for the configured output files.
    The dataset directory is never created: a missing one must fail the run.
    """
    output = cfg.get("output", {}) or {}
    if isinstance(output, dict):
        for _, p in output.items():
            if isinstance(p, (str, Path)) and str(p).strip():
                Path(p).parent.mkdir(parents=True, exist_ok=True)
