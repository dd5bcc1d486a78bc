from __future__ import annotations

import logging
from typing import Union

LOG_FORMAT = "[%(asctime)-19s, %(name)s, %(levelname)s] %(message)s"


def setup_logging(level: Union[str, int] = "INFO") -> None:
    """Configures the root logger once per process; later calls only change the level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level}")

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)
