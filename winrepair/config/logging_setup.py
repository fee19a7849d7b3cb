from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(log_path: Path, level: int = logging.INFO) -> logging.Logger:
    """
    Attach an append-only file handler for this run to the package logger.
    One line per event. Calling it again with the same path is a no-op.
    """
    logger = logging.getLogger("winrepair")
    logger.setLevel(level)

    target = str(Path(log_path).resolve())
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and h.baseFilename == target:
            return logger

    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
