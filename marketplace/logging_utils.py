"""Logging setup for the marketplace service."""
from __future__ import annotations

import logging
from pathlib import Path

from .config import DEFAULT_APP_CONFIG, AppConfig


def setup_logging(config: AppConfig = DEFAULT_APP_CONFIG) -> None:
    """Attach stream (and optionally file) handlers to the root logger once."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(level)
