from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"


@dataclass(frozen=True)
class AppConfig:
    session_secret: str = os.getenv("SESSION_SECRET", "marketplace-secret-change-in-production")
    data_dir: Path = Path(os.getenv("MARKETPLACE_DATA_DIR", str(_DEFAULT_DATA_DIR)))
    log_level: str = os.getenv("MARKETPLACE_LOG_LEVEL", "INFO")
    log_file: str | None = os.getenv("MARKETPLACE_LOG_FILE") or None


DEFAULT_APP_CONFIG = AppConfig()
