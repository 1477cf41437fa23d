from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..config import DEFAULT_APP_CONFIG

_TABLES = (
    "categories",
    "professionals",
    "establishments",
    "professional_reviews",
    "establishment_reviews",
    "posts",
)

_frames: dict[str, pd.DataFrame] = {}


def _load(name: str, data_dir: Path) -> pd.DataFrame:
    df = pd.read_csv(data_dir / f"{name}.csv", dtype={"id": str})
    # Missing values become None so records never carry NaN
    return df.astype(object).where(pd.notna(df), None)


def get_frame(name: str, data_dir: Path | None = None) -> pd.DataFrame:
    """Return the in-memory table *name*, loading it on first call."""
    if name not in _TABLES:
        raise KeyError(f"unknown table {name!r}")
    if name not in _frames:
        _frames[name] = _load(name, data_dir or DEFAULT_APP_CONFIG.data_dir)
    return _frames[name]


def clear_frames() -> None:
    _frames.clear()
