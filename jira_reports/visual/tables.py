"""CSV export helpers for issue listings."""

from __future__ import annotations

from pathlib import Path

import pandas as pd


def to_csv(df: pd.DataFrame) -> str:
    return df.to_csv(index=False, lineterminator="\n")


def write_csv(df: pd.DataFrame, path: str | Path, encoding: str = "utf-8") -> Path:
    out = Path(path)
    df.to_csv(out, index=False, encoding=encoding, lineterminator="\n")
    return out
