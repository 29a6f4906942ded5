from __future__ import annotations

import logging
import math
import os
from datetime import date, datetime
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1]
DATA_FILE = Path(os.environ.get("METRICS_DATA_FILE", str(DATA_DIR / "Book1.xlsx")))
CACHE_RECORDS = os.environ.get("METRICS_CACHE_RECORDS", "").strip().lower() in {"1", "true", "yes"}

Record = Dict[str, Any]


def get_source_file() -> Path:
    return DATA_FILE


def file_signature(path: Path) -> Tuple[str, float]:
    return str(path), path.stat().st_mtime


def drop_unnamed_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Drop columns pandas had to invent a name for (blank header cells)."""
    keep = [c for c in df.columns if not (isinstance(c, str) and c.startswith("Unnamed:"))]
    return df.loc[:, keep]


def plain_value(value: Any) -> Any:
    """Turn a pandas/numpy cell into a plain JSON-friendly Python value.

    Whole floats become ints (blank cells force numeric columns to float64),
    timestamps become ISO strings, NaN/inf become None.
    """
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, (pd.Timestamp, datetime, date)):
        return value.isoformat()
    return value


def sheet_to_records(df: pd.DataFrame) -> List[Record]:
    """Map each sheet row to a record keyed by header, skipping blank cells and rows."""
    df = drop_unnamed_columns(df).dropna(how="all")
    records: List[Record] = []
    for row in df.to_dict(orient="records"):
        record = {}
        for key, value in row.items():
            value = plain_value(value)
            if value is None or (isinstance(value, str) and value == ""):
                continue
            record[str(key)] = value
        if record:
            records.append(record)
    return records


def read_first_sheet(path: Path) -> pd.DataFrame:
    # Only empty cells are missing; text such as "NA" or "None" is kept as-is.
    return pd.read_excel(path, sheet_name=0, header=0, keep_default_na=False, na_values=[""])


@lru_cache(maxsize=4)
def _load_records_cached(signature: Tuple[str, float]) -> Tuple[Record, ...]:
    path, _ = signature
    logger.info("parsing %s", path)
    return tuple(sheet_to_records(read_first_sheet(Path(path))))


def load_records(path: Optional[Path] = None, *, cached: Optional[bool] = None) -> List[Record]:
    """Read the first sheet of the workbook and return its rows as records.

    Read errors (missing file, bad workbook) are not caught here.
    """
    path = Path(path) if path is not None else get_source_file()
    cached = CACHE_RECORDS if cached is None else cached
    if cached:
        # Copies, so callers can't mutate what the cache holds.
        return [dict(r) for r in _load_records_cached(file_signature(path))]
    return sheet_to_records(read_first_sheet(path))
