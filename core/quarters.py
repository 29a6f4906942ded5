from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


# Tokens are matched literally against the spreadsheet's Month column.
QUARTERS: Dict[str, Tuple[str, str, str]] = {
    "Q1": ("Jan", "Feb", "March"),
    "Q2": ("April", "May", "Jun"),
    "Q3": ("Jul", "Aug", "Sep"),
    "Q4": ("Oct", "Nov", "Dec"),
}
DEFAULT_QUARTER = "Q1"


@dataclass(frozen=True)
class ChartFilters:
    selected_quarter: str = DEFAULT_QUARTER

    @property
    def months(self) -> Tuple[str, str, str]:
        return QUARTERS[self.selected_quarter]


def month_token(value: object) -> Optional[str]:
    """Return the month prefix of a Month cell ("Jan Week 1" -> "Jan")."""
    if not isinstance(value, str):
        return None
    return value.split(" ")[0]


def normalize_quarter(value: object) -> str:
    if value is None:
        return DEFAULT_QUARTER
    key = str(value).strip().upper()
    if key not in QUARTERS:
        return DEFAULT_QUARTER
    return key


def normalize_filters(raw: Optional[dict]) -> ChartFilters:
    raw = raw or {}
    return ChartFilters(selected_quarter=normalize_quarter(raw.get("selected_quarter")))
