from __future__ import annotations

import math
import numbers
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from core.charts import build_metrics_chart, to_vega_spec
from core.quarters import ChartFilters, month_token, normalize_quarter


SERIES_FLOOR = 0.1

# (metric label, bar color); labels must match the sheet headers exactly.
SERIES_CONFIGS: Tuple[Tuple[str, str], ...] = (
    ("Test Cases Authored", "rgba(255, 99, 132, 0.7)"),
    ("TC Execution", "rgba(54, 162, 235, 0.7)"),
    ("Pass", "rgba(75, 192, 192, 0.7)"),
    ("Fail", "rgba(255, 206, 86, 0.7)"),
    ("Defects Posted", "rgba(215, 216, 80, 0.7)"),
    ("High", "rgba(153, 102, 255, 0.7)"),
    ("Med", "rgba(255, 159, 64, 0.7)"),
    ("Low", "rgba(231, 233, 237, 0.7)"),
    ("Cycles", "rgba(102, 187, 106, 0.7)"),
)
METRIC_LABELS: List[str] = [label for label, _ in SERIES_CONFIGS]


@dataclass(frozen=True)
class ChartSeries:
    label: str
    color: str
    data: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class ChartData:
    labels: List[str] = field(default_factory=list)
    series: List[ChartSeries] = field(default_factory=list)

    def series_for(self, label: str) -> Optional[ChartSeries]:
        for s in self.series:
            if s.label == label:
                return s
        return None


def floor_value(value: Any) -> float:
    """Floor a metric cell at SERIES_FLOOR so empty bars stay visible.

    Missing, blank, non-numeric, NaN and negative values all render as the floor;
    booleans count as 0/1.
    """
    if value is None:
        number: Any = 0
    elif isinstance(value, bool):
        number = int(value)
    elif isinstance(value, numbers.Real):
        number = value
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = 0
    if isinstance(number, float) and not math.isfinite(number):
        number = 0
    return max(number, SERIES_FLOOR)


def group_by_month(records: Iterable[Any], months: Iterable[str]) -> Dict[str, List[Mapping[str, Any]]]:
    """Bucket records by canonical month, in canonical order, keeping row order per bucket."""
    groups: Dict[str, List[Mapping[str, Any]]] = {m: [] for m in months}
    for row in records:
        if not isinstance(row, Mapping):
            continue
        token = month_token(row.get("Month"))
        if token in groups:
            groups[token].append(row)
    return {m: rows for m, rows in groups.items() if rows}


def compute_chart_data(records: Iterable[Any], quarter: str | ChartFilters) -> ChartData:
    filters = quarter if isinstance(quarter, ChartFilters) else ChartFilters(normalize_quarter(quarter))
    months = filters.months
    grouped = group_by_month(records, months)

    labels = [row["Month"] for rows in grouped.values() for row in rows]

    # First row per label wins when a Month value repeats inside a bucket.
    lookup: Dict[str, Mapping[str, Any]] = {}
    for rows in grouped.values():
        for row in rows:
            lookup.setdefault(row["Month"], row)

    series = [
        ChartSeries(
            label=label,
            color=color,
            data=[floor_value(lookup[month_label].get(label)) for month_label in labels],
        )
        for label, color in SERIES_CONFIGS
    ]
    return ChartData(labels=labels, series=series)


def compute_chart(filters: ChartFilters, records: List[Any]) -> Dict[str, Any]:
    chart_data = compute_chart_data(records, filters)
    charts: Dict[str, Any] = {}
    if chart_data.labels:
        charts["metrics"] = to_vega_spec(build_metrics_chart(chart_data))
    return {"filters": asdict(filters), "chart_data": asdict(chart_data), "charts": charts}
