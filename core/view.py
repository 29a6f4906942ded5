"""Metrics view state: one fetch of the record array, then pure re-derivation.

The Streamlit page keeps a ``ViewState`` in its session and swaps it for a new
one whenever the selected quarter changes.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, List, Optional

import requests

from core.metrics_chart import ChartData, compute_chart_data
from core.quarters import DEFAULT_QUARTER, normalize_quarter


logger = logging.getLogger(__name__)

API_URL = os.environ.get("METRICS_API_URL", "http://localhost:3010/api/data")
ERROR_MESSAGE = "Failed to load data. Please try again later."


class DataFetchError(Exception):
    """Raised when the record array can't be fetched or has the wrong shape."""


@dataclass(frozen=True)
class ViewState:
    raw_data: Optional[List[Any]] = None
    chart_data: Optional[ChartData] = None
    error: Optional[str] = None
    selected_quarter: str = DEFAULT_QUARTER

    @property
    def loading(self) -> bool:
        return self.error is None and self.chart_data is None


def fetch_records(url: str = API_URL, *, session: Any = None, timeout: Optional[float] = None) -> List[Any]:
    http = session or requests
    try:
        response = http.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise DataFetchError(f"request to {url} failed: {exc}") from exc
    if not response.ok:
        raise DataFetchError(f"HTTP error! status: {response.status_code}")
    try:
        data = response.json()
    except ValueError as exc:
        raise DataFetchError("response body is not JSON") from exc
    if not isinstance(data, list) or not data:
        raise DataFetchError("Invalid data format received")
    return data


def derive(state: ViewState) -> ViewState:
    if state.raw_data is None:
        return state
    return replace(state, chart_data=compute_chart_data(state.raw_data, state.selected_quarter))


def load_view_state(
    url: str = API_URL,
    quarter: str = DEFAULT_QUARTER,
    *,
    session: Any = None,
    timeout: Optional[float] = None,
) -> ViewState:
    quarter = normalize_quarter(quarter)
    try:
        records = fetch_records(url, session=session, timeout=timeout)
    except DataFetchError:
        logger.exception("Error fetching data")
        return ViewState(error=ERROR_MESSAGE, selected_quarter=quarter)
    return derive(ViewState(raw_data=records, selected_quarter=quarter))


def select_quarter(state: ViewState, quarter: str) -> ViewState:
    return derive(replace(state, selected_quarter=normalize_quarter(quarter)))
