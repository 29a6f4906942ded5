from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class ChartFiltersModel(BaseModel):
    selected_quarter: str = "Q1"


class ChartSeriesModel(BaseModel):
    label: str
    color: str
    data: List[float] = Field(default_factory=list)


class ChartDataModel(BaseModel):
    labels: List[str] = Field(default_factory=list)
    series: List[ChartSeriesModel] = Field(default_factory=list)


class ChartResponse(BaseModel):
    filters: ChartFiltersModel
    chart_data: ChartDataModel
    charts: Dict[str, Any] = Field(default_factory=dict)


class QuartersResponse(BaseModel):
    quarters: Dict[str, List[str]]
    default: str
    metrics: List[str]
