from __future__ import annotations

import logging
import math
import os
from typing import Literal

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import ChartResponse, QuartersResponse
from core.data import load_records
from core.metrics_chart import METRIC_LABELS, compute_chart
from core.quarters import DEFAULT_QUARTER, QUARTERS, normalize_filters


API_HOST = os.environ.get("METRICS_API_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("METRICS_API_PORT", "3010"))

app = FastAPI(title="Test Metrics API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


@app.get("/api/data")
def api_data():
    # Read failures propagate; the client just sees a 500.
    return _json(load_records())


@app.get("/meta/quarters", response_model=QuartersResponse)
def meta_quarters():
    return {
        "quarters": {q: list(months) for q, months in QUARTERS.items()},
        "default": DEFAULT_QUARTER,
        "metrics": METRIC_LABELS,
    }


@app.get("/api/chart", response_model=ChartResponse)
def api_chart(quarter: Literal["Q1", "Q2", "Q3", "Q4"] = Query(default=DEFAULT_QUARTER)):
    try:
        records = load_records()
        return _json(compute_chart(normalize_filters({"selected_quarter": quarter}), records))
    except Exception as exc:
        logger.exception("api_chart failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )
    logger.info("serving %s on %s:%s", "/api/data", API_HOST, API_PORT)
    uvicorn.run(app, host=API_HOST, port=API_PORT)
