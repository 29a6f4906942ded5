from __future__ import annotations

import pandas as pd
import pytest


@pytest.fixture
def sample_records():
    return [
        {"Month": "Jan Week 1", "Test Cases Authored": 12, "Pass": 5, "Fail": 1, "High": 2},
        {"Month": "Apr Week 1", "Pass": 3},
        {"Month": "Feb Week 1", "Pass": 0, "Cycles": 1},
        {"Month": "Jan Week 2", "TC Execution": 7, "Pass": 4},
        {"Month": "March Week 1", "Defects Posted": 2, "Low": -1},
        {"Month": 42, "Pass": 9},
        {"Pass": 8},
        {"Month": "April Week 2", "Pass": 6, "Med": 3},
        {"Month": "Oct", "Cycles": 2},
    ]


@pytest.fixture
def workbook(tmp_path):
    path = tmp_path / "Book1.xlsx"
    first = pd.DataFrame(
        [
            {"Month": "Jan Week 1", "Test Cases Authored": 12, "Pass": 5, "Fail": None},
            {"Month": None, "Test Cases Authored": None, "Pass": None, "Fail": None},
            {"Month": "Feb Week 1", "Test Cases Authored": 3.5, "Pass": 0, "Fail": 2},
        ]
    )
    other = pd.DataFrame([{"Month": "Jul Week 1", "Pass": 99}])
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        first.to_excel(writer, sheet_name="Metrics", index=False)
        other.to_excel(writer, sheet_name="Ignored", index=False)
    return path
