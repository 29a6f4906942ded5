from core.charts import CHART_TITLE, build_metrics_chart, chart_frame, tick_label, tick_label_expr, to_vega_spec
from core.metrics_chart import compute_chart_data


def _chart_data():
    records = [
        {"Month": "Jan Week 1", "Pass": 5, "Fail": 1},
        {"Month": "Feb Week 2", "Pass": 2},
    ]
    return compute_chart_data(records, "Q1")


def test_chart_frame_is_long_format():
    df = chart_frame(_chart_data())
    assert len(df) == 2 * 9
    row = df[(df["label"] == "Jan Week 1") & (df["metric"] == "Pass")].iloc[0]
    assert row["value"] == 5
    assert row["position"] == 0
    assert row["tooltip"] == "Pass: 5"
    assert df[df["metric"] == "Low"]["tooltip"].tolist() == ["Low: 0.1", "Low: 0.1"]


def test_chart_frame_empty():
    df = chart_frame(compute_chart_data([], "Q1"))
    assert df.empty
    assert list(df.columns) == ["position", "label", "metric", "value", "tooltip"]


def test_tick_label():
    assert tick_label("Jan Week 1") == "1"
    assert tick_label("March Week 12") == "12"
    assert tick_label("Oct") == "Oct"
    assert tick_label("Jan Week") == "Jan Week"


def test_tick_label_expr_maps_positions():
    assert tick_label_expr(["Jan Week 1", "Oct"]) == '["1", "Oct"][datum.value]'


def test_spec_presentation():
    spec = to_vega_spec(build_metrics_chart(_chart_data()))
    assert spec["mark"]["type"] == "bar"
    assert spec["title"]["text"] == CHART_TITLE
    enc = spec["encoding"]
    assert enc["x"]["field"] == "position"
    assert enc["x"]["type"] == "ordinal"
    assert enc["x"]["title"] == "Month"
    assert enc["x"]["axis"]["labelExpr"] == '["1", "2"][datum.value]'
    assert enc["y"]["title"] == "Count"
    assert enc["y"]["stack"] is None
    assert enc["color"]["legend"]["orient"] == "right"
    assert enc["color"]["legend"]["symbolType"] == "circle"
    assert enc["color"]["scale"]["range"][2] == "rgba(75, 192, 192, 0.7)"
    assert enc["color"]["scale"]["domain"][0] == "Test Cases Authored"


def test_duplicate_labels_get_separate_unstacked_bars():
    chart_data = compute_chart_data(
        [{"Month": "Jan Week 1", "Pass": 2}, {"Month": "Jan Week 1", "Pass": 7}],
        "Q1",
    )
    df = chart_frame(chart_data)
    passes = df[df["metric"] == "Pass"]
    assert passes["position"].tolist() == [0, 1]
    assert passes["value"].tolist() == [2, 2]

    spec = to_vega_spec(build_metrics_chart(chart_data))
    assert spec["encoding"]["x"]["field"] == "position"
    assert spec["encoding"]["y"]["stack"] is None
    assert spec["encoding"]["x"]["axis"]["labelExpr"] == '["1", "1"][datum.value]'
