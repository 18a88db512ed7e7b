from __future__ import annotations

import plotly.graph_objs as go
import pytest

from geo_browser.core.aggregation import ChartKind
from geo_browser.core.csv_parser import parse_csv
from geo_browser.core.dataset import Dataset
from geo_browser.views import build_chart_registry
from geo_browser.views.chart_views import (
    NO_DATA_MESSAGE,
    BarChartView,
    LineChartView,
    PieChartView,
    ScatterChartView,
)


def _boolean():
    return parse_csv("lat,lng,score\n1,1,yes\n2,2,yes\n3,3,no", name="lights.csv")


def _numeric():
    return parse_csv("lat,lng,score\n1,1,3\n2,2,7\n3,3,7", name="parks.csv")


def test_pie_view_for_boolean_dataset():
    view = PieChartView(_boolean())

    data = view.compute_data()
    fig = view.render_figure(data)

    assert data == [{"label": "Yes", "value": 2}, {"label": "No", "value": 1}]
    assert isinstance(fig, go.Figure)
    assert fig.data[0].type == "pie"
    assert list(fig.data[0].values) == [2, 1]
    assert list(fig.data[0].marker.colors) == ["#4caf50", "#f44336"]
    assert fig.layout.title.text == "lights.csv Pie Chart"


def test_bar_view_uses_score_buckets_for_numeric_data():
    fig = BarChartView(_numeric()).figure()

    assert fig.data[0].type == "bar"
    assert list(fig.data[0].x) == [3, 7]
    assert list(fig.data[0].y) == [1, 2]
    assert fig.layout.xaxis.title.text == "Score"


def test_line_view():
    fig = LineChartView(_numeric()).figure()
    assert fig.data[0].type == "scatter"
    assert fig.data[0].mode == "lines+markers"


def test_scatter_view_has_one_point_per_row():
    ds = _numeric()
    fig = ScatterChartView(ds).figure()
    assert len(fig.data[0].x) == len(ds)


@pytest.mark.parametrize("view_cls", [PieChartView, BarChartView, LineChartView, ScatterChartView])
def test_empty_dataset_renders_message_figure(view_cls):
    fig = view_cls(Dataset.empty("none.csv")).figure()

    assert len(fig.data) == 0
    assert fig.layout.title.text == NO_DATA_MESSAGE


def test_filtered_subset_keeps_parent_descriptor():
    ds = _boolean()
    only_no = ds.subset([False, False, True])

    assert PieChartView(only_no).compute_data() == [
        {"label": "Yes", "value": 0},
        {"label": "No", "value": 1},
    ]


def test_registry_builds_every_chart_kind():
    registry = build_chart_registry()

    assert [cls.id for cls in registry.all_classes()] == [k.value for k in ChartKind]
    assert isinstance(registry.create("bar", _numeric()), BarChartView)
    assert "scatter" in registry
