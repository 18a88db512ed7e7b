from __future__ import annotations

from typing import List, Tuple

import plotly.graph_objs as go

from geo_browser.core.aggregation import NO_LABEL, YES_LABEL, ChartKind, ChartSeries, chart_series
from geo_browser.core.format_detection import ScoreKind
from geo_browser.views.base_view import FIGURE_MARGIN, BaseView

NO_DATA_MESSAGE = "No data to display"

BOOLEAN_COLORS = {YES_LABEL: "#4caf50", NO_LABEL: "#f44336"}
SERIES_COLOR = "#3f51b5"


def _category_axis(series: ChartSeries) -> Tuple[List, List, str, str]:
    """x/y lists plus axis titles for label/value and score/count series."""
    if series and "score" in series[0]:
        return [p["score"] for p in series], [p["count"] for p in series], "Score", "Count"
    return [p["label"] for p in series], [p["value"] for p in series], "Value", "Count"


class ChartView(BaseView):
    """
    Shared behaviour of the chart row: every chart is drawn from
    `chart_series` for its chart kind.
    """

    chart_kind: ChartKind = None

    def compute_data(self) -> ChartSeries:
        return chart_series(self.dataset, self.descriptor, self.chart_kind)

    @property
    def _is_boolean(self) -> bool:
        return self.descriptor is not None and self.descriptor.score_kind == ScoreKind.BOOLEAN_PAIR

    def _bar_colors(self, labels: List) -> List[str]:
        if self._is_boolean:
            return [BOOLEAN_COLORS.get(str(label), SERIES_COLOR) for label in labels]
        return [SERIES_COLOR] * len(labels)

    def _finish(self, fig: go.Figure, x_title: str = None, y_title: str = None) -> go.Figure:
        fig.update_layout(title=self.title, margin=FIGURE_MARGIN, showlegend=self.chart_kind == ChartKind.PIE)
        if x_title:
            fig.update_xaxes(title_text=x_title)
        if y_title:
            fig.update_yaxes(title_text=y_title)
        return fig


class PieChartView(ChartView):
    id = ChartKind.PIE.value
    label = "Pie Chart"
    chart_kind = ChartKind.PIE

    def render_figure(self, data: ChartSeries) -> go.Figure:
        if not data:
            return self.empty_figure(NO_DATA_MESSAGE)
        labels = [p["label"] for p in data]
        fig = go.Figure(
            go.Pie(
                labels=labels,
                values=[p["value"] for p in data],
                marker=dict(colors=self._bar_colors(labels)) if self._is_boolean else None,
                sort=False,
            )
        )
        return self._finish(fig)


class BarChartView(ChartView):
    id = ChartKind.BAR.value
    label = "Bar Chart"
    chart_kind = ChartKind.BAR

    def render_figure(self, data: ChartSeries) -> go.Figure:
        if not data:
            return self.empty_figure(NO_DATA_MESSAGE)
        x, y, x_title, y_title = _category_axis(data)
        fig = go.Figure(go.Bar(x=x, y=y, marker_color=self._bar_colors(x)))
        return self._finish(fig, x_title, y_title)


class LineChartView(ChartView):
    id = ChartKind.LINE.value
    label = "Line Chart"
    chart_kind = ChartKind.LINE

    def render_figure(self, data: ChartSeries) -> go.Figure:
        if not data:
            return self.empty_figure(NO_DATA_MESSAGE)
        x, y, x_title, y_title = _category_axis(data)
        fig = go.Figure(go.Scatter(x=x, y=y, mode="lines+markers", line=dict(color=SERIES_COLOR)))
        return self._finish(fig, x_title, y_title)


class ScatterChartView(ChartView):
    """
    One point per filtered row: x is the row number, y the score
    (1/0 for yes/no data, the category index for categorical data).
    """

    id = ChartKind.SCATTER.value
    label = "Scatter Plot"
    chart_kind = ChartKind.SCATTER

    def render_figure(self, data: ChartSeries) -> go.Figure:
        if not data:
            return self.empty_figure(NO_DATA_MESSAGE)
        fig = go.Figure(
            go.Scatter(
                x=[p["x"] for p in data],
                y=[p["y"] for p in data],
                mode="markers",
                marker=dict(size=6, color=SERIES_COLOR),
            )
        )
        return self._finish(fig, "Row", "Score")
