from .base_view import BaseView
from .chart_views import BarChartView, ChartView, LineChartView, PieChartView, ScatterChartView
from .map_view import MapView
from .view_registry import ViewRegistry

__all__ = [
    "BaseView",
    "ChartView",
    "PieChartView",
    "BarChartView",
    "LineChartView",
    "ScatterChartView",
    "MapView",
    "ViewRegistry",
    "build_chart_registry",
]


def build_chart_registry() -> ViewRegistry:
    """Registry holding one view per chart kind."""
    registry = ViewRegistry()
    for view_cls in (PieChartView, BarChartView, LineChartView, ScatterChartView):
        registry.register(view_cls)
    return registry
