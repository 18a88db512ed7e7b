from __future__ import annotations

import pytest

from geo_browser.core.dataset import Dataset
from geo_browser.views.chart_views import PieChartView
from geo_browser.views.view_registry import ViewRegistry


def test_register_rejects_duplicates():
    registry = ViewRegistry()
    registry.register(PieChartView)

    with pytest.raises(ValueError):
        registry.register(PieChartView)


def test_register_rejects_non_views():
    class NotAView:
        id = "nope"

    with pytest.raises(TypeError):
        ViewRegistry().register(NotAView)


def test_create_unknown_view():
    with pytest.raises(KeyError):
        ViewRegistry().create("missing", Dataset.empty("x"))
