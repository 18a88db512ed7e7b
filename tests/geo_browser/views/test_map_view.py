from __future__ import annotations

from geo_browser.core.csv_parser import parse_csv
from geo_browser.core.map_layers import INITIAL_CENTER, INITIAL_ZOOM
from geo_browser.views.map_view import MapView


def _datasets():
    a = parse_csv("lat,lng,score\n51.50,-0.12,yes\n51.51,-0.13,no", name="a.csv")
    b = parse_csv("lat,lng,score\n51.52,-0.10,8\nbad,-0.11,3", name="b.csv")
    return a, b


def test_markers_one_trace_per_dataset():
    a, b = _datasets()

    fig = MapView([a, b]).figure()

    assert [t.type for t in fig.data] == ["scattermap", "scattermap"]
    assert [t.name for t in fig.data] == ["a.csv", "b.csv"]
    assert len(fig.data[1].lat) == 1
    assert fig.layout.showlegend is True


def test_heatmap_layer_is_optional():
    a, b = _datasets()

    without = MapView([a, b], [a]).figure()
    with_heat = MapView([a, b], [a], show_heatmap=True, radius_level=4).figure()

    assert "densitymap" not in [t.type for t in without.data]
    density = [t for t in with_heat.data if t.type == "densitymap"]
    assert len(density) == 1
    assert density[0].radius == 40
    assert list(density[0].z) == [1.0, 0.5]


def test_viewport_fits_points_with_zoom_cap():
    a, _ = _datasets()

    data = MapView([a], zoom_cap=4).compute_data()
    fig = MapView([a], zoom_cap=4).render_figure(data)

    assert data.bounds.south == 51.50
    assert fig.layout.map.zoom == 4
    assert fig.layout.map.center.lat == (51.50 + 51.51) / 2


def test_no_points_shows_initial_view():
    fig = MapView([], show_markers=True).figure()

    assert len(fig.data) == 0
    assert (fig.layout.map.center.lat, fig.layout.map.center.lon) == INITIAL_CENTER
    assert fig.layout.map.zoom == INITIAL_ZOOM


def test_hidden_markers_draw_nothing():
    a, _ = _datasets()
    assert len(MapView([a], show_markers=False).figure().data) == 0
