from __future__ import annotations

import pytest

from geo_browser.core.csv_parser import parse_csv
from geo_browser.core.format_detection import ScoreKind
from geo_browser.core.map_layers import (
    INITIAL_CENTER,
    INITIAL_ZOOM,
    MARKER_SIZE,
    NEUTRAL_COLOR,
    Bounds,
    data_bounds,
    fit_view,
    haversine_km,
    heat_points,
    heat_radius,
    heat_weight,
    marker_points,
    path_distance_km,
    score_color,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1", "rgb(255, 0, 0)"),
        ("5.5", "rgb(255, 255, 0)"),
        ("10", "rgb(0, 255, 0)"),
        ("42", "rgb(0, 255, 0)"),
        ("n/a", NEUTRAL_COLOR),
    ],
)
def test_bounded_score_gradient(value, expected):
    assert score_color(value, ScoreKind.NUMERIC_BOUNDED) == expected


def test_boolean_and_other_colours():
    assert score_color("Yes", ScoreKind.BOOLEAN_PAIR) == "green"
    assert score_color("no", ScoreKind.BOOLEAN_PAIR) == "red"
    assert score_color("500", ScoreKind.NUMERIC_UNBOUNDED) == NEUTRAL_COLOR
    assert score_color("good", ScoreKind.CATEGORICAL) == NEUTRAL_COLOR


def test_heat_weights_and_radius():
    assert heat_weight("yes", ScoreKind.BOOLEAN_PAIR) == 1.0
    assert heat_weight("no", ScoreKind.BOOLEAN_PAIR) == 0.5
    assert heat_weight("7", ScoreKind.NUMERIC_BOUNDED) == pytest.approx(0.7)
    assert heat_weight("x", ScoreKind.NUMERIC_BOUNDED) == 0.0
    assert heat_weight("good", ScoreKind.CATEGORICAL) == 1.0

    assert heat_radius(1) == 20
    assert heat_radius(3) == 30


def test_marker_points_skip_unparseable_coordinates():
    ds = parse_csv("lat,lng,score\n51.5,-0.1,yes\nabc,-0.2,no\n51.6,,yes\n51.7,-0.3,no", name="b.csv")

    markers = marker_points(ds)

    assert markers["lat"].tolist() == [51.5, 51.7]
    assert markers["color"].tolist() == ["green", "red"]
    assert set(markers["size"]) == {MARKER_SIZE}
    assert set(markers["dataset"]) == {"b.csv"}


def test_heat_points_carry_weights():
    ds = parse_csv("lat,lng,score\n1,2,10\n3,4,5", name="n.csv")

    heat = heat_points(ds)

    assert heat["weight"].tolist() == pytest.approx([1.0, 0.5])


def test_unsupported_dataset_has_no_points():
    ds = parse_csv("a,b\n1,2")
    assert marker_points(ds).empty
    assert heat_points(ds).empty


def test_data_bounds_and_fit_view():
    assert data_bounds([]) is None
    assert fit_view(None) == (INITIAL_CENTER, INITIAL_ZOOM)

    bounds = data_bounds([(51.0, -1.0), (52.0, 0.0), (51.5, -0.5)])
    assert bounds == Bounds(south=51.0, west=-1.0, north=52.0, east=0.0)

    center, zoom = fit_view(bounds)
    assert center == (51.5, -0.5)
    assert zoom == 8


def test_fit_view_never_exceeds_zoom_cap():
    tiny = Bounds(south=51.0, west=0.0, north=51.0001, east=0.0001)
    assert fit_view(tiny)[1] == 15
    assert fit_view(tiny, zoom_cap=12)[1] == 12

    single = data_bounds([(10.0, 20.0)])
    assert fit_view(single) == ((10.0, 20.0), 15)


def test_haversine_london_paris():
    london, paris = (51.5074, -0.1278), (48.8566, 2.3522)
    assert haversine_km(london, paris) == pytest.approx(343.5, rel=0.01)
    assert haversine_km(london, london) == 0.0


def test_path_distance_sums_segments():
    a, b, c = (0.0, 0.0), (0.0, 1.0), (0.0, 2.0)
    assert path_distance_km([a, b, c]) == pytest.approx(haversine_km(a, c))
    assert path_distance_km([a]) == 0.0
