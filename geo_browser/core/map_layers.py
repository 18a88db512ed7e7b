"""
Map-facing derivations over filtered rows: marker colours, heat weights,
data bounds for fitting the viewport, and great-circle distances for the
measurement tool.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import pandas as pd

from geo_browser.core.dataset import Dataset
from geo_browser.core.format_detection import BOUNDED_MAX, BOUNDED_MIN, FormatDescriptor, ScoreKind
from geo_browser.core.values import is_true_literal, parse_score

MARKER_SIZE = 6
NEUTRAL_COLOR = "#cccccc"
EARTH_RADIUS_KM = 6371.0

INITIAL_CENTER = (20.0, 0.0)
INITIAL_ZOOM = 2
DEFAULT_ZOOM_CAP = 15

MARKER_COLUMNS = ["lat", "lng", "score", "color", "size", "dataset"]
HEAT_COLUMNS = ["lat", "lng", "weight", "dataset"]


@dataclass(frozen=True)
class Bounds:
    south: float
    west: float
    north: float
    east: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.south + self.north) / 2.0, (self.west + self.east) / 2.0


# -----------------------------------------------------------------------------
# Per-value styling
# -----------------------------------------------------------------------------
def score_color(value: object, kind: Optional[ScoreKind]) -> str:
    """
    Marker colour for one score.

    Boolean: true -> green, anything else -> red. Bounded numeric: a
    red (1) -> yellow (5.5) -> green (10) gradient. Everything else grey.
    """
    if kind == ScoreKind.BOOLEAN_PAIR:
        return "green" if is_true_literal(value) else "red"

    if kind == ScoreKind.NUMERIC_BOUNDED:
        number = parse_score(value)
        if number is None:
            return NEUTRAL_COLOR
        normalised = (number - BOUNDED_MIN) / (BOUNDED_MAX - BOUNDED_MIN)
        normalised = min(max(normalised, 0.0), 1.0)
        if normalised < 0.5:
            red, green = 255, round(2 * 255 * normalised)
        else:
            red, green = round(255 * (2 - 2 * normalised)), 255
        return f"rgb({red}, {green}, 0)"

    return NEUTRAL_COLOR


def heat_weight(value: object, kind: Optional[ScoreKind]) -> float:
    if kind == ScoreKind.BOOLEAN_PAIR:
        return 1.0 if is_true_literal(value) else 0.5
    if kind == ScoreKind.NUMERIC_BOUNDED:
        number = parse_score(value)
        return 0.0 if number is None else number / BOUNDED_MAX
    return 1.0


def heat_radius(level: int) -> int:
    return max(20, int(level) * 10)


# -----------------------------------------------------------------------------
# Layer frames
# -----------------------------------------------------------------------------
def _located_rows(dataset: Dataset, descriptor: FormatDescriptor) -> pd.DataFrame:
    lat = dataset.column(descriptor.lat_col).map(parse_score)
    lng = dataset.column(descriptor.lng_col).map(parse_score)
    frame = pd.DataFrame(
        {
            "lat": lat,
            "lng": lng,
            "score": dataset.column(descriptor.score_col),
        }
    )
    return frame[frame["lat"].notna() & frame["lng"].notna()].reset_index(drop=True)


def marker_points(dataset: Dataset, descriptor: Optional[FormatDescriptor] = None) -> pd.DataFrame:
    """One marker per row with parseable coordinates."""
    descriptor = descriptor or dataset.descriptor
    if descriptor is None or dataset.is_empty:
        return pd.DataFrame(columns=MARKER_COLUMNS)

    frame = _located_rows(dataset, descriptor)
    kind = descriptor.score_kind
    frame["color"] = frame["score"].map(lambda v: score_color(v, kind))
    frame["size"] = MARKER_SIZE
    frame["dataset"] = dataset.name
    return frame[MARKER_COLUMNS]


def heat_points(dataset: Dataset, descriptor: Optional[FormatDescriptor] = None) -> pd.DataFrame:
    """Weighted heat locations per row with parseable coordinates."""
    descriptor = descriptor or dataset.descriptor
    if descriptor is None or dataset.is_empty:
        return pd.DataFrame(columns=HEAT_COLUMNS)

    frame = _located_rows(dataset, descriptor)
    kind = descriptor.score_kind
    frame["weight"] = frame["score"].map(lambda v: heat_weight(v, kind)).astype(float)
    frame["dataset"] = dataset.name
    return frame[HEAT_COLUMNS]


# -----------------------------------------------------------------------------
# Viewport fitting
# -----------------------------------------------------------------------------
def data_bounds(points: Iterable[Tuple[float, float]]) -> Optional[Bounds]:
    lats, lngs = [], []
    for lat, lng in points:
        if lat is None or lng is None or math.isnan(lat) or math.isnan(lng):
            continue
        lats.append(lat)
        lngs.append(lng)
    if not lats:
        return None
    return Bounds(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))


def fit_view(
    bounds: Optional[Bounds],
    zoom_cap: int = DEFAULT_ZOOM_CAP,
) -> Tuple[Tuple[float, float], int]:
    """
    Centre and zoom that show `bounds`, never zoomed in past `zoom_cap`.

    Without bounds the initial centre and zoom are returned.
    """
    if bounds is None:
        return INITIAL_CENTER, INITIAL_ZOOM

    span = max(bounds.north - bounds.south, bounds.east - bounds.west)
    if span <= 0:
        return bounds.center, zoom_cap
    zoom = int(math.floor(math.log2(360.0 / span)))
    return bounds.center, max(0, min(zoom, zoom_cap))


# -----------------------------------------------------------------------------
# Measurement
# -----------------------------------------------------------------------------
def haversine_km(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Great-circle distance between two (lat, lng) points in kilometres."""
    lat1, lng1 = map(math.radians, a)
    lat2, lng2 = map(math.radians, b)
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


def path_distance_km(points: Sequence[Tuple[float, float]]) -> float:
    return sum(haversine_km(points[i - 1], points[i]) for i in range(1, len(points)))
