from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import pandas as pd
import plotly.graph_objs as go

from geo_browser.core.dataset import Dataset
from geo_browser.core.map_layers import (
    DEFAULT_ZOOM_CAP,
    HEAT_COLUMNS,
    MARKER_COLUMNS,
    Bounds,
    data_bounds,
    fit_view,
    heat_points,
    heat_radius,
    marker_points,
)

MAP_STYLE = "open-street-map"
HEAT_COLORSCALE = [
    [0.0, "rgba(0, 0, 255, 0)"],
    [0.3, "rgb(0, 255, 255)"],
    [0.6, "rgb(0, 255, 0)"],
    [0.8, "rgb(255, 255, 0)"],
    [1.0, "rgb(255, 0, 0)"],
]


@dataclass
class MapData:
    markers: pd.DataFrame
    heat: pd.DataFrame
    bounds: Optional[Bounds]


class MapView:
    """
    Scatter markers for every visible dataset plus an optional density
    overlay for the heatmap-included datasets. The viewport is fitted to
    the drawn points, never zoomed past `zoom_cap`.
    """

    id = "map"
    label = "Map"

    def __init__(
        self,
        marker_datasets: Sequence[Dataset],
        heat_datasets: Sequence[Dataset] = (),
        *,
        show_markers: bool = True,
        show_heatmap: bool = False,
        radius_level: int = 2,
        zoom_cap: int = DEFAULT_ZOOM_CAP,
        uirevision: Optional[str] = None,
    ):
        self.marker_datasets = list(marker_datasets)
        self.heat_datasets = list(heat_datasets)
        self.show_markers = show_markers
        self.show_heatmap = show_heatmap
        self.radius_level = radius_level
        self.zoom_cap = zoom_cap
        self.uirevision = uirevision

    def compute_data(self) -> MapData:
        markers = pd.DataFrame(columns=MARKER_COLUMNS)
        heat = pd.DataFrame(columns=HEAT_COLUMNS)

        if self.show_markers:
            frames = [marker_points(ds) for ds in self.marker_datasets]
            frames = [f for f in frames if not f.empty]
            if frames:
                markers = pd.concat(frames, ignore_index=True)

        if self.show_heatmap:
            frames = [heat_points(ds) for ds in self.heat_datasets]
            frames = [f for f in frames if not f.empty]
            if frames:
                heat = pd.concat(frames, ignore_index=True)

        located = pd.concat([markers[["lat", "lng"]], heat[["lat", "lng"]]], ignore_index=True)
        bounds = data_bounds(zip(located["lat"].astype(float), located["lng"].astype(float)))
        return MapData(markers=markers, heat=heat, bounds=bounds)

    def render_figure(self, data: MapData) -> go.Figure:
        fig = go.Figure()

        if not data.heat.empty:
            fig.add_trace(
                go.Densitymap(
                    lat=data.heat["lat"],
                    lon=data.heat["lng"],
                    z=data.heat["weight"],
                    radius=heat_radius(self.radius_level),
                    colorscale=HEAT_COLORSCALE,
                    showscale=False,
                    hoverinfo="skip",
                    name="Heatmap",
                )
            )

        # One trace per dataset so the legend can toggle them
        for name, group in data.markers.groupby("dataset", sort=False):
            fig.add_trace(
                go.Scattermap(
                    lat=group["lat"],
                    lon=group["lng"],
                    mode="markers",
                    marker=dict(size=group["size"].tolist(), color=group["color"].tolist()),
                    text=[f"{name}<br>Score: {score}" for score in group["score"]],
                    hoverinfo="text",
                    name=str(name),
                )
            )

        (lat, lng), zoom = fit_view(data.bounds, self.zoom_cap)
        fig.update_layout(
            map=dict(style=MAP_STYLE, center=dict(lat=lat, lon=lng), zoom=zoom),
            margin=dict(l=0, r=0, t=0, b=0),
            showlegend=len(self.marker_datasets) > 1,
            uirevision=self.uirevision,
        )
        return fig

    def figure(self) -> go.Figure:
        return self.render_figure(self.compute_data())
