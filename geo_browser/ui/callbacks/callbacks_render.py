from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

import dash
import dash_bootstrap_components as dbc
import plotly.graph_objs as go
from dash import Input, Output, dcc, html

from geo_browser.core.aggregation import ChartKind, summary_statistics
from geo_browser.core.dataset import Dataset
from geo_browser.ui.helpers import stats_cards
from geo_browser.ui.ids import IDs
from geo_browser.ui.layout.build_dataset_panel import MAP_OPT_HEATMAP, MAP_OPT_MARKERS
from geo_browser.views.base_view import message_figure
from geo_browser.views.map_view import MapView

if TYPE_CHECKING:
    from geo_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helper: Error Figures
# -----------------------------------------------------------------------------
def _error_figure(details: str) -> go.Figure:
    return message_figure(f"Something went wrong while rendering this view. {details}")


def _chart_graphs(ctx: AppConfig, dataset: Dataset, kinds: List[str]) -> List[dbc.Col]:
    cols = []
    for kind in kinds:
        try:
            view = ctx.registry.create(ChartKind(kind).value, dataset)
            fig = view.figure()
        except Exception:
            logger.exception("Error rendering chart", extra={"chart_kind": kind, "dataset": dataset.name})
            fig = _error_figure("See the server log for details.")
        cols.append(
            dbc.Col(
                dcc.Graph(figure=fig, style={"height": "340px"}, config={"responsive": True}),
                md=6,
                className="mb-3",
            )
        )
    return cols


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    coordinator = ctx.coordinator
    cfg = ctx.global_config

    # ---------------------------------------------------------
    # Map: visible datasets (markers) + heatmap subset (density)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.MAP_GRAPH, "figure"),
        Input(IDs.Store.STATE_VERSION, "data"),
        Input(IDs.Store.FILTER_TICK, "data"),
        Input(IDs.Control.MAP_OPTIONS, "value"),
    )
    def update_map(_version, _tick, map_options: Optional[List[str]]):
        map_options = map_options or []
        state = coordinator.state
        try:
            view = MapView(
                list(coordinator.filtered_all().values()),
                coordinator.heatmap_datasets(),
                show_markers=MAP_OPT_MARKERS in map_options,
                show_heatmap=MAP_OPT_HEATMAP in map_options,
                radius_level=cfg.heatmap_radius_level,
                zoom_cap=cfg.map_zoom_cap,
                # Refit only when the selection changes, not on every filter tweak
                uirevision="|".join(state.selected),
            )
            return view.figure()
        except Exception:
            logger.exception("Error in update_map", extra={"selected": list(state.selected)})
            return _error_figure("See the server log for details.")

    # ---------------------------------------------------------
    # Statistics + charts for the focused / combined dataset
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.STATS_CONTAINER, "children"),
        Output(IDs.Control.CHART_CONTAINER, "children"),
        Output(IDs.Control.FILTER_STATUS, "children"),
        Input(IDs.Store.STATE_VERSION, "data"),
        Input(IDs.Store.FILTER_TICK, "data"),
        Input(IDs.Control.CHART_KINDS, "value"),
    )
    def update_stats_and_charts(_version, _tick, chart_kinds: Optional[List[str]]):
        state = coordinator.state
        if not state.selected:
            return None, html.P("Select a dataset to see charts.", className="text-muted"), None

        dataset = coordinator.stats_dataset()
        logger.info(
            "render_start",
            extra={"dataset": dataset.name, "rows": len(dataset), "chart_kinds": chart_kinds or []},
        )

        try:
            summary = summary_statistics(dataset)
        except Exception:
            logger.exception("Error computing statistics", extra={"dataset": dataset.name})
            summary = None

        status = coordinator.describe_filters()
        status_children = html.Span([html.Strong("Active filters: "), status]) if status else None

        charts = _chart_graphs(ctx, dataset, chart_kinds or [])
        return stats_cards(summary), dbc.Row(charts), status_children
