from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc

from geo_browser.ui.ids import IDs
from geo_browser.ui.layout.build_dataset_panel import build_dataset_panel
from geo_browser.ui.layout.build_filter_panel import build_filter_panel
from geo_browser.ui.layout.build_navbar import build_navbar
from geo_browser.ui.layout.build_plot_panel import build_map_card, build_plot_panel

FETCH_POLL_MS = 500


def build_layout(ctx: "AppConfig"):
    cfg = ctx.global_config

    return dbc.Container(
        fluid=True,
        className="gsb-root",
        children=[
            build_navbar(cfg),

            # App-level stores
            dcc.Store(id=IDs.Store.STATE_VERSION, data=0),
            dcc.Store(id=IDs.Store.FILTER_TICK, data=0),
            dcc.Interval(id=IDs.Control.FETCH_POLL, interval=FETCH_POLL_MS, disabled=True),

            dbc.Row(
                [
                    dbc.Col(
                        [
                            build_dataset_panel(ctx.dataset_names),
                            build_filter_panel(),
                        ],
                        md=3,
                        className="mt-2",
                    ),
                    dbc.Col(
                        [
                            build_map_card(),
                            build_plot_panel(cfg.default_chart_kinds),
                        ],
                        md=9,
                        className="mt-2",
                    ),
                ],
                className="gx-3",
            ),
        ],
    )
