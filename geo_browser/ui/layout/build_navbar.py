from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html


def build_navbar(global_config) -> dbc.Navbar:
    title = getattr(global_config, "ui_title", "Geo Score Browser")

    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(title, className="mb-0"),
                        html.Small(
                            "Map, charts and statistics for geotagged score data",
                            className="text-muted",
                        ),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
            ],
        ),
        className="gsb-navbar mb-2",
    )
