from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import html

from geo_browser.ui.helpers import dataset_options
from geo_browser.ui.ids import IDs

MAP_OPT_MARKERS = "markers"
MAP_OPT_HEATMAP = "heatmap"


def build_dataset_panel(dataset_names: List[str]) -> dbc.Card:
    if dataset_names:
        picker = dbc.Checklist(
            id=IDs.Control.DATASET_CHECKLIST,
            options=dataset_options(dataset_names),
            value=[],
            className="mb-2",
        )
    else:
        picker = html.Div(
            [
                html.P("No datasets found.", className="text-muted mb-0"),
                # Keeps the selection callback wired when the source is empty
                dbc.Checklist(id=IDs.Control.DATASET_CHECKLIST, options=[], value=[]),
            ]
        )

    return dbc.Card(
        [
            dbc.CardHeader("Datasets", className="fw-semibold"),
            dbc.CardBody(
                [
                    picker,
                    html.Div(id=IDs.Control.DATASET_STATUS, className="small text-muted mb-2"),
                    html.Hr(),
                    html.Label("Map layers", className="form-label"),
                    dbc.Checklist(
                        id=IDs.Control.MAP_OPTIONS,
                        options=[
                            {"label": " Markers", "value": MAP_OPT_MARKERS},
                            {"label": " Heatmap", "value": MAP_OPT_HEATMAP},
                        ],
                        value=[MAP_OPT_MARKERS],
                        switch=True,
                        className="mb-2",
                    ),
                    html.Label("Heatmap datasets", className="form-label"),
                    dbc.Checklist(
                        id=IDs.Control.HEATMAP_CHECKLIST,
                        options=[],
                        value=[],
                        className="mb-2",
                    ),
                ]
            ),
        ],
        className="gsb-sidebar mb-3",
    )
