from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from geo_browser.core.aggregation import ChartKind
from geo_browser.core.filtering import COMBINED_NAME
from geo_browser.ui.helpers import ALL_DATASETS_VALUE
from geo_browser.ui.ids import IDs

CHART_KIND_LABELS = {
    ChartKind.PIE: "Pie",
    ChartKind.BAR: "Bar",
    ChartKind.LINE: "Line",
    ChartKind.SCATTER: "Scatter",
}


def build_map_card() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(html.Strong("Map"), className="p-2"),
            dbc.CardBody(
                dcc.Graph(
                    id=IDs.Control.MAP_GRAPH,
                    style={"height": "520px"},
                    config={"responsive": True, "scrollZoom": True},
                ),
                className="p-0",
            ),
        ],
        className="gsb-maincard mb-3",
    )


def build_plot_panel(default_chart_kinds: List[ChartKind]) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Statistics & Charts", className="me-3"),
                        dcc.Dropdown(
                            id=IDs.Control.FOCUS_SELECT,
                            options=[{"label": COMBINED_NAME, "value": ALL_DATASETS_VALUE}],
                            value=ALL_DATASETS_VALUE,
                            clearable=False,
                            style={"minWidth": "260px"},
                            className="me-3",
                        ),
                        dbc.Checklist(
                            id=IDs.Control.CHART_KINDS,
                            options=[{"label": f" {CHART_KIND_LABELS[k]}", "value": k.value} for k in ChartKind],
                            value=[k.value for k in default_chart_kinds],
                            inline=True,
                        ),
                    ],
                    className="d-flex align-items-center flex-wrap",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    html.Div(id=IDs.Control.FILTER_STATUS, className="small text-muted mb-2"),
                    html.Div(id=IDs.Control.STATS_CONTAINER, className="mb-2"),
                    dcc.Loading(
                        type="default",
                        children=html.Div(id=IDs.Control.CHART_CONTAINER),
                    ),
                    html.Div(
                        [
                            dbc.Button(
                                "Download filtered data (CSV)",
                                id=IDs.Control.DOWNLOAD_DATA_BTN,
                                color="secondary",
                                size="sm",
                                className="mt-2 ms-auto me-2",
                            ),
                            dcc.Download(id=IDs.Control.DOWNLOAD_DATA),
                        ],
                        className="d-flex justify-content-end align-items-center",
                    ),
                ],
                className="gsb-main-body",
            ),
        ],
        className="gsb-maincard",
    )
