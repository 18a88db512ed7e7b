from __future__ import annotations

from typing import Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from geo_browser.core.dataset import Dataset
from geo_browser.core.format_detection import BOUNDED_MAX, BOUNDED_MIN, ScoreKind
from geo_browser.core.selector import Selector, default_selector
from geo_browser.ui.ids import IDs, filter_control_id

FLAG_TRUE = "true"
FLAG_FALSE = "false"


def build_filter_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Span("Filters", className="fw-semibold"),
                        dbc.Button(
                            "Reset",
                            id=IDs.Control.RESET_FILTERS_BTN,
                            color="secondary",
                            size="sm",
                            outline=True,
                            className="ms-auto",
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
            ),
            dbc.CardBody(
                html.Div(
                    id=IDs.Control.FILTER_CONTAINER,
                    children=html.P("No datasets selected.", className="text-muted mb-0"),
                ),
            ),
        ],
        className="gsb-sidebar",
    )


def _flags_control(name: str, selector: Selector) -> dbc.Checklist:
    value = []
    if selector.include_true:
        value.append(FLAG_TRUE)
    if selector.include_false:
        value.append(FLAG_FALSE)
    return dbc.Checklist(
        id=filter_control_id(IDs.Pattern.FILTER_FLAGS, name),
        options=[
            {"label": ' Include "Yes"', "value": FLAG_TRUE},
            {"label": ' Include "No"', "value": FLAG_FALSE},
        ],
        value=value,
        switch=True,
    )


def _range_control(name: str, selector: Selector) -> dcc.RangeSlider:
    return dcc.RangeSlider(
        id=filter_control_id(IDs.Pattern.FILTER_RANGE, name),
        min=BOUNDED_MIN,
        max=BOUNDED_MAX,
        step=0.5,
        value=[
            selector.min if selector.min is not None else BOUNDED_MIN,
            selector.max if selector.max is not None else BOUNDED_MAX,
        ],
        marks={i: str(i) for i in range(int(BOUNDED_MIN), int(BOUNDED_MAX) + 1)},
        allowCross=False,
    )


def _bound_inputs(name: str, selector: Selector) -> dbc.Row:
    return dbc.Row(
        [
            dbc.Col(
                dbc.Input(
                    id=filter_control_id(IDs.Pattern.FILTER_MIN, name),
                    type="number",
                    value=selector.min,
                    placeholder="Min",
                    debounce=True,
                    size="sm",
                ),
            ),
            dbc.Col(
                dbc.Input(
                    id=filter_control_id(IDs.Pattern.FILTER_MAX, name),
                    type="number",
                    value=selector.max,
                    placeholder="Max",
                    debounce=True,
                    size="sm",
                ),
            ),
        ],
        className="g-2",
    )


def build_dataset_filter(
    label: str,
    name: str,
    dataset: Optional[Dataset],
    selector: Optional[Selector],
) -> html.Div:
    """
    Filter controls for one selected dataset. The control type follows the
    detected score kind; pending or unsupported datasets get a note instead.
    """
    header = html.Div(label, className="fw-semibold small mb-1")

    if dataset is None:
        body = html.Small("Loading...", className="text-muted")
    elif dataset.descriptor is None:
        body = html.Small("No data or unsupported format", className="text-muted")
    else:
        kind = dataset.descriptor.score_kind
        selector = selector or default_selector(kind)
        if kind == ScoreKind.BOOLEAN_PAIR:
            body = _flags_control(name, selector)
        elif kind == ScoreKind.NUMERIC_BOUNDED:
            body = _range_control(name, selector)
        elif kind == ScoreKind.NUMERIC_UNBOUNDED:
            body = _bound_inputs(name, selector)
        else:
            body = html.Small("No filter available for this score type", className="text-muted")

    return html.Div([header, body], className="mb-3")
