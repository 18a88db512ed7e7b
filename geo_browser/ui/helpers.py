from __future__ import annotations

from typing import List, Optional, Union

import dash_bootstrap_components as dbc
from dash import html

from geo_browser.core.aggregation import BooleanSummary, NumericSummary
from geo_browser.core.coordinator import DashboardState
from geo_browser.core.filtering import COMBINED_NAME
from geo_browser.core.naming import display_name

ALL_DATASETS_VALUE = "__all__"


def dataset_label(state: DashboardState, name: str) -> str:
    """Display name, with the score-kind suffix once the dataset has loaded."""
    ds = state.records.get(name)
    descriptor = ds.descriptor if ds is not None else None
    return display_name(name, descriptor.score_kind if descriptor is not None else None)


def dataset_options(names: List[str]) -> List[dict]:
    return [{"label": display_name(n), "value": n} for n in names]


def heatmap_options(state: DashboardState) -> List[dict]:
    return [{"label": dataset_label(state, n), "value": n} for n in state.selected]


def focus_options(state: DashboardState) -> List[dict]:
    options = [{"label": COMBINED_NAME, "value": ALL_DATASETS_VALUE}]
    options.extend({"label": dataset_label(state, n), "value": n} for n in state.selected)
    return options


def focus_value(state: DashboardState) -> str:
    return state.focused if state.focused is not None else ALL_DATASETS_VALUE


def dataset_status(state: DashboardState) -> Optional[str]:
    if not state.selected:
        return "Select one or more datasets to begin."
    if state.pending:
        return f"Loading {len(state.pending)} dataset(s)..."
    return None


def _stat_card(title: str, value: str, sub: Optional[str] = None) -> dbc.Col:
    body = [html.Small(title, className="text-muted"), html.H5(value, className="mb-0")]
    if sub:
        body.append(html.Small(sub, className="text-muted"))
    return dbc.Col(dbc.Card(dbc.CardBody(body, className="p-2")), xs=6, md=2, className="mb-2")


def _num(value: float) -> str:
    return f"{value:.2f}"


def stats_cards(summary: Optional[Union[NumericSummary, BooleanSummary]]) -> dbc.Row:
    if summary is None:
        return dbc.Row([_stat_card("Statistics", "N/A")])

    if isinstance(summary, BooleanSummary):
        return dbc.Row(
            [
                _stat_card("Total", str(summary.count)),
                _stat_card("Yes", str(summary.true_count), f"{summary.true_percent:.1f}%"),
                _stat_card("No", str(summary.false_count), f"{summary.false_percent:.1f}%"),
            ]
        )

    return dbc.Row(
        [
            _stat_card("Count", str(summary.count)),
            _stat_card("Mean", _num(summary.mean)),
            _stat_card("Median", _num(summary.median)),
            _stat_card("Std Dev", _num(summary.std_dev)),
            _stat_card("Min", _num(summary.min)),
            _stat_card("Max", _num(summary.max)),
        ]
    )
