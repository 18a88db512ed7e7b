from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List

import dash
from dash import ALL, Input, Output, State, html

from geo_browser.ui.helpers import dataset_label
from geo_browser.ui.ids import IDs
from geo_browser.ui.layout.build_filter_panel import FLAG_FALSE, FLAG_TRUE, build_dataset_filter

if TYPE_CHECKING:
    from geo_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def _bound(value: Any):
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def register_filter_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    coordinator = ctx.coordinator

    # ---------------------------------------------------------
    # Filter panel: one block per selected dataset
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FILTER_CONTAINER, "children"),
        Input(IDs.Store.STATE_VERSION, "data"),
    )
    def render_filter_panel(_version):
        state = coordinator.state
        if not state.selected:
            return html.P("No datasets selected.", className="text-muted mb-0")

        return [
            build_dataset_filter(
                label=dataset_label(state, name),
                name=name,
                dataset=state.records.get(name),
                selector=state.selector_for(name),
            )
            for name in state.selected
        ]

    # ---------------------------------------------------------
    # Controls -> selectors
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.FILTER_TICK, "data"),
        Input({"type": IDs.Pattern.FILTER_FLAGS, "index": ALL}, "value"),
        Input({"type": IDs.Pattern.FILTER_RANGE, "index": ALL}, "value"),
        Input({"type": IDs.Pattern.FILTER_MIN, "index": ALL}, "value"),
        Input({"type": IDs.Pattern.FILTER_MAX, "index": ALL}, "value"),
        State({"type": IDs.Pattern.FILTER_FLAGS, "index": ALL}, "id"),
        State({"type": IDs.Pattern.FILTER_RANGE, "index": ALL}, "id"),
        State({"type": IDs.Pattern.FILTER_MIN, "index": ALL}, "id"),
        State({"type": IDs.Pattern.FILTER_MAX, "index": ALL}, "id"),
        prevent_initial_call=True,
    )
    def update_selectors(
        flag_values: List[List[str]],
        range_values: List[List[float]],
        min_values: List[Any],
        max_values: List[Any],
        flag_ids: List[dict],
        range_ids: List[dict],
        min_ids: List[dict],
        max_ids: List[dict],
    ):
        # Unchanged controls map to no-op transitions
        for cid, value in zip(flag_ids, flag_values):
            value = value or []
            coordinator.update_selector(
                cid["index"],
                include_true=FLAG_TRUE in value,
                include_false=FLAG_FALSE in value,
            )

        for cid, value in zip(range_ids, range_values):
            if not value or len(value) != 2:
                continue
            coordinator.update_selector(cid["index"], min=float(value[0]), max=float(value[1]))

        for cid, value in zip(min_ids, min_values):
            coordinator.update_selector(cid["index"], min=_bound(value))

        for cid, value in zip(max_ids, max_values):
            coordinator.update_selector(cid["index"], max=_bound(value))

        selectors = {n: s.to_dict() for n, s in coordinator.state.selectors.items()}
        logger.debug("Selectors updated", extra={"selectors": selectors})
        return coordinator.version
