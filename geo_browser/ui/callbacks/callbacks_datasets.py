from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

import dash
from dash import Input, Output, State

from geo_browser.ui.helpers import (
    ALL_DATASETS_VALUE,
    dataset_status,
    focus_options,
    focus_value,
    heatmap_options,
)
from geo_browser.ui.ids import IDs

if TYPE_CHECKING:
    from geo_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_dataset_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    coordinator = ctx.coordinator

    # ---------------------------------------------------------
    # Selection / heatmap / focus / reset -> coordinator
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.HEATMAP_CHECKLIST, "options"),
        Output(IDs.Control.HEATMAP_CHECKLIST, "value"),
        Output(IDs.Control.FOCUS_SELECT, "options"),
        Output(IDs.Control.FOCUS_SELECT, "value"),
        Output(IDs.Control.DATASET_STATUS, "children"),
        Output(IDs.Control.FETCH_POLL, "disabled"),
        Output(IDs.Store.STATE_VERSION, "data"),
        Input(IDs.Control.DATASET_CHECKLIST, "value"),
        Input(IDs.Control.HEATMAP_CHECKLIST, "value"),
        Input(IDs.Control.FOCUS_SELECT, "value"),
        Input(IDs.Control.RESET_FILTERS_BTN, "n_clicks"),
        Input(IDs.Control.FETCH_POLL, "n_intervals"),
        State(IDs.Store.STATE_VERSION, "data"),
    )
    def sync_selection(
        selected: Optional[List[str]],
        heatmap: Optional[List[str]],
        focused: Optional[str],
        _reset_clicks,
        _n_intervals,
        known_version: Optional[int],
    ):
        """
        Route control changes into the coordinator, then mirror its state
        back into the dependent controls. The poll keeps running while any
        fetch is in flight so loaded datasets show up without interaction.
        """
        trigger = dash.ctx.triggered_id

        if trigger == IDs.Control.DATASET_CHECKLIST:
            coordinator.set_selection(selected or [])
        elif trigger == IDs.Control.HEATMAP_CHECKLIST:
            included = set(heatmap or [])
            for name in coordinator.state.selected:
                coordinator.set_heatmap_inclusion(name, name in included)
        elif trigger == IDs.Control.FOCUS_SELECT:
            coordinator.set_focus(None if focused in (None, ALL_DATASETS_VALUE) else focused)
        elif trigger == IDs.Control.RESET_FILTERS_BTN:
            logger.info("Resetting filters")
            coordinator.reset_filters()

        state = coordinator.state
        poll_disabled = not state.pending
        version = coordinator.version

        if version == known_version and trigger is not None:
            no = dash.no_update
            return no, no, no, no, no, poll_disabled, no

        return (
            heatmap_options(state),
            list(state.heatmap),
            focus_options(state),
            focus_value(state),
            dataset_status(state),
            poll_disabled,
            version,
        )
