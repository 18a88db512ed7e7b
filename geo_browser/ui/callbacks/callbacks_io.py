from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, dcc, exceptions

from geo_browser.ui.ids import IDs

if TYPE_CHECKING:
    from geo_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_io_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # CSV download of exactly what the statistics panel shows
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_DATA, "data"),
        Input(IDs.Control.DOWNLOAD_DATA_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def download_filtered_csv(n_clicks):
        if not n_clicks:
            raise exceptions.PreventUpdate

        dataset = ctx.coordinator.stats_dataset()
        result = ctx.export_service.export_filtered(dataset)
        if result is None:
            raise exceptions.PreventUpdate

        logger.info("Sending CSV export", extra={"export_file": result.filename, "rows": result.n_rows})
        return dcc.send_string(result.content, result.filename)
