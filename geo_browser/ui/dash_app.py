from __future__ import annotations

import atexit
import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from geo_browser.config.config_loader import build_source, load_global_config
from geo_browser.core.coordinator import Coordinator
from geo_browser.services.dataset_service import DatasetFetcher, list_datasets
from geo_browser.services.export_service import ExportService
from geo_browser.ui.callbacks.callbacks_datasets import register_dataset_callbacks
from geo_browser.ui.callbacks.callbacks_filters import register_filter_callbacks
from geo_browser.ui.callbacks.callbacks_io import register_io_callbacks
from geo_browser.ui.callbacks.callbacks_render import register_render_callbacks
from geo_browser.ui.config import AppConfig
from geo_browser.ui.layout.build_layout import build_layout
from geo_browser.views import build_chart_registry

logger = logging.getLogger(__name__)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Initialize Service Layer
    source = build_source(global_config.source)
    dataset_names = list_datasets(source)
    fetcher = DatasetFetcher(source, max_workers=global_config.fetch_workers)
    atexit.register(fetcher.shutdown, False)

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        source=source,
        dataset_names=dataset_names,
        fetcher=fetcher,
        coordinator=Coordinator(fetcher),
        registry=build_chart_registry(),
        export_service=ExportService(),
    )
    ctx.validate()

    logger.info(
        "App context ready",
        extra={"n_datasets": len(dataset_names), "source_type": global_config.source.type},
    )

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        suppress_callback_exceptions=True,
    )
    app.title = global_config.ui_title
    app.layout = build_layout(ctx)

    # Register callbacks
    register_dataset_callbacks(app, ctx)
    register_filter_callbacks(app, ctx)
    register_render_callbacks(app, ctx)
    register_io_callbacks(app, ctx)

    return app
