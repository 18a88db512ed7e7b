from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from geo_browser.config.model import SOURCE_HTTP, SOURCE_LOCAL, GlobalConfig, SourceConfig
from geo_browser.core.aggregation import ChartKind
from geo_browser.core.exceptions import ConfigError
from geo_browser.services.sources import DatasetSource, HttpDatasetSource, LocalDirectorySource

logger = logging.getLogger(__name__)

DATA_ROOT_ENV = "GEO_BROWSER_DATA_ROOT"


def _read_global_json(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        # Fallback to defaults if global.json is missing
        logger.warning(f"global.json not found at: {path}; using defaults")
        return {}
    try:
        with path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return raw


def _resolve_local_root(root: Path, config_root: Path) -> Path:
    """
    Relative data roots resolve against GEO_BROWSER_DATA_ROOT when set,
    otherwise against the config directory.
    """
    if root.is_absolute():
        return root
    data_root = os.environ.get(DATA_ROOT_ENV)
    base = Path(data_root) if data_root else config_root
    return (base / root).resolve()


def _parse_chart_kinds(raw: Any) -> list[ChartKind]:
    try:
        return [k if isinstance(k, ChartKind) else ChartKind(str(k).lower()) for k in raw]
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid default_chart_kinds {raw!r}: {e}") from e


def load_global_config(root: Path | str) -> GlobalConfig:
    """
    Load configuration from `<root>/global.json`.

    Missing keys (or a missing file) fall back to GlobalConfig defaults.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})
    raw = _read_global_json(root / "global.json")
    defaults = GlobalConfig()

    source = SourceConfig.from_raw(raw.get("source") or {"type": SOURCE_LOCAL, "root": "data"})
    if source.type == SOURCE_LOCAL:
        source = SourceConfig(
            type=SOURCE_LOCAL,
            root=_resolve_local_root(source.root or Path("data"), root),
            timeout=source.timeout,
        )
    elif source.type == SOURCE_HTTP:
        if not source.base_url:
            raise ConfigError("source.base_url is required for an http source")
    else:
        raise ConfigError(f"Unknown source type '{source.type}'")

    try:
        return GlobalConfig(
            ui_title=raw.get("ui_title", defaults.ui_title),
            source=source,
            default_chart_kinds=_parse_chart_kinds(raw.get("default_chart_kinds", defaults.default_chart_kinds)),
            fetch_workers=int(raw.get("fetch_workers", defaults.fetch_workers)),
            heatmap_radius_level=int(raw.get("heatmap_radius_level", defaults.heatmap_radius_level)),
            map_zoom_cap=int(raw.get("map_zoom_cap", defaults.map_zoom_cap)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in {root / 'global.json'}: {e}") from e


def build_source(source: SourceConfig) -> DatasetSource:
    if source.type == SOURCE_HTTP:
        return HttpDatasetSource(source.base_url, timeout=source.timeout)
    return LocalDirectorySource(source.root or Path("data"))
