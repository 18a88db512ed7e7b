from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from geo_browser.core.aggregation import ChartKind

SOURCE_LOCAL = "local"
SOURCE_HTTP = "http"


@dataclass(frozen=True)
class SourceConfig:
    """
    Where datasets are listed and fetched from.

    - type "local": every *.csv under `root`
    - type "http": a server exposing /api/csv-files and /data/<name> under `base_url`
    """
    type: str = SOURCE_LOCAL
    root: Optional[Path] = None
    base_url: Optional[str] = None
    timeout: float = 30.0

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> SourceConfig:
        root = raw.get("root")
        return cls(
            type=str(raw.get("type", SOURCE_LOCAL)).lower(),
            root=Path(root) if root else None,
            base_url=raw.get("base_url"),
            timeout=float(raw.get("timeout", 30.0)),
        )


@dataclass
class GlobalConfig:
    ui_title: str = "Geo Score Browser"
    source: SourceConfig = field(default_factory=lambda: SourceConfig(root=Path("data")))
    default_chart_kinds: List[ChartKind] = field(default_factory=lambda: [ChartKind.PIE, ChartKind.BAR])
    fetch_workers: int = 4
    heatmap_radius_level: int = 2
    map_zoom_cap: int = 15
