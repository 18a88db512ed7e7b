from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from geo_browser.config.model import GlobalConfig
from geo_browser.core.coordinator import Coordinator
from geo_browser.services.dataset_service import DatasetFetcher
from geo_browser.services.export_service import ExportService
from geo_browser.services.sources import DatasetSource
from geo_browser.views.view_registry import ViewRegistry


@dataclass
class AppConfig:
    config_root: Path
    global_config: GlobalConfig
    source: DatasetSource
    dataset_names: List[str] = field(default_factory=list)

    fetcher: Optional[DatasetFetcher] = None
    coordinator: Optional[Coordinator] = None
    registry: Optional[ViewRegistry] = None
    export_service: Optional[ExportService] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.coordinator is None:
            raise RuntimeError("AppConfig.coordinator must be initialized.")
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")
        if self.export_service is None:
            raise RuntimeError("AppConfig.export_service must be initialized.")
