from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional

from geo_browser.core.csv_parser import to_csv_text
from geo_browser.core.dataset import Dataset
from geo_browser.core.filtering import apply_selector
from geo_browser.core.format_detection import ScoreKind
from geo_browser.core.selector import Selector

logger = logging.getLogger(__name__)

BOOLEAN_STEM = "yes-no-data"
NUMERIC_STEM = "numeric-data"


@dataclass(frozen=True)
class ExportResult:
    filename: str
    content: str
    n_rows: int


class ExportService:
    """
    Builds CSV downloads of filtered rows.

    Uses the same selector application as the on-screen views, so an export
    contains exactly the rows the map, charts and statistics were drawn from.
    """

    def __init__(self, today: Optional[Callable[[], date]] = None) -> None:
        self._today = today or date.today

    def filename_for(self, dataset: Dataset) -> str:
        descriptor = dataset.descriptor
        kind = descriptor.score_kind if descriptor is not None else None
        stem = BOOLEAN_STEM if kind == ScoreKind.BOOLEAN_PAIR else NUMERIC_STEM
        return f"{stem}-{self._today().isoformat()}.csv"

    def export_filtered(self, dataset: Dataset) -> Optional[ExportResult]:
        """
        Serialise an already-filtered dataset.

        Returns None when there is nothing to export (no rows or an
        unsupported format).
        """
        if dataset.is_empty or dataset.descriptor is None:
            logger.info("Nothing to export", extra={"dataset": dataset.name})
            return None

        content = to_csv_text(dataset.records, columns=dataset.columns)
        result = ExportResult(filename=self.filename_for(dataset), content=content, n_rows=len(dataset))
        logger.info("Export ready", extra={"dataset": dataset.name, "rows": result.n_rows})
        return result

    def export_csv(self, dataset: Dataset, selector: Optional[Selector]) -> Optional[ExportResult]:
        """Apply `selector` to a raw dataset, then export the surviving rows."""
        return self.export_filtered(apply_selector(dataset, selector))

    def export_records(
        self,
        records: Iterable[Mapping[str, Any]],
        selector: Optional[Selector],
        name: str = "export",
    ) -> Optional[ExportResult]:
        """Export plain record mappings; the format is detected from the records."""
        return self.export_csv(Dataset.from_records(name, records), selector)
