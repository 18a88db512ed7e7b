from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from geo_browser.core.format_detection import FormatDescriptor

# Marker meaning "descriptor not computed yet"; None is a valid result (unsupported).
_DETECT: Any = object()


class Dataset:
    """
    Unified dataset abstraction used throughout the browser.

    Includes:
    - A name plus an ordered table of string cells (one row per record)
    - Lazily detected, cached FormatDescriptor
    - Order-preserving, non-mutating subsetting
    - Record (dict) views for export and for callers that want plain mappings
    """

    # -------------------------------------------------------------------------
    # Constructor
    # -------------------------------------------------------------------------
    def __init__(
        self,
        name: str,
        frame: pd.DataFrame,
        descriptor: Any = _DETECT,
        source: Optional[str] = None,
    ) -> None:
        self.name = name
        self.frame = frame.reset_index(drop=True)
        self.source = source
        self._descriptor = descriptor

    # -------------------------------------------------------------------------
    # Alternate constructors
    # -------------------------------------------------------------------------
    @classmethod
    def empty(cls, name: str, columns: Sequence[str] = ()) -> Dataset:
        """An empty dataset; used when a fetch fails or a filter removes every row."""
        return cls(name=name, frame=pd.DataFrame(columns=list(columns), dtype=object))

    @classmethod
    def from_records(
        cls,
        name: str,
        records: Iterable[Mapping[str, Any]],
        columns: Optional[Sequence[str]] = None,
        source: Optional[str] = None,
    ) -> Dataset:
        records = list(records)
        if columns is None:
            columns = list(records[0].keys()) if records else []
        frame = pd.DataFrame.from_records(records, columns=list(columns))
        return cls(name=name, frame=_normalise_cells(frame), source=source)

    @classmethod
    def concat(cls, name: str, datasets: Sequence[Dataset]) -> Dataset:
        """
        Concatenate datasets in the given order.

        Columns are the union in first-seen order; cells missing from a
        dataset's schema become "". The descriptor is detected afresh.
        """
        columns: List[str] = []
        for ds in datasets:
            for col in ds.columns:
                if col not in columns:
                    columns.append(col)

        frames = [ds.frame for ds in datasets if len(ds) > 0]
        if not frames:
            return cls.empty(name, columns)

        frame = pd.concat(frames, ignore_index=True, sort=False).reindex(columns=columns)
        return cls(name=name, frame=_normalise_cells(frame))

    # -------------------------------------------------------------------------
    # Format descriptor (cached)
    # -------------------------------------------------------------------------
    @property
    def descriptor(self) -> Optional[FormatDescriptor]:
        """
        Detected format for this dataset, or None when unsupported.

        Computed once per Dataset; subsets inherit their parent's descriptor.
        """
        if self._descriptor is _DETECT:
            from geo_browser.core.format_detection import detect_format

            self._descriptor = detect_format(self)
        return self._descriptor

    # -------------------------------------------------------------------------
    # Subsetting
    # -------------------------------------------------------------------------
    def subset(self, mask: Sequence[bool] | np.ndarray | pd.Series) -> Dataset:
        """Return a new Dataset with the rows where mask is True, order preserved."""
        mask = np.asarray(mask, dtype=bool)
        if mask.shape[0] != len(self.frame):
            raise ValueError(
                f"Mask length {mask.shape[0]} does not match dataset '{self.name}' ({len(self.frame)} rows)"
            )
        return Dataset(
            name=self.name,
            frame=self.frame.loc[mask].copy(),
            descriptor=self.descriptor,
            source=self.source,
        )

    # -------------------------------------------------------------------------
    # Properties & getters
    # -------------------------------------------------------------------------
    @property
    def columns(self) -> List[str]:
        return [str(c) for c in self.frame.columns]

    @property
    def records(self) -> List[Dict[str, str]]:
        """Rows as plain column -> value dicts, in dataset order."""
        return self.frame.to_dict(orient="records")

    def column(self, name: str) -> pd.Series:
        """Return a column as strings; an all-empty Series if the column is missing."""
        if name not in self.frame.columns:
            return pd.Series([""] * len(self.frame), index=self.frame.index, dtype=object)
        return self.frame[name]

    @property
    def is_empty(self) -> bool:
        return len(self.frame) == 0

    def __len__(self) -> int:
        return len(self.frame)

    def __repr__(self) -> str:
        return f"Dataset(name={self.name!r}, rows={len(self.frame)}, columns={self.columns!r})"


def _normalise_cells(frame: pd.DataFrame) -> pd.DataFrame:
    """Every cell becomes a str; missing cells become ""."""
    frame = frame.astype(object).where(frame.notna(), "")
    return frame.apply(lambda col: col.map(str)) if len(frame) else frame.astype(object)
