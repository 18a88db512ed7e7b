from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np

from geo_browser.core.dataset import Dataset
from geo_browser.core.format_detection import FormatDescriptor, ScoreKind
from geo_browser.core.predicate import retain
from geo_browser.core.selector import Selector

COMBINED_NAME = "All Datasets"


def _passes_through(descriptor: Optional[FormatDescriptor], selector: Optional[Selector]) -> bool:
    # Unknown kind means every sampled score was blank: show everything, unfiltered.
    return descriptor is None or selector is None or descriptor.score_kind == ScoreKind.UNKNOWN


def retain_mask(dataset: Dataset, selector: Selector, descriptor: Optional[FormatDescriptor] = None) -> np.ndarray:
    """Boolean mask of the rows in `dataset` retained by `selector`."""
    descriptor = descriptor if descriptor is not None else dataset.descriptor
    if _passes_through(descriptor, selector):
        return np.ones(len(dataset), dtype=bool)

    kind = descriptor.score_kind
    scores = dataset.column(descriptor.score_col)
    return np.fromiter((retain(v, kind, selector) for v in scores), dtype=bool, count=len(scores))


def filter_dataset(dataset: Dataset, selectors_by_name: Mapping[str, Selector]) -> Dataset:
    """
    Apply the dataset's registered selector.

    Order-preserving and non-mutating: a new Dataset is returned. Datasets
    with no descriptor, or with no selector registered under their name,
    pass through unfiltered.
    """
    return apply_selector(dataset, selectors_by_name.get(dataset.name))


def apply_selector(dataset: Dataset, selector: Optional[Selector]) -> Dataset:
    if _passes_through(dataset.descriptor, selector):
        return dataset
    return dataset.subset(retain_mask(dataset, selector))


def filter_records(
    records: Sequence[Mapping[str, str]],
    descriptor: Optional[FormatDescriptor],
    selector: Optional[Selector],
) -> List[Dict[str, str]]:
    """Same contract as filter_dataset over plain record mappings."""
    if _passes_through(descriptor, selector):
        return [dict(r) for r in records]
    kind = descriptor.score_kind
    return [dict(r) for r in records if retain(r.get(descriptor.score_col, ""), kind, selector)]


def filter_combined(
    datasets_by_name: Mapping[str, Dataset],
    selectors_by_name: Mapping[str, Selector],
    name: str = COMBINED_NAME,
) -> Dataset:
    """
    Filter each dataset individually, then concatenate in insertion order.

    Used for whole-corpus views when no single dataset is focused.
    """
    filtered = [apply_selector(ds, selectors_by_name.get(key)) for key, ds in datasets_by_name.items()]
    return Dataset.concat(name, filtered)
