from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from geo_browser.core.dataset import Dataset
from geo_browser.core.format_detection import FormatDescriptor, ScoreKind
from geo_browser.core.values import is_blank, is_false_literal, is_true_literal, parse_score

CATEGORY_CAP = 10
UNKNOWN_LABEL = "Unknown"
YES_LABEL = "Yes"
NO_LABEL = "No"

ChartSeries = List[Dict[str, Any]]
RecordsLike = Union[Dataset, Sequence[Mapping[str, str]]]


class ChartKind(str, Enum):
    PIE = "pie"
    BAR = "bar"
    LINE = "line"
    SCATTER = "scatter"


@dataclass(frozen=True)
class NumericSummary:
    count: int
    mean: float
    median: float
    std_dev: float
    min: float
    max: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BooleanSummary:
    count: int
    true_count: int
    false_count: int
    true_percent: float
    false_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def round_half_up(value: float, ndigits: int = 0) -> float:
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def _as_dataset(data: RecordsLike) -> Dataset:
    if isinstance(data, Dataset):
        return data
    return Dataset.from_records("", data)


def _resolve(data: RecordsLike, descriptor: Optional[FormatDescriptor]) -> tuple[Dataset, Optional[FormatDescriptor]]:
    ds = _as_dataset(data)
    return ds, descriptor if descriptor is not None else ds.descriptor


# -----------------------------------------------------------------------------
# Chart series
# -----------------------------------------------------------------------------
def chart_series(
    data: RecordsLike,
    descriptor: Optional[FormatDescriptor],
    chart_kind: ChartKind | str,
) -> ChartSeries:
    """
    Turn filtered rows into a plot-ready series for one chart kind.

    Shapes:
    - boolean pie/bar/line: [{"label": "Yes", "value": n}, {"label": "No", "value": m}]
    - numeric pie: [{"label": "Value 3", "value": n}, ...] ascending
    - numeric bar/line: [{"score": 3, "count": n}, ...] ascending
    - categorical pie/bar/line: [{"label": v, "value": n}, ...] descending, at most 10
    - scatter (all kinds): [{"x": row_number, "y": ...}, ...]

    No rows, no descriptor or an unknown score kind give an empty series.
    """
    chart_kind = ChartKind(chart_kind)
    ds, descriptor = _resolve(data, descriptor)
    if descriptor is None or ds.is_empty:
        return []

    scores = ds.column(descriptor.score_col)
    kind = descriptor.score_kind

    if kind == ScoreKind.BOOLEAN_PAIR:
        return _boolean_series(scores, chart_kind)
    if kind.is_numeric:
        return _numeric_series(scores, chart_kind)
    if kind == ScoreKind.CATEGORICAL:
        return _categorical_series(scores, chart_kind)
    return []


def _boolean_series(scores: pd.Series, chart_kind: ChartKind) -> ChartSeries:
    if chart_kind == ChartKind.SCATTER:
        return [{"x": i + 1, "y": 1 if is_true_literal(v) else 0} for i, v in enumerate(scores)]

    true_count = int(scores.map(is_true_literal).sum())
    false_count = int(scores.map(is_false_literal).sum())
    return [
        {"label": YES_LABEL, "value": true_count},
        {"label": NO_LABEL, "value": false_count},
    ]


def _numeric_series(scores: pd.Series, chart_kind: ChartKind) -> ChartSeries:
    parsed = [(i + 1, parse_score(v)) for i, v in enumerate(scores)]
    parsed = [(row, n) for row, n in parsed if n is not None]

    if chart_kind == ChartKind.SCATTER:
        return [{"x": row, "y": n} for row, n in parsed]
    if not parsed:
        return []

    buckets = pd.Series([int(round_half_up(n)) for _, n in parsed]).value_counts().sort_index()
    if chart_kind == ChartKind.PIE:
        return [{"label": f"Value {int(score)}", "value": int(count)} for score, count in buckets.items()]
    return [{"score": int(score), "count": int(count)} for score, count in buckets.items()]


def _categorical_series(scores: pd.Series, chart_kind: ChartKind) -> ChartSeries:
    labels = scores.map(lambda v: UNKNOWN_LABEL if is_blank(v) else str(v))

    if chart_kind == ChartKind.SCATTER:
        categories = list(dict.fromkeys(labels))
        code = {label: idx for idx, label in enumerate(categories)}
        return [{"x": i + 1, "y": code[label]} for i, label in enumerate(labels)]

    # groupby(sort=False) keeps first-seen order, the stable sort keeps it for ties
    counts = (
        labels.groupby(labels, sort=False)
        .size()
        .sort_values(ascending=False, kind="stable")
        .head(CATEGORY_CAP)
    )
    return [{"label": label, "value": int(count)} for label, count in counts.items()]


# -----------------------------------------------------------------------------
# Summary statistics
# -----------------------------------------------------------------------------
def population_std(values: np.ndarray, center: float) -> float:
    """Population standard deviation (divide by N) around a given center."""
    if values.size == 0:
        return 0.0
    return float(math.sqrt(np.mean((values - center) ** 2)))


def numeric_summary(
    values: Sequence[float],
    *,
    variance_against: Literal["rounded", "exact"] = "rounded",
) -> Optional[NumericSummary]:
    """
    Summary of numeric scores.

    The mean is rounded to 2 decimals. By default the standard deviation is
    computed around that rounded mean; pass variance_against="exact" to use
    the unrounded mean instead.
    """
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return None

    exact_mean = float(arr.mean())
    mean = round_half_up(exact_mean, 2)
    center = mean if variance_against == "rounded" else exact_mean

    return NumericSummary(
        count=int(arr.size),
        mean=mean,
        median=float(np.median(arr)),
        std_dev=population_std(arr, center),
        min=float(arr.min()),
        max=float(arr.max()),
    )


def boolean_summary(scores: Sequence[object]) -> Optional[BooleanSummary]:
    """Counts over every row; blank or unrecognised scores count towards the total only."""
    count = len(scores)
    if not count:
        return None

    true_count = sum(1 for v in scores if is_true_literal(v))
    false_count = sum(1 for v in scores if is_false_literal(v))
    return BooleanSummary(
        count=count,
        true_count=true_count,
        false_count=false_count,
        true_percent=round_half_up(100.0 * true_count / count, 1),
        false_percent=round_half_up(100.0 * false_count / count, 1),
    )


def summary_statistics(
    data: RecordsLike,
    descriptor: Optional[FormatDescriptor] = None,
    *,
    variance_against: Literal["rounded", "exact"] = "rounded",
) -> Optional[Union[NumericSummary, BooleanSummary]]:
    """
    Statistics panel payload for filtered rows.

    Returns None when there is nothing to summarise (no rows, unsupported
    format, categorical or unknown scores).
    """
    ds, descriptor = _resolve(data, descriptor)
    if descriptor is None or ds.is_empty:
        return None

    scores = ds.column(descriptor.score_col)
    kind = descriptor.score_kind

    if kind == ScoreKind.BOOLEAN_PAIR:
        return boolean_summary(scores.tolist())
    if kind.is_numeric:
        numbers = [n for n in (parse_score(v) for v in scores) if n is not None]
        return numeric_summary(numbers, variance_against=variance_against)
    return None
