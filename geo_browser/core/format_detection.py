from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from geo_browser.core.dataset import Dataset
from geo_browser.core.values import is_blank, is_false_literal, is_true_literal, parse_score

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 20
BOUNDED_MIN = 1.0
BOUNDED_MAX = 10.0


class ScoreKind(str, Enum):
    """Inferred semantic type of a dataset's score column."""

    BOOLEAN_PAIR = "boolean_pair"
    NUMERIC_BOUNDED = "numeric_bounded"
    NUMERIC_UNBOUNDED = "numeric_unbounded"
    CATEGORICAL = "categorical"
    UNKNOWN = "unknown"

    @property
    def is_numeric(self) -> bool:
        return self in (ScoreKind.NUMERIC_BOUNDED, ScoreKind.NUMERIC_UNBOUNDED)


@dataclass(frozen=True)
class FormatDescriptor:
    """
    Result of format detection for one dataset.

    Fields:

    - lat_col / lng_col: the canonical coordinate columns
    - score_col: the column holding the dataset's primary metric
    - score_kind: how score values are interpreted for filtering and charts
    - headers: all column names, in header order
    """

    lat_col: str
    lng_col: str
    score_col: str
    score_kind: ScoreKind
    headers: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lat_col": self.lat_col,
            "lng_col": self.lng_col,
            "score_col": self.score_col,
            "score_kind": self.score_kind.value,
            "headers": list(self.headers),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FormatDescriptor:
        return cls(
            lat_col=data["lat_col"],
            lng_col=data["lng_col"],
            score_col=data["score_col"],
            score_kind=ScoreKind(data.get("score_kind", ScoreKind.UNKNOWN.value)),
            headers=tuple(data.get("headers", ())),
        )


# -----------------------------------------------------------------------------
# Column strategies: (predicate, extractor) per role
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ColumnStrategy:
    """
    One row of the column detection table.

    `matches` is applied to lower-cased header names to collect candidates;
    `preferred` lists exact lower-cased names that win over substring matches,
    in priority order. Without an exact match the first candidate is used.
    """

    role: str
    matches: Callable[[str], bool]
    preferred: Tuple[str, ...] = ()

    def candidates(self, headers: Sequence[str]) -> List[str]:
        return [h for h in headers if self.matches(h.lower())]

    def extract(self, headers: Sequence[str]) -> Optional[str]:
        candidates = self.candidates(headers)
        if not candidates:
            return None
        for name in self.preferred:
            for header in candidates:
                if header.lower() == name:
                    return header
        return candidates[0]


def _contains_any(*tokens: str) -> Callable[[str], bool]:
    def predicate(header: str) -> bool:
        return any(token in header for token in tokens)

    return predicate


COLUMN_STRATEGIES: Tuple[ColumnStrategy, ...] = (
    ColumnStrategy("lat", _contains_any("lat"), ("lat", "latitude")),
    ColumnStrategy("lng", _contains_any("lng", "lon", "long"), ("lng", "lon", "longitude")),
    ColumnStrategy("score", _contains_any("score", "value", "rating", "grade")),
)


# -----------------------------------------------------------------------------
# Value classifiers: (predicate, label), first match wins
# -----------------------------------------------------------------------------
NUMERIC = "numeric"
TRUE_LITERAL = "true_literal"
FALSE_LITERAL = "false_literal"
CATEGORICAL_LITERAL = "categorical_literal"

# Numeric parse is tried first, so "1" / "0" classify as numbers.
VALUE_CLASSIFIERS: Tuple[Tuple[Callable[[str], bool], str], ...] = (
    (lambda v: parse_score(v) is not None, NUMERIC),
    (is_true_literal, TRUE_LITERAL),
    (is_false_literal, FALSE_LITERAL),
)


def classify_value(value: str) -> str:
    for predicate, label in VALUE_CLASSIFIERS:
        if predicate(value):
            return label
    return CATEGORICAL_LITERAL


def sample_scores(values: Iterable[object], limit: int = SAMPLE_SIZE) -> List[str]:
    """Return up to `limit` leading non-blank score values."""
    out: List[str] = []
    for value in values:
        if is_blank(value):
            continue
        out.append(str(value))
        if len(out) >= limit:
            break
    return out


def infer_score_kind(samples: Sequence[str]) -> ScoreKind:
    """Decide the score kind from already-sampled, non-blank values."""
    if not samples:
        return ScoreKind.UNKNOWN

    labels = [classify_value(v) for v in samples]
    numerics = [parse_score(v) for v, label in zip(samples, labels) if label == NUMERIC]
    has_boolean = any(label in (TRUE_LITERAL, FALSE_LITERAL) for label in labels)

    if numerics and not has_boolean:
        if all(BOUNDED_MIN <= n <= BOUNDED_MAX for n in numerics):
            return ScoreKind.NUMERIC_BOUNDED
        return ScoreKind.NUMERIC_UNBOUNDED
    if has_boolean:
        return ScoreKind.BOOLEAN_PAIR
    if CATEGORICAL_LITERAL in labels:
        return ScoreKind.CATEGORICAL
    return ScoreKind.UNKNOWN


RecordsLike = Union[Dataset, Sequence[Mapping[str, str]]]


def _headers_and_column(source: RecordsLike) -> Tuple[List[str], Callable[[str], Iterable[object]]]:
    if isinstance(source, Dataset):
        return list(source.columns), lambda col: source.frame[col].tolist()

    records = list(source)
    if not records:
        return [], lambda col: []
    headers = list(records[0].keys())
    return headers, lambda col: (r.get(col, "") for r in records)


def detect_format(source: RecordsLike) -> Optional[FormatDescriptor]:
    """
    Infer coordinate/score columns and score semantics.

    Returns None when the data has no latitude-like, longitude-like or
    score-like column (unsupported format). Never raises for odd data.
    """
    headers, column = _headers_and_column(source)
    if not headers:
        return None

    roles: Dict[str, Optional[str]] = {s.role: s.extract(headers) for s in COLUMN_STRATEGIES}
    if any(col is None for col in roles.values()):
        logger.debug("Unsupported format", extra={"headers": headers})
        return None

    score_col = roles["score"]
    kind = infer_score_kind(sample_scores(column(score_col)))

    return FormatDescriptor(
        lat_col=roles["lat"],
        lng_col=roles["lng"],
        score_col=score_col,
        score_kind=kind,
        headers=tuple(headers),
    )
