from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Optional

from geo_browser.core.format_detection import BOUNDED_MAX, BOUNDED_MIN, ScoreKind


@dataclass(frozen=True)
class Selector:
    """
    Active inclusion-range configuration for one dataset.

    Fields:

    - include_true: keep rows whose score is a true-literal (boolean datasets)
    - include_false: keep rows whose score is a false-literal (boolean datasets)
    - min / max: inclusive numeric bounds; None means the side is open

    The default is all-inclusive for bounded scores: (True, True, 1, 10).
    """

    include_true: bool = True
    include_false: bool = True
    min: Optional[float] = BOUNDED_MIN
    max: Optional[float] = BOUNDED_MAX

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Selector:
        data = data or {}
        return cls(
            include_true=bool(data.get("include_true", True)),
            include_false=bool(data.get("include_false", True)),
            min=_as_bound(data.get("min", BOUNDED_MIN)),
            max=_as_bound(data.get("max", BOUNDED_MAX)),
        )

    def clamped(self, kind: Optional[ScoreKind] = None) -> Selector:
        """
        Repair invalid bounds instead of rejecting them.

        min > max is swapped; for bounded scores both sides are clamped
        into [1, 10] and an open side is closed at the range edge.
        """
        lo, hi = self.min, self.max
        if lo is not None and hi is not None and lo > hi:
            lo, hi = hi, lo

        if kind == ScoreKind.NUMERIC_BOUNDED:
            lo = BOUNDED_MIN if lo is None else min(max(lo, BOUNDED_MIN), BOUNDED_MAX)
            hi = BOUNDED_MAX if hi is None else min(max(hi, BOUNDED_MIN), BOUNDED_MAX)

        if (lo, hi) == (self.min, self.max):
            return self
        return replace(self, min=lo, max=hi)

    def is_active(self, kind: Optional[ScoreKind] = None) -> bool:
        """True when this selector is narrower than the all-inclusive default for `kind`."""
        if kind == ScoreKind.NUMERIC_UNBOUNDED:
            return self.min is not None or self.max is not None
        return (
            not self.include_true
            or not self.include_false
            or (self.min is not None and self.min > BOUNDED_MIN)
            or (self.max is not None and self.max < BOUNDED_MAX)
        )

    def describe(self, kind: Optional[ScoreKind] = None) -> List[str]:
        """Human-readable list of the constraints this selector applies to a `kind` score."""
        parts: List[str] = []
        if not self.include_true:
            parts.append('No "Yes" values')
        if not self.include_false:
            parts.append('No "No" values')
        unbounded = kind == ScoreKind.NUMERIC_UNBOUNDED
        if self.min is not None and (unbounded or self.min > BOUNDED_MIN):
            parts.append(f"Min: {_fmt(self.min)}")
        if self.max is not None and (unbounded or self.max < BOUNDED_MAX):
            parts.append(f"Max: {_fmt(self.max)}")
        return parts


def default_selector(kind: Optional[ScoreKind] = None) -> Selector:
    """
    All-inclusive selector for a score kind.

    Unbounded numeric scores get open bounds so nothing outside 1..10 is
    hidden before the user narrows the range.
    """
    if kind == ScoreKind.NUMERIC_UNBOUNDED:
        return Selector(min=None, max=None)
    return Selector()


def _as_bound(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
