from __future__ import annotations

import math
import re
from typing import Optional

TRUE_LITERALS = frozenset({"yes", "y", "true", "1"})
FALSE_LITERALS = frozenset({"no", "n", "false", "0"})

# Leading decimal number, optional exponent. Trailing text is ignored ("7.5 pts" -> 7.5).
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def is_blank(value: object) -> bool:
    """True for None, NaN and strings that are empty after stripping."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return str(value).strip() == ""


def parse_score(value: object) -> Optional[float]:
    """
    Parse a raw cell into a float using leading-number semantics.

    Returns None for blanks, text without a leading number and
    non-finite results.
    """
    if is_blank(value):
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        out = float(value)
        return out if math.isfinite(out) else None

    match = _LEADING_NUMBER.match(str(value))
    if match is None:
        return None
    try:
        out = float(match.group(1))
    except ValueError:
        return None
    return out if math.isfinite(out) else None


def normalise_literal(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def is_true_literal(value: object) -> bool:
    return normalise_literal(value) in TRUE_LITERALS


def is_false_literal(value: object) -> bool:
    return normalise_literal(value) in FALSE_LITERALS
