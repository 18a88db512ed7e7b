from __future__ import annotations

from typing import Optional

from geo_browser.core.format_detection import ScoreKind
from geo_browser.core.selector import Selector
from geo_browser.core.values import is_blank, is_false_literal, is_true_literal, parse_score


def within_bounds(number: float, selector: Selector) -> bool:
    if selector.min is not None and number < selector.min:
        return False
    if selector.max is not None and number > selector.max:
        return False
    return True


def retain(value: object, kind: Optional[ScoreKind], selector: Selector) -> bool:
    """
    Decide whether one score value survives the dataset's selector.

    - blank values are always rejected
    - boolean scores: true/false literals follow include_true/include_false,
      anything else is rejected
    - numeric scores: unparseable values are rejected, others must lie in
      [min, max] (inclusive)
    - categorical / unknown scores are always retained
    """
    if is_blank(value):
        return False

    if kind == ScoreKind.BOOLEAN_PAIR:
        if is_true_literal(value):
            return selector.include_true
        if is_false_literal(value):
            return selector.include_false
        return False

    if kind is not None and kind.is_numeric:
        number = parse_score(value)
        if number is None:
            return False
        return within_bounds(number, selector)

    return True
